"""Shared in-memory fixtures for component unit tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from logimaster.adapters.clock import FixedClock
from logimaster.domain.entities import COLLECTION_MODELS, CompanyProfile, Record

# --- Mock Repositories ---


class MockRecordRepo:
    """In-memory collection; saving moves a record to the end like SQLite does."""

    def __init__(self, collection: str) -> None:
        self.collection = collection
        self._records: dict[str, Record] = {}

    def list_all(self) -> list[Record]:
        return list(self._records.values())

    def get(self, record_id: str) -> Record | None:
        return self._records.get(str(record_id))

    def save(self, record: Record) -> Record:
        self._records.pop(record.record_id, None)
        self._records[record.record_id] = record
        return record

    def delete(self, record_id: str) -> None:
        self._records.pop(str(record_id), None)

    def replace_all(self, records: list[Record]) -> None:
        self._records = {}
        for record in records:
            self.save(record)

    def clear(self) -> None:
        self._records = {}


class MockCompanyRepo:
    def __init__(self) -> None:
        self.profile = CompanyProfile()

    def get(self) -> CompanyProfile:
        return self.profile

    def save(self, profile: CompanyProfile) -> CompanyProfile:
        self.profile = profile
        return profile

    def clear(self) -> None:
        self.profile = CompanyProfile()


@pytest.fixture
def repos() -> dict[str, MockRecordRepo]:
    return {key: MockRecordRepo(key) for key in COLLECTION_MODELS}


@pytest.fixture
def company_repo() -> MockCompanyRepo:
    return MockCompanyRepo()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 10, 19, 9, 30))
