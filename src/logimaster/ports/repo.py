from typing import Protocol

from logimaster.domain.entities import CompanyProfile, Record


class RecordRepoPort(Protocol):
    """One stored collection (drivers, operations, ...)."""

    collection: str

    def list_all(self) -> list[Record]:
        """All records in insertion order."""
        ...

    def get(self, record_id: str) -> Record | None:
        ...

    def save(self, record: Record) -> Record:
        """Insert or replace by record id."""
        ...

    def delete(self, record_id: str) -> None:
        ...

    def replace_all(self, records: list[Record]) -> None:
        """Swap the whole collection in one transaction."""
        ...

    def clear(self) -> None:
        ...


class CompanyRepoPort(Protocol):
    """Single-row company profile."""

    def get(self) -> CompanyProfile:
        ...

    def save(self, profile: CompanyProfile) -> CompanyProfile:
        ...

    def clear(self) -> None:
        ...


class RepoMapPort(Protocol):
    """Storage key -> collection repo (e.g. a dict built at startup)."""

    def __getitem__(self, key: str) -> RecordRepoPort:
        ...
