import json
import logging
import sqlite3
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from logimaster.domain.entities import COLLECTION_MODELS, CompanyProfile, Record

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class _SQLiteRepoBase:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn


class SQLiteRecordRepo(_SQLiteRepoBase):
    """
    Stores one collection as JSON documents, one row per record.

    Listing order is insertion order. Saving an existing record moves it to
    the end.
    """

    def __init__(self, db_path: str, collection: str, model: type[Record] | None = None):
        super().__init__(db_path)
        self.collection = collection
        self.model = model or COLLECTION_MODELS[collection]

    def _decode(self, row: dict[str, Any]) -> Record | None:
        try:
            return self.model.model_validate(json.loads(row["data_json"]))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(
                "Skipping unreadable %s record %s: %s", self.collection, row["record_id"], e
            )
            return None

    def _insert(self, conn: sqlite3.Connection, record: Record) -> None:
        conn.execute(
            "DELETE FROM records WHERE collection = ? AND record_id = ?",
            (self.collection, record.record_id),
        )
        conn.execute(
            """
            INSERT INTO records (collection, record_id, data_json, updated_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                self.collection,
                record.record_id,
                json.dumps(record.to_storage(), ensure_ascii=False),
                _now_iso(),
            ),
        )

    def list_all(self) -> list[Record]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT record_id, data_json FROM records WHERE collection = ? ORDER BY rowid ASC",
                (self.collection,),
            ).fetchall()
        finally:
            conn.close()

        records = []
        for row in rows:
            record = self._decode(row)
            if record is not None:
                records.append(record)
        return records

    def get(self, record_id: str) -> Record | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT record_id, data_json FROM records WHERE collection = ? AND record_id = ?",
                (self.collection, str(record_id)),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            return None
        return self._decode(row)

    def save(self, record: Record) -> Record:
        conn = self._get_conn()
        try:
            self._insert(conn, record)
            conn.commit()
            return record
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def delete(self, record_id: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "DELETE FROM records WHERE collection = ? AND record_id = ?",
                (self.collection, str(record_id)),
            )
            conn.commit()
        finally:
            conn.close()

    def replace_all(self, records: list[Record]) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM records WHERE collection = ?", (self.collection,))
            for record in records:
                self._insert(conn, record)
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def clear(self) -> None:
        self.replace_all([])


class SQLiteCompanyRepo(_SQLiteRepoBase):
    """Company profile (single row)."""

    def get(self) -> CompanyProfile:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT data_json FROM company_profile WHERE id = 1").fetchone()
        finally:
            conn.close()
        if not row:
            return CompanyProfile()
        try:
            return CompanyProfile.model_validate(json.loads(row["data_json"]))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error("Unreadable company profile, using empty profile: %s", e)
            return CompanyProfile()

    def save(self, profile: CompanyProfile) -> CompanyProfile:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO company_profile (id, data_json, updated_at)
                VALUES (1, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    data_json=excluded.data_json,
                    updated_at=excluded.updated_at
                """,
                (json.dumps(profile.model_dump(by_alias=True), ensure_ascii=False), _now_iso()),
            )
            conn.commit()
            return profile
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def clear(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM company_profile")
            conn.commit()
        finally:
            conn.close()


def build_record_repos(db_path: str) -> dict[str, SQLiteRecordRepo]:
    """One repo per list collection, keyed by storage key."""
    return {key: SQLiteRecordRepo(db_path, key) for key in COLLECTION_MODELS}
