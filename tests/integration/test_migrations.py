import sqlite3

import pytest

from logimaster.adapters.sqlite.migrator import SQLiteMigrator


def _tables(db_path):
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_migrations_create_schema(db_path):
    applied = SQLiteMigrator(db_path).run_migrations()

    assert applied == ["0001_initial.sql"]
    assert {"records", "company_profile", "_migrations"} <= _tables(db_path)


def test_migrations_are_idempotent(db_path):
    migrator = SQLiteMigrator(db_path)
    migrator.run_migrations()

    assert migrator.run_migrations() == []


def test_company_profile_is_single_row(db_path):
    SQLiteMigrator(db_path).run_migrations()
    conn = sqlite3.connect(db_path)
    try:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO company_profile (id, data_json, updated_at) VALUES (2, '{}', 'x')"
            )
    finally:
        conn.close()
