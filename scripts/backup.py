#!/usr/bin/env python3
"""
Database snapshot script.

Takes an online copy of the LogiMaster database and writes a manifest that
describes what the copy holds: stored and readable rows per storage key, the
company profile, and any collection the application does not know about.
The restore drill compares a restored copy against these numbers.

Usage:
    python scripts/backup.py                         # <data dir>/backups/
    python scripts/backup.py --data-dir /srv/lm --out /mnt/backups
"""

from __future__ import annotations

import argparse
import hashlib
import json
import sqlite3
from datetime import UTC, datetime
from pathlib import Path

from logimaster import __version__
from logimaster.adapters.sqlite.repos import SQLiteCompanyRepo, SQLiteRecordRepo
from logimaster.context import resolve_db_path
from logimaster.domain.entities import COLLECTION_KEYS, COMPANY, LIST_COLLECTIONS
from logimaster.rules.loader import load_rules

MANIFEST_VERSION = "2"
SNAPSHOT_PREFIX = "snapshot_"
MANIFEST_PREFIX = "snapshot_manifest_"


def file_sha256(path: Path) -> str:
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def has_app_schema(db_path: Path) -> bool:
    """True when the database holds the records and company_profile tables."""
    conn = sqlite3.connect(str(db_path))
    try:
        tables = {
            row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
    finally:
        conn.close()
    return {"records", "company_profile"} <= tables


def stored_row_counts(db_path: Path) -> dict[str, int]:
    """Raw rows per collection, including collections no model maps to."""
    conn = sqlite3.connect(str(db_path))
    try:
        rows = conn.execute("SELECT collection, COUNT(*) FROM records GROUP BY collection")
        return {collection: count for collection, count in rows}
    finally:
        conn.close()


def describe_database(db_path: Path) -> dict:
    """
    Summarise a LogiMaster database by storage key.

    Every list collection gets a stored count and a readable count (rows that
    still validate against their record model). The company profile is
    reported by presence and name, as it is printed on receipts.
    """
    stored = stored_row_counts(db_path)
    collections = {}
    for key in LIST_COLLECTIONS:
        readable = len(SQLiteRecordRepo(str(db_path), key).list_all())
        collections[key] = {"stored": stored.get(key, 0), "readable": readable}

    profile = SQLiteCompanyRepo(str(db_path)).get()
    return {
        "collections": collections,
        COMPANY: {"present": not profile.is_empty, "company_name": profile.company_name},
        "unknown_collections": sorted(set(stored) - set(COLLECTION_KEYS)),
    }


def summary_warnings(summary: dict) -> list[str]:
    warnings = []
    for key, counts in summary["collections"].items():
        unreadable = counts["stored"] - counts["readable"]
        if unreadable:
            warnings.append(f"{key}: {unreadable} unreadable row(s)")
    for key in summary["unknown_collections"]:
        warnings.append(f"{key}: collection is not part of the data model")
    if not summary[COMPANY]["present"]:
        warnings.append(f"{COMPANY}: company profile is empty")
    return warnings


def snapshot_database(db_path: Path, output_dir: Path, timestamp: str) -> Path:
    """Consistent copy via the SQLite online backup API."""
    snapshot_path = output_dir / f"{SNAPSHOT_PREFIX}{timestamp}.sqlite"
    source = sqlite3.connect(str(db_path))
    dest = sqlite3.connect(str(snapshot_path))
    try:
        source.backup(dest)
    finally:
        source.close()
        dest.close()
    return snapshot_path


def write_manifest(output_dir: Path, timestamp: str, manifest: dict) -> Path:
    manifest_path = output_dir / f"{MANIFEST_PREFIX}{timestamp}.json"
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
    return manifest_path


def run_backup(db_path: Path, backup_dir: Path) -> dict:
    """
    Snapshot the database and write its manifest.

    Returns a report dict; ``success`` is False when there was nothing to copy.
    """
    report: dict = {"success": False, "backup_dir": str(backup_dir), "warnings": []}

    if not db_path.exists():
        report["error"] = f"Database not found at {db_path}"
        return report
    if not has_app_schema(db_path):
        report["error"] = f"{db_path} has no LogiMaster tables, run `logimaster migrate` first"
        return report

    backup_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")

    snapshot_path = snapshot_database(db_path, backup_dir, timestamp)
    summary = describe_database(snapshot_path)
    warnings = summary_warnings(summary)

    manifest = {
        "manifest_version": MANIFEST_VERSION,
        "app_version": __version__,
        "timestamp_utc": timestamp,
        "created_at": datetime.now(UTC).isoformat(),
        "source": str(db_path),
        "snapshot": {
            "file": str(snapshot_path),
            "size_bytes": snapshot_path.stat().st_size,
            "sha256": file_sha256(snapshot_path),
        },
        **summary,
        "warnings": warnings,
    }
    manifest_path = write_manifest(backup_dir, timestamp, manifest)

    report.update(
        success=True,
        snapshot=str(snapshot_path),
        manifest=str(manifest_path),
        collections=summary["collections"],
        warnings=warnings,
    )
    return report


# --- CLI ---


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Snapshot the LogiMaster database.")
    parser.add_argument("--data-dir", help="Directory holding the database")
    parser.add_argument("--rules", help="Path to rules.yaml")
    parser.add_argument("--out", help="Snapshot directory (default: <data dir>/backups)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    rules = load_rules(Path(args.rules) if args.rules else None)
    db_path = Path(resolve_db_path(rules, args.data_dir))
    backup_dir = Path(args.out) if args.out else db_path.parent / rules.ops.backups.backup_dir_name

    print("=" * 60)
    print("LogiMaster: Database Snapshot")
    print("=" * 60)

    report = run_backup(db_path, backup_dir)
    if not report["success"]:
        print(f"No snapshot created: {report['error']}")
        return 1

    print(f"Snapshot: {report['snapshot']}")
    print(f"Manifest: {report['manifest']}")
    for key, counts in report["collections"].items():
        print(f"  {key:<20} {counts['readable']:>6} / {counts['stored']}")
    for warning in report["warnings"]:
        print(f"  WARNING {warning}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
