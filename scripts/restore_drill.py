#!/usr/bin/env python3
"""
Restore Drill Script.

Restores the latest database snapshot into a temporary directory and checks
it against its manifest: the hash matches, the copy opens as SQLite, the
expected tables exist, every stored record still parses as JSON, and the
per-collection counts and company profile are what the manifest recorded.
Production data is never touched.

Usage:
    python scripts/restore_drill.py --backup ./data/backups/
    python scripts/restore_drill.py --manifest ./data/backups/snapshot_manifest_*.json
"""

from __future__ import annotations

import argparse
import json
import shutil
import sqlite3
import tempfile
from pathlib import Path

from backup import MANIFEST_PREFIX, describe_database, file_sha256

from logimaster.domain.entities import COMPANY

EXPECTED_TABLES = {"records", "company_profile", "_migrations"}


# --- Verification Functions ---


def _check(results: dict, name: str, passed: bool, **details) -> bool:
    results["checks"].append({"name": name, "passed": passed, **details})
    if not passed:
        results["success"] = False
    return passed


def verify_database_backup(
    backup_path: Path, expected_hash: str | None, manifest: dict | None = None
) -> dict:
    """
    Verify a restored snapshot.

    Tests:
    1. Hash matches (if provided)
    2. File can be opened as SQLite database
    3. Schema has the expected tables
    4. Every record row holds valid JSON
    5. Collection counts and company profile match the manifest (if provided)
    """
    results: dict = {"file": str(backup_path), "checks": [], "success": True}

    if expected_hash:
        actual_hash = file_sha256(backup_path)
        _check(
            results,
            "hash_verification",
            actual_hash == expected_hash,
            expected=expected_hash,
            actual=actual_hash,
        )

    try:
        conn = sqlite3.connect(str(backup_path))
        try:
            tables = [
                row[0]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
                )
            ]
            _check(results, "sqlite_open", True, tables=tables)
            if not _check(
                results,
                "schema_valid",
                EXPECTED_TABLES <= set(tables),
                expected_tables=sorted(EXPECTED_TABLES),
            ):
                return results

            bad_rows = []
            for collection, record_id, data_json in conn.execute(
                "SELECT collection, record_id, data_json FROM records"
            ):
                try:
                    json.loads(data_json)
                except json.JSONDecodeError:
                    bad_rows.append(f"{collection}/{record_id}")
            _check(results, "records_readable", not bad_rows, bad_rows=bad_rows)
        finally:
            conn.close()
    except sqlite3.Error as e:
        _check(results, "sqlite_open", False, error=str(e))
        return results

    if manifest is not None:
        restored = describe_database(backup_path)
        mismatched = sorted(
            key
            for key, counts in manifest.get("collections", {}).items()
            if restored["collections"].get(key) != counts
        )
        _check(results, "collections_match", not mismatched, mismatched=mismatched)
        _check(
            results,
            "company_profile_match",
            restored[COMPANY] == manifest.get(COMPANY),
            expected=manifest.get(COMPANY),
            actual=restored[COMPANY],
        )

    return results


def find_manifest(backup_dir: Path) -> Path | None:
    manifests = sorted(backup_dir.glob(f"{MANIFEST_PREFIX}*.json"), reverse=True)
    return manifests[0] if manifests else None


def run_restore_drill(
    backup_dir: str | None = None,
    manifest_path: str | None = None,
) -> dict:
    """
    Run restore drill procedure.

    Returns drill report dict.
    """
    report: dict = {"success": True, "verification": None, "errors": []}

    if manifest_path:
        manifest_file: Path | None = Path(manifest_path)
    elif backup_dir:
        manifest_file = find_manifest(Path(backup_dir))
        if manifest_file is None:
            report["success"] = False
            report["errors"].append(f"No manifest found in {backup_dir}")
            return report
    else:
        report["success"] = False
        report["errors"].append("Must specify --backup or --manifest")
        return report

    print(f"Using manifest: {manifest_file}")

    try:
        with open(manifest_file, encoding="utf-8") as f:
            manifest = json.load(f)
        snapshot = manifest["snapshot"]
    except (OSError, json.JSONDecodeError, KeyError) as e:
        report["success"] = False
        report["errors"].append(f"Failed to load manifest: {e}")
        return report

    snapshot_path = Path(snapshot["file"])
    if not snapshot_path.exists():
        report["success"] = False
        report["errors"].append(f"Snapshot not found: {snapshot_path}")
        return report

    print(f"Snapshot taken: {manifest['timestamp_utc']}")
    with tempfile.TemporaryDirectory() as temp_dir:
        # Work on a restored copy so the snapshot stays pristine
        restored = Path(temp_dir) / snapshot_path.name
        shutil.copy2(snapshot_path, restored)
        result = verify_database_backup(restored, snapshot.get("sha256"), manifest)

    report["verification"] = result
    for check in result["checks"]:
        status = "PASS" if check["passed"] else "FAIL"
        print(f"  [{status}] {check['name']}")
    if not result["success"]:
        report["success"] = False

    return report


# --- CLI ---


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Verify backup integrity with a restore drill.")
    parser.add_argument("--backup", help="Snapshot directory to verify")
    parser.add_argument("--manifest", help="Specific manifest file to use")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if not args.json:
        print("=" * 60)
        print("LogiMaster: Restore Drill")
        print("=" * 60)
        print()

    report = run_restore_drill(backup_dir=args.backup, manifest_path=args.manifest)

    if args.json:
        print(json.dumps(report, indent=2))
        return 0 if report["success"] else 1

    print("=" * 60)
    if report["success"]:
        print("RESTORE DRILL PASSED: snapshot verified.")
        return 0
    print("RESTORE DRILL FAILED: Some verifications failed.")
    for error in report["errors"]:
        print(f"  - {error}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
