from pathlib import Path

import pytest

from logimaster.app_shell.config import ConfigurationError, validate_ops_rules
from logimaster.rules.loader import DEFAULT_RULES_PATH, load_rules


@pytest.fixture
def rules():
    return load_rules(DEFAULT_RULES_PATH)


def test_valid_config(rules, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("LOGIMASTER_DATA_DIR", str(tmp_path / "data"))
    validate_ops_rules(rules, tmp_path)


def test_missing_required_env(rules, tmp_path: Path, monkeypatch):
    monkeypatch.delenv("LOGIMASTER_SECRET", raising=False)
    rules.ops.required_env = ["LOGIMASTER_SECRET"]

    with pytest.raises(ConfigurationError, match="LOGIMASTER_SECRET"):
        validate_ops_rules(rules, tmp_path)


def test_data_path_must_be_directory(rules, tmp_path: Path, monkeypatch):
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("x")
    monkeypatch.setenv("LOGIMASTER_DATA_DIR", str(not_a_dir))

    with pytest.raises(ConfigurationError, match="not a directory"):
        validate_ops_rules(rules, tmp_path)
