from datetime import datetime

import pytest

from logimaster.adapters.clock import FixedClock
from logimaster.context import ServiceContext
from logimaster.rules.loader import DEFAULT_RULES_PATH, load_rules
from logimaster.rules.models import Rules


@pytest.fixture
def test_data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def db_path(test_data_dir):
    return str(test_data_dir / "logimaster.db")


@pytest.fixture
def rules() -> Rules:
    return load_rules(DEFAULT_RULES_PATH)


@pytest.fixture
def test_ctx(db_path, rules) -> ServiceContext:
    """
    Creates a full ServiceContext backed by a temporary, migrated SQLite DB.
    """
    return ServiceContext.create(db_path, rules, clock=FixedClock(datetime(2026, 10, 19, 9, 30)))
