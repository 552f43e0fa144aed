import os
from pathlib import Path

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.rules.loader import load_rules
from src.rules.models import Rules


@pytest.fixture
def test_data_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def rules() -> Rules:
    """The rules file shipped at the project root."""
    rules_path = Path("rules.yaml").resolve()
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def migrated_db(test_data_dir) -> str:
    """Path of a freshly migrated SQLite database."""
    db_path = os.path.join(test_data_dir, "portfolio.db")
    SQLiteMigrator(db_path, "migrations").run_migrations()
    return db_path
