from pathlib import Path

import pytest

from src.app_shell.config import Settings, missing_env, validate_ops_rules
from src.rules.models import Rules


def with_ops(rules: Rules, **ops) -> Rules:
    return rules.model_copy(update={"ops": rules.ops.model_copy(update=ops)})


def test_settings_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("PORTFOLIO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PORTFOLIO_RULES_PATH", str(tmp_path / "custom.yaml"))

    settings = Settings()

    assert settings.db_path == str(tmp_path / "portfolio.db")
    assert settings.kv_path == tmp_path / "kv_store.json"
    assert settings.rules_path == tmp_path / "custom.yaml"


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("PORTFOLIO_DATA_DIR", raising=False)
    monkeypatch.delenv("PORTFOLIO_RULES_PATH", raising=False)

    settings = Settings()

    assert settings.data_dir == Path("./data")
    assert settings.rules_path == settings.base_dir / "rules.yaml"


def test_required_env_present(rules, monkeypatch):
    monkeypatch.setenv("PORTFOLIO_TEST_VAR", "1")
    rules = with_ops(rules, required_env=["PORTFOLIO_TEST_VAR"])

    assert missing_env(rules) == []
    validate_ops_rules(rules, Path("."))


def test_missing_env_exits(rules, monkeypatch):
    monkeypatch.delenv("PORTFOLIO_TEST_VAR", raising=False)
    rules = with_ops(rules, required_env=["PORTFOLIO_TEST_VAR"])

    assert missing_env(rules) == ["PORTFOLIO_TEST_VAR"]
    with pytest.raises(SystemExit):
        validate_ops_rules(rules, Path("."))


def test_unknown_timezone_exits(rules):
    with pytest.raises(SystemExit):
        validate_ops_rules(with_ops(rules, timezone="Mars/Olympus_Mons"), Path("."))
