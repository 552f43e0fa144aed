from datetime import UTC, datetime
from uuid import uuid4

import pytest

from src.adapters.sqlite.repos import SQLiteProjectRepo, SQLiteVisitRepo
from src.app_shell import cli
from src.domain.entities import Project, VisitEvent


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PORTFOLIO_DATA_DIR", str(tmp_path))
    return tmp_path


def test_migrate(data_dir, capsys):
    cli.main(["migrate"])
    assert "0001_initial.sql" in capsys.readouterr().out

    cli.main(["migrate"])
    assert "up to date" in capsys.readouterr().out


def test_stats(data_dir, capsys):
    cli.main(["migrate"])
    SQLiteVisitRepo(str(data_dir / "portfolio.db")).insert(
        VisitEvent(
            page_type="project",
            visitor_id="visitor_1_abc",
            timestamp=datetime.now(UTC),
            project_id="p1",
            project_name="Weather App",
        )
    )
    capsys.readouterr()

    cli.main(["stats", "--range", "month"])

    out = capsys.readouterr().out
    assert "Total visits: 1" in out
    assert "Weather App: 1 (100.0%)" in out


def test_stats_unknown_range(data_dir):
    cli.main(["migrate"])

    with pytest.raises(SystemExit):
        cli.main(["stats", "--range", "decade"])


def test_normalize_order(data_dir, capsys):
    cli.main(["migrate"])
    repo = SQLiteProjectRepo(str(data_dir / "portfolio.db"))
    profile_id = uuid4()
    repo.save(Project(profile_id=profile_id, title="A", display_order=3))
    repo.save(Project(profile_id=profile_id, title="B", display_order=None))

    cli.main(["normalize-order", str(profile_id)])

    assert [p.display_order for p in repo.list_by_profile(profile_id)] == [1, 2]
    assert "Normalized 2 project(s)." in capsys.readouterr().out


def test_serve(data_dir, monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    cli.main(["serve", "--port", "9001"])

    assert calls == [("src.api.main:app", {"host": "127.0.0.1", "port": 9001, "reload": False})]
