from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from src.api.deps import get_client_key, get_limits_store, get_session_key
from src.app_shell.config import Settings
from src.api.main import app


def test_health():
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "api"}


def identity_app() -> FastAPI:
    app_ = FastAPI()

    @app_.get("/whoami")
    def whoami(request: Request) -> dict[str, str]:
        client_key = get_client_key(request)
        return {"client": client_key, "session": get_session_key(request, client_key)}

    return app_


class TestRequestIdentity:
    def test_peer_address(self) -> None:
        data = TestClient(identity_app()).get("/whoami").json()

        assert data == {"client": "testclient", "session": "testclient"}

    def test_forwarded_for_first_hop(self) -> None:
        response = TestClient(identity_app()).get(
            "/whoami", headers={"X-Forwarded-For": " 203.0.113.7 , 10.0.0.1"}
        )

        assert response.json()["client"] == "203.0.113.7"

    def test_session_header_wins_over_cookie(self) -> None:
        response = TestClient(identity_app()).get(
            "/whoami",
            headers={"X-Session-Id": "abc", "Cookie": "session_id=from-cookie"},
        )

        assert response.json()["session"] == "abc"

    def test_session_cookie(self) -> None:
        response = TestClient(identity_app()).get(
            "/whoami", headers={"Cookie": "session_id=from-cookie"}
        )

        assert response.json()["session"] == "from-cookie"


def test_limits_store_shared_per_file(tmp_path, monkeypatch):
    """Every request for the same data dir gets the same store instance."""
    monkeypatch.setenv("PORTFOLIO_DATA_DIR", str(tmp_path))

    first = get_limits_store(Settings())
    second = get_limits_store(Settings())

    assert first is second
    first.set("client:1:contact_form_rate_limit", {"attempts": 1})
    assert (tmp_path / "kv_store.json").exists()
