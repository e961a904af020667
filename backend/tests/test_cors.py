from app.main import app
from fastapi.testclient import TestClient

client = TestClient(app)

PREFLIGHT = {"Access-Control-Request-Method": "POST"}


def test_preflight_allows_frontend_origin_with_credentials():
    res = client.options(
        "/api/products", headers={"Origin": "http://localhost:4200", **PREFLIGHT}
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "http://localhost:4200"
    assert res.headers["access-control-allow-credentials"] == "true"


def test_preflight_from_unlisted_origin_gets_no_allow_header():
    res = client.options(
        "/api/products", headers={"Origin": "http://evil.example", **PREFLIGHT}
    )
    assert "access-control-allow-origin" not in res.headers


def test_simple_request_echoes_allowed_origin():
    res = client.get("/api/products", headers={"Origin": "http://localhost:4200"})
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "http://localhost:4200"
