import json
from datetime import datetime

from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

DRILL = {"name": "Cordless Drill", "quantity": 5, "serial_number": "DRL-1"}


def _ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _add(**overrides):
    res = client.post("/api/products", json={**DRILL, **overrides})
    assert res.status_code == 200, res.text
    return res.json()


def test_add_product_assigns_id_and_timestamps():
    body = _add(id="caller-id", created_at="2001-01-01T00:00:00Z")
    assert body["id"] != "caller-id"
    assert body["name"] == "Cordless Drill"
    assert body["quantity"] == 5
    assert body["serial_number"] == "DRL-1"
    assert body["is_deleted"] is False
    assert body["created_at"] == body["updated_at"]
    assert _ts(body["created_at"]).year > 2001


def test_add_product_persists_to_file(store):
    body = _add()
    with open(store.repo.file_path, encoding="utf-8") as fh:
        saved = json.load(fh)
    assert [p["id"] for p in saved] == [body["id"]]
    assert saved[0]["serial_number"] == "DRL-1"


def test_add_product_validation_failure():
    res = client.post("/api/products", json={"name": "", "quantity": 2, "serial_number": "S-1"})
    assert res.status_code == 400
    assert res.json()["message"] == "Validation failed: Name is required"


def test_add_product_missing_fields():
    res = client.post("/api/products", json={})
    assert res.status_code == 400
    assert res.json()["message"] == (
        "Validation failed: Name is required, Quantity is required, Serial number is required"
    )


def test_add_product_rejects_non_integer_and_negative_quantity():
    res = client.post("/api/products", json={**DRILL, "quantity": "3"})
    assert res.status_code == 400
    assert "Quantity must be an integer" in res.json()["message"]

    res = client.post("/api/products", json={**DRILL, "quantity": -1})
    assert res.status_code == 400
    assert "Quantity must not be negative" in res.json()["message"]


def test_add_product_rejects_non_object_body():
    res = client.post("/api/products", json=["not", "an", "object"])
    assert res.status_code == 400
    body = res.json()
    assert body["status_code"] == 400
    assert body["path"] == "/api/products"


def test_list_excludes_deleted_unless_requested():
    kept = _add(name="Saw", serial_number="SAW-1")
    gone = _add(name="Level", serial_number="LVL-1")
    client.post(f"/api/products/delete/{gone['id']}")

    ids = [p["id"] for p in client.get("/api/products").json()]
    assert ids == [kept["id"]]

    res = client.get("/api/products", params={"include_deleted": "true"})
    ids = [p["id"] for p in res.json()]
    assert ids == [kept["id"], gone["id"]]


def test_list_search_matches_name_case_insensitively():
    _add(name="Cordless Drill", serial_number="A")
    _add(name="Drill Bits", serial_number="B")
    _add(name="Hammer", serial_number="C")

    names = [p["name"] for p in client.get("/api/products", params={"q": "dRiLl"}).json()]
    assert names == ["Cordless Drill", "Drill Bits"]

    assert len(client.get("/api/products", params={"q": "  "}).json()) == 3


def test_get_product():
    created = _add()
    res = client.get(f"/api/products/{created['id']}")
    assert res.status_code == 200
    assert res.json()["id"] == created["id"]


def test_get_unknown_product_returns_structured_404():
    res = client.get("/api/products/does-not-exist")
    assert res.status_code == 404
    body = res.json()
    assert body["status_code"] == 404
    assert body["path"] == "/api/products/does-not-exist"
    assert body["message"] == "Could not find product."
    assert "timestamp" in body


def test_update_product_merges_fields():
    created = _add()
    res = client.post(f"/api/products/{created['id']}", json={"quantity": 9})
    assert res.status_code == 200
    body = res.json()
    assert body["quantity"] == 9
    assert body["name"] == created["name"]
    assert _ts(body["updated_at"]) >= _ts(created["updated_at"])


def test_update_cannot_change_id_or_created_at():
    created = _add()
    res = client.post(
        f"/api/products/{created['id']}",
        json={"id": "other", "created_at": "2001-01-01T00:00:00Z", "name": "Drill v2"},
    )
    body = res.json()
    assert body["id"] == created["id"]
    assert body["created_at"] == created["created_at"]
    assert body["name"] == "Drill v2"


def test_update_validation_failure_leaves_record_untouched():
    created = _add()
    res = client.post(f"/api/products/{created['id']}", json={"serial_number": ""})
    assert res.status_code == 400
    assert res.json()["message"] == "Validation failed: Serial number is required"
    assert client.get(f"/api/products/{created['id']}").json() == created


def test_update_unknown_product():
    res = client.post("/api/products/nope", json={"quantity": 1})
    assert res.status_code == 404


def test_delete_and_restore():
    created = _add()
    res = client.post(f"/api/products/delete/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Product marked as deleted successfully"}
    deleted = client.get(f"/api/products/{created['id']}").json()
    assert deleted["is_deleted"] is True
    assert _ts(deleted["updated_at"]) >= _ts(created["updated_at"])

    res = client.post(f"/api/products/restore/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Product restored successfully"}
    restored = client.get(f"/api/products/{created['id']}").json()
    assert restored["is_deleted"] is False
    assert _ts(restored["updated_at"]) >= _ts(deleted["updated_at"])


def test_delete_unknown_product():
    res = client.post("/api/products/delete/nope")
    assert res.status_code == 404
    assert res.json()["message"] == "Could not find product."


def test_restore_product_that_is_not_deleted():
    created = _add()
    res = client.post(f"/api/products/restore/{created['id']}")
    assert res.status_code == 404
    assert res.json()["message"] == "Product is not deleted"


def test_errors_are_appended_to_error_log(tmp_path):
    client.get("/api/products/missing-1")
    client.post("/api/products", json={})
    lines = (tmp_path / "error.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    timestamp, _, payload = lines[0].partition(" - ")
    entry = json.loads(payload)
    assert entry["status_code"] == 404
    assert entry["path"] == "/api/products/missing-1"
    assert entry["timestamp"] == timestamp


def test_unknown_route_uses_error_format():
    res = client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json()["message"] == "Not Found"


def test_unexpected_error_returns_500(store, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(store, "get_products", boom)
    res = TestClient(app, raise_server_exceptions=False).get("/api/products")
    assert res.status_code == 500
    body = res.json()
    assert body["status_code"] == 500
    assert body["message"] == "Internal server error"
