from app.main import app
from fastapi.testclient import TestClient

client = TestClient(app)


def test_health_ok():
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["store"] is True
    assert body["products"] == 0


def test_health_counts_deleted_products(store):
    p = store.insert_product({"name": "Hammer", "quantity": 1, "serial_number": "H-1"})
    store.delete_product(p.id)
    res = client.get("/api/health")
    assert res.json()["products"] == 1
