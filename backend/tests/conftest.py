import pytest

from app.config import settings
from app.store import get_service, init_store
from app.main import app


@pytest.fixture(autouse=True)
def store(tmp_path, monkeypatch):
    # every test gets its own products file and error log
    monkeypatch.setattr(settings, "ERROR_LOG_FILE", str(tmp_path / "error.log"))
    svc = init_store(str(tmp_path / "products.json"))
    app.dependency_overrides[get_service] = lambda: svc
    yield svc
    app.dependency_overrides.clear()
