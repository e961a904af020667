from typing import Optional

from app.config import settings
from app.repositories.product_repo import ProductRepository
from app.services.product_service import ProductService

_service: Optional[ProductService] = None


def init_store(file_path: Optional[str] = None, reset: bool = False) -> ProductService:
    """
    Build the process-wide product service and load its records from disk.

    `file_path` defaults to settings.PRODUCTS_FILE. With reset=True the file is
    rewritten as an empty list before anything is served.
    """
    global _service
    repo = ProductRepository(file_path or settings.PRODUCTS_FILE)
    if reset:
        repo.save()
    repo.load()
    _service = ProductService(repo)
    return _service


def get_service() -> ProductService:
    if _service is None:
        return init_store()
    return _service
