import os

from app.store import get_service
from app.services.product_service import ProductService
from fastapi import APIRouter, Depends

router = APIRouter()


@router.get("/health", tags=["health"])
def health(svc: ProductService = Depends(get_service)):
    path = svc.repo.file_path
    if os.path.exists(path):
        store_ok = os.access(path, os.W_OK)
    else:
        parent = os.path.dirname(os.path.abspath(path))
        # save() creates missing directories
        store_ok = not os.path.exists(parent) or os.access(parent, os.W_OK)

    return {
        "status": "ok" if store_ok else "degraded",
        "store": store_ok,
        "products": len(svc.repo.all()),
    }
