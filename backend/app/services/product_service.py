import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.utils.logs import get_logger

log = get_logger("store", "STORE")

# fields callers may set; id and timestamps are owned by the store
EDITABLE_FIELDS = ("name", "quantity", "serial_number", "is_deleted")

_EXPECTED = {
    "name": "a string",
    "quantity": "an integer",
    "serial_number": "a string",
    "is_deleted": "a boolean",
}


class ProductStoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProductNotFound(ProductStoreError):
    status_code = 404

    def __init__(self, message: str = "Could not find product."):
        super().__init__(message)


class ProductNotDeleted(ProductStoreError):
    status_code = 404

    def __init__(self, message: str = "Product is not deleted"):
        super().__init__(message)


class ProductValidationError(ProductStoreError):
    status_code = 400

    def __init__(self, errors: List[str]):
        super().__init__(f"Validation failed: {', '.join(errors)}")
        self.errors = errors


def _describe(error: Dict[str, Any]) -> str:
    field = str(error["loc"][0]) if error.get("loc") else "product"
    label = field.replace("_", " ").capitalize()
    if error["type"] == "missing" or error.get("input") in (None, ""):
        return f"{label} is required"
    if error["type"] == "greater_than_equal":
        return f"{label} must not be negative"
    return f"{label} must be {_EXPECTED.get(field, 'valid')}"


class ProductService:
    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _bump(self, product: Product) -> datetime:
        # never move updated_at backwards, even if the clock does
        return max(self._now(), product.updated_at)

    def _validate(self, data: Dict[str, Any]) -> Product:
        try:
            return Product.model_validate(data)
        except ValidationError as e:
            messages = [_describe(err) for err in e.errors()]
            raise ProductValidationError(messages)

    def _find(self, product_id: str):
        product, index = self.repo.find(product_id)
        if product is None:
            raise ProductNotFound()
        return product, index

    def insert_product(self, data: Dict[str, Any]) -> Product:
        now = self._now()
        fields = {k: data[k] for k in EDITABLE_FIELDS if k in data}
        fields.setdefault("is_deleted", False)
        product = self._validate(
            {"id": str(uuid.uuid4()), **fields, "created_at": now, "updated_at": now}
        )
        self.repo.append(product)
        self.repo.save()
        log.info(f"inserted product id={product.id} name={product.name!r}")
        return product

    def get_products(
        self, include_deleted: bool = False, search: Optional[str] = None
    ) -> List[Product]:
        products = self.repo.all()
        if not include_deleted:
            products = [p for p in products if not p.is_deleted]
        if search and search.strip():
            term = search.lower()
            products = [p for p in products if term in p.name.lower()]
        return products

    def get_product(self, product_id: str) -> Product:
        product, _ = self._find(product_id)
        return product

    def update_product(self, product_id: str, data: Dict[str, Any]) -> Product:
        product, index = self._find(product_id)
        changes = {k: data[k] for k in EDITABLE_FIELDS if k in data}
        merged = {
            **product.model_dump(),
            **changes,
            "id": product.id,
            "created_at": product.created_at,
            "updated_at": self._bump(product),
        }
        updated = self._validate(merged)
        self.repo.replace(index, updated)
        self.repo.save()
        log.info(f"updated product id={product_id} fields={sorted(changes)}")
        return updated

    def delete_product(self, product_id: str) -> str:
        product, index = self._find(product_id)
        self.repo.replace(
            index,
            product.model_copy(update={"is_deleted": True, "updated_at": self._bump(product)}),
        )
        self.repo.save()
        log.info(f"soft-deleted product id={product_id}")
        return "Product marked as deleted successfully"

    def restore_product(self, product_id: str) -> str:
        product, index = self._find(product_id)
        if not product.is_deleted:
            raise ProductNotDeleted()
        self.repo.replace(
            index,
            product.model_copy(update={"is_deleted": False, "updated_at": self._bump(product)}),
        )
        self.repo.save()
        log.info(f"restored product id={product_id}")
        return "Product restored successfully"
