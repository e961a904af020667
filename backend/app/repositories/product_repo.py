import json
import os
import tempfile
from typing import List, Optional, Tuple

from app.models.product import Product
from app.utils.logs import get_logger

log = get_logger("store", "STORE")


class ProductRepository:
    """
    Flat list of products mirrored to a JSON file.

    The whole list is rewritten on every save; there is no locking, so
    concurrent writers to the same file overwrite each other.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.products: List[Product] = []

    def load(self) -> None:
        if not os.path.exists(self.file_path):
            self.products = []
            return
        with open(self.file_path, "r", encoding="utf-8") as fh:
            content = fh.read()
        raw = json.loads(content) if content.strip() else []
        self.products = [Product.model_validate(entry) for entry in raw]
        log.debug(f"loaded {len(self.products)} products from {self.file_path}")

    def save(self) -> None:
        parent = os.path.dirname(self.file_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        payload = [p.model_dump(mode="json") for p in self.products]
        # the target file is only ever replaced whole
        fd, tmp_path = tempfile.mkstemp(dir=parent or ".", prefix=".products-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_path, self.file_path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def all(self) -> List[Product]:
        return list(self.products)

    def find(self, product_id: str) -> Tuple[Optional[Product], int]:
        for index, p in enumerate(self.products):
            if p.id == product_id:
                return p, index
        return None, -1

    def append(self, product: Product) -> Product:
        self.products.append(product)
        return product

    def replace(self, index: int, product: Product) -> Product:
        self.products[index] = product
        return product
