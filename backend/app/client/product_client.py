from typing import Any, Callable, Dict, List, Optional

import requests

from app.config import settings
from app.utils.logs import get_logger

log = get_logger("client", "CLIENT")

Listener = Callable[[List[Dict[str, Any]]], None]


class ProductClientError(Exception):
    def __init__(self, status_code: Optional[int], message: Any):
        super().__init__(f"{status_code}: {message}" if status_code else str(message))
        self.status_code = status_code
        self.message = message


class ProductCache:
    """
    Local mirror of the server's product list.

    Subscribers are called with the current list as soon as they subscribe
    and again after every change.
    """

    def __init__(self):
        self._products: List[Dict[str, Any]] = []
        self._listeners: List[Listener] = []

    @property
    def value(self) -> List[Dict[str, Any]]:
        return [dict(p) for p in self._products]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self.value)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, products: List[Dict[str, Any]]) -> None:
        self._products = [dict(p) for p in products]
        for listener in list(self._listeners):
            listener(self.value)


class ProductClient:
    """
    HTTP client for the products API that keeps a ProductCache in sync with
    every successful call.

    `session` may be any object exposing requests-style `get`/`post`
    (a requests.Session, or FastAPI's TestClient in tests).
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 10):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.cache = ProductCache()

    @property
    def products_url(self) -> str:
        return f"{self.base_url}/api/products"

    def _call(self, method: str, url: str, action: str, **kwargs) -> Any:
        try:
            res = getattr(self.session, method)(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.error(f"Error {action}: {e}")
            raise ProductClientError(None, str(e)) from e
        if res.status_code >= 400:
            try:
                body = res.json()
            except ValueError:
                body = None
            message = body.get("message", res.text) if isinstance(body, dict) else res.text
            log.error(f"Error {action}: {res.status_code} {message}")
            raise ProductClientError(res.status_code, message)
        try:
            return res.json()
        except ValueError as e:
            log.error(f"Error {action}: {res.status_code} response is not JSON")
            raise ProductClientError(res.status_code, res.text) from e

    def load_products(self, include_deleted: bool = False) -> List[Dict[str, Any]]:
        params = {"include_deleted": "true"} if include_deleted else None
        products = self._call("get", self.products_url, "loading products", params=params)
        self.cache.set(products)
        return products

    def add_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        product = self._call("post", self.products_url, "adding product", json=data)
        self.cache.set(self.cache.value + [product])
        return product

    def update_product(self, product_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        product = self._call(
            "post", f"{self.products_url}/{product_id}", "updating product", json=data
        )
        products = self.cache.value
        for i, p in enumerate(products):
            if p["id"] == product_id:
                products[i] = {**p, **product}
                self.cache.set(products)
                break
        return product

    def delete_product(self, product_id: str) -> str:
        body = self._call(
            "post", f"{self.products_url}/delete/{product_id}", "deleting product", json={}
        )
        self.cache.set([p for p in self.cache.value if p["id"] != product_id])
        return body["message"]

    def restore_product(self, product_id: str) -> str:
        body = self._call(
            "post", f"{self.products_url}/restore/{product_id}", "restoring product", json={}
        )
        self.load_products()
        return body["message"]

    def filter_products(self, term: Optional[str]) -> List[Dict[str, Any]]:
        products = self.cache.value
        if not term or not term.strip():
            return products
        term = term.lower()
        return [p for p in products if term in p["name"].lower()]
