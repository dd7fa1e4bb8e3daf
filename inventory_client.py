"""Product Inventory API client.

A thin wrapper around the product endpoints built on ``requests``.
Every method returns a ``(data, error)`` tuple: on success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary
with ``status_code`` and ``message`` keys.  For validation failures the
server's ``details`` list is included as well.

Example::

    api = ProductInventoryAPI(base_url="http://localhost:3000")
    product, error = api.create_product("Widget", 9.99)
    if error:
        print(error["message"])
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ProductInventoryAPI:
    """Client for the ``/products`` resource."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)`` with the decoded JSON body on
            success, or ``None`` and an error dictionary on failure.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            error = self._error_from_response(exc)
            logger.error("API request failed (%s): %s", error["status_code"], error["message"])
            return None, error
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _error_from_response(exc: requests.HTTPError) -> Error:
        response = exc.response
        if response is None:
            return {"status_code": None, "message": str(exc)}
        error: Error = {"status_code": response.status_code, "message": ""}
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error["message"] = body.get("message") or body.get("error") or str(body)
            if "details" in body:
                error["details"] = body["details"]
        else:
            error["message"] = response.text
        if not error["message"]:
            error["message"] = str(exc)
        return error

    # ------------------------------------------------------------------
    # Product operations
    # ------------------------------------------------------------------
    def list_products(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/products")
        if error or not isinstance(data, list):
            return [], error
        return data, None

    def list_in_stock(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve only products that are in stock."""
        data, error = self._request("GET", "/products/instock")
        if error or not isinstance(data, list):
            return [], error
        return data, None

    def create_product(
        self, name: str, price: float, in_stock: Optional[bool] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a product.

        ``in_stock`` is only sent when given, leaving the server default
        (``True``) in place otherwise.
        """
        payload: Dict[str, Any] = {"name": name, "price": price}
        if in_stock is not None:
            payload["inStock"] = in_stock
        return self._request("POST", "/products", json_body=payload)

    def update_product(
        self, product_id: int, **fields: Any
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update some fields of a product.

        Keyword arguments use Python names (``name``, ``price``,
        ``in_stock``); only the ones passed are sent.
        """
        payload = {("inStock" if key == "in_stock" else key): value for key, value in fields.items()}
        return self._request("PUT", f"/products/{product_id}", json_body=payload)

    def delete_product(self, product_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Delete a product; ``data`` is the removed product on success."""
        data, error = self._request("DELETE", f"/products/{product_id}")
        if error:
            return None, error
        if isinstance(data, dict):
            return data.get("deletedProduct"), None
        return None, None
