"""
Service layer for products.

``ProductService`` runs each operation against a ``ProductStore``: it
loads the whole collection, applies the change in memory and persists
the whole collection again.  Failures are raised as ``ApiError``
subclasses which the API layer turns into JSON responses.  A failed
write leaves the stored collection as it was; the modified list is
simply dropped with the request.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from inventory_api.app.core.errors import (
    InternalServerError,
    InvalidDataError,
    InvalidIdError,
    ProductNotFoundError,
    ValidationFailedError,
)
from inventory_api.app.core.store import Product, ProductStore
from inventory_api.app.schemas.product import ProductUpdate
from inventory_api.app.services.validation import (
    UPDATABLE_FIELDS,
    validate_create,
    validate_update_field,
)

logger = logging.getLogger(__name__)

# Leading integer of a path segment: "12", " 12", "+3", "12abc" -> 12.
# ASCII digits only; int() would also accept other scripts' digits.
_ID_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


def parse_product_id(raw: str) -> int:
    """Parse the ``{product_id}`` path segment.

    Only the leading integer matters; trailing characters are ignored so
    ``"12abc"`` and ``"3.5"`` address products 12 and 3.  A segment that
    does not start with digits raises ``InvalidIdError``.
    """
    match = _ID_PREFIX.match(raw)
    if match is None:
        raise InvalidIdError()
    return int(match.group(1))


def build_update(data: Dict[str, Any]) -> ProductUpdate:
    """Build a partial update from the supplied fields of ``data``.

    Fields are checked in ``UPDATABLE_FIELDS`` order and the first
    invalid one raises ``InvalidDataError``.  Other keys, ``id``
    included, are ignored.
    """
    values: Dict[str, Any] = {}
    for field in UPDATABLE_FIELDS:
        if field not in data:
            continue
        violation = validate_update_field(field, data[field])
        if violation is not None:
            raise InvalidDataError(violation)
        value = data[field]
        values[field] = value.strip() if field == "name" else value
    return ProductUpdate(**values)


class ProductService:
    """Product operations over an injected store."""

    def __init__(self, store: ProductStore) -> None:
        self.store = store

    async def list_products(self) -> List[Product]:
        return self.store.load()

    async def list_in_stock(self) -> List[Product]:
        """Return products whose ``inStock`` is exactly ``True``, in stored order."""
        return [product for product in self.store.load() if product.get("inStock") is True]

    async def create_product(self, data: Dict[str, Any]) -> Product:
        """Validate ``data`` and append it as a new product.

        The id is allocated from the current collection, the name is
        stored trimmed and ``inStock`` defaults to ``True``.
        """
        errors = validate_create(data)
        if errors:
            raise ValidationFailedError(errors)
        products = self.store.load()
        new_product = {
            "id": self.store.next_id(products),
            "name": data["name"].strip(),
            "price": data["price"],
            "inStock": data.get("inStock", True),
        }
        self.store.insert(products, new_product)
        if not self.store.persist(products):
            raise InternalServerError("Failed to save product")
        logger.info("Created product %s", new_product["id"])
        return new_product

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Product:
        """Merge the supplied fields of ``data`` onto product ``product_id``."""
        products = self.store.load()
        index = self.store.find_index(products, product_id)
        if index is None:
            raise ProductNotFoundError(product_id)
        patch = build_update(data).as_patch()
        updated = self.store.merge_update(products, index, patch)
        if not self.store.persist(products):
            raise InternalServerError("Failed to update product")
        logger.info("Updated product %s (%s)", product_id, ", ".join(patch) or "no changes")
        return updated

    async def delete_product(self, product_id: int) -> Product:
        """Remove product ``product_id`` and return its last stored state."""
        products = self.store.load()
        index = self.store.find_index(products, product_id)
        if index is None:
            raise ProductNotFoundError(product_id)
        deleted = self.store.remove(products, index)
        if not self.store.persist(products):
            raise InternalServerError("Failed to delete product")
        logger.info("Deleted product %s", product_id)
        return deleted
