"""
Persistence for the product collection.

The collection is small and is always handled as a whole: a request
loads every product, changes the in-memory list and writes the whole
list back.  ``ProductStore`` defines that load/persist pair together
with the list operations the handlers need (id allocation, lookup,
insert, merge and remove).  Two implementations are provided:

* ``JsonFileStore`` keeps the collection in a JSON file, pretty printed
  with two-space indentation and replaced atomically on every write.
* ``InMemoryStore`` keeps it in a Python list; it is used by the tests
  and by applications embedding the API without a file.

Handlers obtain a store through the ``get_store`` dependency, which can
be overridden with ``app.dependency_overrides``.

The store does no locking.  Within one process the handlers load,
mutate and persist without yielding to the event loop, but two
processes sharing one file can still lose updates or allocate the same
id.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import settings

Product = Dict[str, Any]

logger = logging.getLogger(__name__)


class ProductStore:
    """Load/persist contract plus in-memory list operations."""

    def load(self) -> List[Product]:
        """Return the full collection; never raises on read failure."""
        raise NotImplementedError

    def persist(self, products: List[Product]) -> bool:
        """Replace the stored collection with ``products``.

        Returns ``False`` instead of raising when the write fails.
        """
        raise NotImplementedError

    @staticmethod
    def next_id(products: List[Product]) -> int:
        """Return one more than the highest id, or 1 for an empty list."""
        if not products:
            return 1
        return max(product.get("id", 0) for product in products) + 1

    @staticmethod
    def find_index(products: List[Product], product_id: int) -> Optional[int]:
        for index, product in enumerate(products):
            if product.get("id") == product_id:
                return index
        return None

    @staticmethod
    def insert(products: List[Product], product: Product) -> Product:
        products.append(product)
        return product

    @staticmethod
    def merge_update(products: List[Product], index: int, patch: Dict[str, Any]) -> Product:
        """Overwrite only the keys present in ``patch``; returns the merged record."""
        products[index] = {**products[index], **patch}
        return products[index]

    @staticmethod
    def remove(products: List[Product], index: int) -> Product:
        return products.pop(index)


class JsonFileStore(ProductStore):
    """Product collection stored as a JSON array in a single file."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def load(self) -> List[Product]:
        try:
            if not self.path.exists():
                # First use: create the file so later writes have a target.
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(json.dumps([]), encoding="utf-8")
                logger.info("Created empty products file %s", self.path)
                return []
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Error reading products file %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.error(
                "Error reading products file %s: expected a JSON array, got %s",
                self.path,
                type(data).__name__,
            )
            return []
        products = [item for item in data if isinstance(item, dict)]
        if len(products) != len(data):
            logger.warning(
                "Ignoring %d non-object entries in products file %s",
                len(data) - len(products),
                self.path,
            )
        return products

    def persist(self, products: List[Product]) -> bool:
        tmp_name: Optional[str] = None
        try:
            content = json.dumps(products, indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
            return True
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error writing to products file %s: %s", self.path, exc)
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_name)


class InMemoryStore(ProductStore):
    """Product collection held in memory.

    ``load`` hands out a deep copy so that a request mutating its list
    does not change the stored collection until ``persist`` succeeds.
    """

    def __init__(self, products: Optional[List[Product]] = None) -> None:
        self._products: List[Product] = copy.deepcopy(products or [])

    def load(self) -> List[Product]:
        return copy.deepcopy(self._products)

    def persist(self, products: List[Product]) -> bool:
        self._products = copy.deepcopy(products)
        return True


def get_products_path() -> str:
    """Compute the path to the products file.

    If ``settings.products_file`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    products_file = settings.products_file
    if os.path.isabs(products_file):
        return products_file
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / products_file).resolve())


def get_store() -> ProductStore:
    """FastAPI dependency returning the configured product store."""
    return JsonFileStore(get_products_path())
