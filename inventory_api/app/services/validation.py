"""
Field rules for product payloads.

These are plain functions over the decoded JSON body so that they can
report problems in the API's own wording rather than pydantic's.  A key
that is present with a ``null`` value counts as supplied and fails its
rule.

Create collects every violation; update stops at the first one.  The
two behaviours differ on purpose and are kept that way for existing
clients.
"""

import math
from typing import Any, Dict, List, Optional

NAME_REQUIRED = "Name is required and must be a non-empty string"
PRICE_REQUIRED = "Price is required and must be a non-negative number"
IN_STOCK_BOOLEAN = "inStock must be a boolean value"

NAME_INVALID = "Name must be a non-empty string"
PRICE_INVALID = "Price must be a non-negative number"

# Update payload fields in the order they are checked.
UPDATABLE_FIELDS = ("name", "price", "inStock")


def is_valid_name(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_valid_price(value: Any) -> bool:
    # bool is a subclass of int but true/false are not prices.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints of any size are exact; only floats can be nan or inf.
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value >= 0


def is_valid_in_stock(value: Any) -> bool:
    return isinstance(value, bool)


def validate_create(candidate: Dict[str, Any]) -> List[str]:
    """Return every rule ``candidate`` breaks, in check order."""
    errors: List[str] = []
    if not is_valid_name(candidate.get("name")):
        errors.append(NAME_REQUIRED)
    if not is_valid_price(candidate.get("price")):
        errors.append(PRICE_REQUIRED)
    if "inStock" in candidate and not is_valid_in_stock(candidate["inStock"]):
        errors.append(IN_STOCK_BOOLEAN)
    return errors


def validate_update_field(field: str, value: Any) -> Optional[str]:
    """Check one supplied update field; returns the violation or ``None``."""
    if field == "name":
        return None if is_valid_name(value) else NAME_INVALID
    if field == "price":
        return None if is_valid_price(value) else PRICE_INVALID
    if field == "inStock":
        return None if is_valid_in_stock(value) else IN_STOCK_BOOLEAN
    raise ValueError(f"Unknown product field: {field}")
