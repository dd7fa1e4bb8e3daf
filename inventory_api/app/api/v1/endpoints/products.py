"""
Product endpoints.

These routes expose CRUD operations over the product collection plus
the ``/instock`` view.  Request bodies are read as raw JSON and checked
by ``services.validation`` so that clients receive the API's own error
messages (``{"error": ..., "details": [...]}``) rather than FastAPI's
422 responses.  The documented body schemas are attached through
``openapi_extra``.

Responses are not passed through ``response_model``: products are
returned exactly as stored, so a hand-edited record is neither coerced
nor rejected on the way out.  The models appear only in the OpenAPI
``responses`` documentation.
"""

import json
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, status

from inventory_api.app.core.errors import InvalidJSONError, internal_error_on_failure
from inventory_api.app.core.store import ProductStore, get_store
from inventory_api.app.schemas.product import Product, ProductCreate, ProductDeleted, ProductUpdate
from inventory_api.app.services.product_service import ProductService, parse_product_id

router = APIRouter()


def get_product_service(store: ProductStore = Depends(get_store)) -> ProductService:
    return ProductService(store)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


async def read_json_object(request: Request) -> Dict[str, Any]:
    """Decode the request body as a JSON object.

    An empty body counts as ``{}``.  Malformed JSON, the non-standard
    ``NaN``/``Infinity`` literals and any top-level value other than an
    object raise ``InvalidJSONError``.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidJSONError()
    if not isinstance(data, dict):
        raise InvalidJSONError("Request body must be a JSON object")
    return data


def _body_schema(model: type) -> Dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


@router.get("", response_model=None, responses={200: {"model": List[Product]}})
@internal_error_on_failure("Failed to retrieve products")
async def list_products(service: ProductService = Depends(get_product_service)) -> List[Dict[str, Any]]:
    """Return every product in stored order.

    An unreadable products file yields an empty list rather than an
    error.
    """
    return await service.list_products()


@router.get("/instock", response_model=None, responses={200: {"model": List[Product]}})
@internal_error_on_failure("Failed to retrieve in-stock products")
async def list_in_stock_products(
    service: ProductService = Depends(get_product_service),
) -> List[Dict[str, Any]]:
    """Return only products with ``inStock`` set to true."""
    return await service.list_in_stock()


@router.post(
    "",
    response_model=None,
    responses={201: {"model": Product}},
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_body_schema(ProductCreate),
)
@internal_error_on_failure("Failed to create product")
async def create_product(
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Create a product and return it with its assigned ``id``.

    Responds with 400 and the list of every broken rule when the body is
    invalid.
    """
    data = await read_json_object(request)
    return await service.create_product(data)


@router.put(
    "/{product_id}",
    response_model=None,
    responses={200: {"model": Product}},
    openapi_extra=_body_schema(ProductUpdate),
)
@internal_error_on_failure("Failed to update product")
async def update_product(
    product_id: str,
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Apply a partial update and return the full product.

    Only ``name``, ``price`` and ``inStock`` are considered; the first
    invalid one aborts the update with 400.
    """
    data = await read_json_object(request)
    return await service.update_product(parse_product_id(product_id), data)


@router.delete("/{product_id}", response_model=None, responses={200: {"model": ProductDeleted}})
@internal_error_on_failure("Failed to delete product")
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Delete a product and return a snapshot of what was removed."""
    pid = parse_product_id(product_id)
    deleted = await service.delete_product(pid)
    return {
        "success": True,
        "message": f"Product '{deleted.get('name')}' with ID {pid} has been deleted successfully",
        "deletedProduct": deleted,
    }
