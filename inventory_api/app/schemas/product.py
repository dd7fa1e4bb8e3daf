"""
Pydantic models for product data.

Field rules are enforced by ``services.validation`` before any of these
models is built, so the models only describe shapes: the create body,
the stored product, the partial update applied by
``PUT /products/{id}`` and the delete confirmation.  The public JSON
spelling of the stock flag is ``inStock``; Python code uses
``in_stock``.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class ProductCreate(BaseModel):
    """Body accepted by ``POST /products``; ``inStock`` defaults to true."""

    name: str = Field(..., examples=["Widget"])
    price: Number = Field(..., examples=[9.99])
    in_stock: bool = Field(True, alias="inStock", examples=[True])

    model_config = ConfigDict(populate_by_name=True)


class Product(BaseModel):
    """A stored product as documented for API responses.

    Used for OpenAPI only; the endpoints return stored records verbatim.
    """

    id: int = Field(..., examples=[1])
    name: str = Field(..., examples=["Widget"])
    price: Number = Field(..., examples=[9.99])
    in_stock: bool = Field(..., alias="inStock", examples=[True])

    # Keys written to the file by other tools are returned as well.
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ProductUpdate(BaseModel):
    """Partial update for a product.

    All fields are optional; only fields that were explicitly set are
    merged onto the stored record.
    """

    name: Optional[str] = None
    price: Optional[Number] = None
    in_stock: Optional[bool] = Field(None, alias="inStock")

    model_config = ConfigDict(populate_by_name=True)

    def as_patch(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class ProductDeleted(BaseModel):
    success: bool = True
    message: str
    deleted_product: Product = Field(..., alias="deletedProduct")

    model_config = ConfigDict(populate_by_name=True)
