"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers.  The product router is
included under ``/products``; new resources get their own module in
``endpoints`` and an ``include_router`` line here.
"""

from fastapi import APIRouter

from .endpoints import products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
