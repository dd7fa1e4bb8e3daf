"""
Top‑level package for the Product Inventory API.

All functionality lives in submodules under ``app``; import
``inventory_api.app.main`` for the ASGI application.
"""

__all__ = []
