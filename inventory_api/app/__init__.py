"""
Application package initializer.

The package is split into ``core`` (settings, logging, errors and the
product store), ``schemas`` (pydantic models), ``services`` (validation
and product operations) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
