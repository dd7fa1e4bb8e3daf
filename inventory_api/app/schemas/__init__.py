"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the store, which works on plain
dictionaries exactly as they appear in the products file.
"""
