"""
Version 1 of the API.

Breaking changes to the product resource belong in a new version
subpackage so that ``/products`` keeps its current contract.
"""
