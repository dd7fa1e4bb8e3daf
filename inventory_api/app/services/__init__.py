"""
Service layer.

``validation`` holds the field rules for product payloads and
``product_service`` runs each operation against an injected store.
"""
