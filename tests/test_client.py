"""Tests for the requests-based client."""

import json

import pytest
import requests

from inventory_client import ProductInventoryAPI


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class FakeSession:
    """Records requests and replies with queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def product():
    return {"id": 1, "name": "Widget", "price": 9.99, "inStock": True}


def test_list_products(product):
    session = FakeSession(make_response(200, [product]))
    api = ProductInventoryAPI(base_url="http://inventory.local/", session=session)
    products, error = api.list_products()
    assert products == [product]
    assert error is None
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://inventory.local/products"


def test_list_in_stock_uses_instock_path():
    session = FakeSession(make_response(200, []))
    api = ProductInventoryAPI(base_url="http://inventory.local", session=session)
    assert api.list_in_stock() == ([], None)
    assert session.calls[0]["url"] == "http://inventory.local/products/instock"


def test_create_product_omits_unset_in_stock(product):
    session = FakeSession(make_response(201, product))
    api = ProductInventoryAPI(base_url="http://inventory.local", session=session)
    created, error = api.create_product("Widget", 9.99)
    assert created == product
    assert error is None
    assert session.calls[0]["json"] == {"name": "Widget", "price": 9.99}


def test_create_product_validation_error_keeps_details():
    details = ["Name is required and must be a non-empty string"]
    session = FakeSession(make_response(400, {"error": "Invalid product data", "details": details}))
    api = ProductInventoryAPI(base_url="http://inventory.local", session=session)
    created, error = api.create_product("", 1, in_stock=False)
    assert created is None
    assert error == {"status_code": 400, "message": "Invalid product data", "details": details}
    assert session.calls[0]["json"]["inStock"] is False


def test_update_product_maps_in_stock(product):
    session = FakeSession(make_response(200, product))
    api = ProductInventoryAPI(base_url="http://inventory.local", session=session)
    api.update_product(1, price=5, in_stock=False)
    call = session.calls[0]
    assert call["method"] == "PUT"
    assert call["url"] == "http://inventory.local/products/1"
    assert call["json"] == {"price": 5, "inStock": False}


def test_update_missing_product_returns_error():
    body = {"error": "Product not found", "message": "Product with ID 9 does not exist"}
    session = FakeSession(make_response(404, body))
    api = ProductInventoryAPI(base_url="http://inventory.local", session=session)
    updated, error = api.update_product(9, price=1)
    assert updated is None
    assert error == {"status_code": 404, "message": "Product with ID 9 does not exist"}


def test_delete_product_returns_deleted_snapshot(product):
    body = {"success": True, "message": "deleted", "deletedProduct": product}
    session = FakeSession(make_response(200, body))
    api = ProductInventoryAPI(base_url="http://inventory.local", session=session)
    assert api.delete_product(1) == (product, None)


def test_connection_error_is_reported():
    session = FakeSession(requests.ConnectionError("refused"))
    api = ProductInventoryAPI(base_url="http://inventory.local", session=session)
    products, error = api.list_products()
    assert products == []
    assert error == {"status_code": None, "message": "refused"}
