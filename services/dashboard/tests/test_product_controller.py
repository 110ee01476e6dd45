from __future__ import annotations

import logging

import pytest

from app.models import Product


@pytest.mark.asyncio
async def test_create_product_returns_201(client, fake_products):
    resp = await client.post("/products/", json={"name": "Mug", "price": 4.5, "stock": 10})

    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == 201
    assert body["data"]["name"] == "Mug"
    assert fake_products.calls == [("create_product", "Mug", "", 4.5, 10)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{}, {"name": "", "price": 1}, {"name": "Mug", "price": -1}, {"name": "Mug", "price": 1, "stock": -2}],
)
async def test_create_product_rejects_bad_body(client, fake_products, payload):
    resp = await client.post("/products/", json=payload)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid input"
    assert fake_products.calls == []


@pytest.mark.asyncio
async def test_get_all_products(client, fake_products):
    fake_products.products[1] = Product(id=1, name="Mug", description="", price=4, stock=1)

    resp = await client.get("/products/")

    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()["data"]] == ["Mug"]


@pytest.mark.asyncio
async def test_get_product_not_found_is_404(client):
    resp = await client.get("/products/5")

    assert resp.status_code == 404
    assert resp.json()["error"] == "Product with ID 5 not found"


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["abc", "2147483648", "9" * 20])
@pytest.mark.parametrize("method", ["GET", "DELETE"])
async def test_invalid_product_id_is_400(client, fake_products, method, raw):
    resp = await client.request(method, f"/products/{raw}")

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid product ID"
    assert fake_products.calls == []


@pytest.mark.asyncio
async def test_delete_product(client, fake_products):
    fake_products.products[2] = Product(id=2, name="Shirt", description="", price=15, stock=3)

    resp = await client.delete("/products/2")
    again = await client.delete("/products/2")

    assert resp.status_code == 200
    assert resp.json()["data"] is None
    assert again.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw_body",
    [
        b'{"name": "Mug", "price": Infinity}',
        b'{"name": "Mug", "price": NaN}',
        b'{"name": "Mug", "price": 1e12}',
        b'{"name": "Mug", "price": 100000000}',
    ],
)
async def test_create_product_rejects_price_outside_column_range(client, fake_products, raw_body):
    resp = await client.post(
        "/products/", content=raw_body, headers={"content-type": "application/json"}
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid input"
    assert "price" in resp.json()["error"]
    assert fake_products.calls == []


@pytest.mark.asyncio
async def test_create_product_accepts_largest_price(client, fake_products):
    resp = await client.post("/products/", json={"name": "Mug", "price": 99999999.99})

    assert resp.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "DELETE"])
async def test_missing_product_is_logged(client, caplog, method):
    with caplog.at_level(logging.ERROR, logger="test.products"):
        resp = await client.request(method, "/products/5")

    assert resp.status_code == 404
    assert any("Product with ID 5 not found" in r.getMessage() for r in caplog.records)
