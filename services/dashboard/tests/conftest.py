"""Shared fixtures: in-memory fake services and a temporary SQLite store."""
from __future__ import annotations

import logging

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app import migrations, schema
from app.controllers import OrderController, ProductController
from app.errors import OrderNotFoundError, ProductNotFoundError
from app.models import Order, OrderItem, Product
from app.routes import order_routes, product_routes


class FakeOrderService:
    """Records every call; `error` is raised from any method when set."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.orders: dict[int, Order] = {}
        self.items: dict[int, list[OrderItem]] = {}
        self.error: Exception | None = None

    def _record(self, *call) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    async def update_order_status(self, order_id: int, status: str) -> None:
        self._record("update_order_status", order_id, status)
        if order_id not in self.orders:
            raise OrderNotFoundError(order_id)

    async def get_all_orders(self) -> list[Order]:
        self._record("get_all_orders")
        return list(self.orders.values())

    async def get_order_by_id(self, order_id: int) -> Order:
        self._record("get_order_by_id", order_id)
        if order_id not in self.orders:
            raise OrderNotFoundError(order_id)
        return self.orders[order_id]

    async def delete_order(self, order_id: int) -> None:
        self._record("delete_order", order_id)
        if self.orders.pop(order_id, None) is None:
            raise OrderNotFoundError(order_id)

    async def get_order_detail(self, order_id: int) -> tuple[Order, list[OrderItem]]:
        self._record("get_order_detail", order_id)
        if order_id not in self.orders:
            raise OrderNotFoundError(order_id)
        return self.orders[order_id], self.items.get(order_id, [])


class FakeProductService:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.products: dict[int, Product] = {}

    async def create_product(self, name, description, price, stock) -> Product:
        self.calls.append(("create_product", name, description, price, stock))
        product = Product(
            id=len(self.products) + 1, name=name, description=description,
            price=price, stock=stock,
        )
        self.products[product.id] = product
        return product

    async def get_all_products(self) -> list[Product]:
        self.calls.append(("get_all_products",))
        return list(self.products.values())

    async def get_product_by_id(self, product_id: int) -> Product:
        self.calls.append(("get_product_by_id", product_id))
        if product_id not in self.products:
            raise ProductNotFoundError(product_id)
        return self.products[product_id]

    async def delete_product(self, product_id: int) -> None:
        self.calls.append(("delete_product", product_id))
        if self.products.pop(product_id, None) is None:
            raise ProductNotFoundError(product_id)


class FakePublisher:
    def __init__(self) -> None:
        self.events: list = []

    async def publish(self, event) -> None:
        self.events.append(event)


def make_order(order_id: int, status: str = "pending") -> Order:
    return Order(id=order_id, customer_name=f"customer-{order_id}", total_amount=10.5, status=status)


def make_item(item_id: int, order_id: int, product_id: int = 1) -> OrderItem:
    return OrderItem(id=item_id, order_id=order_id, product_id=product_id, quantity=2, price=5.25)


# ── Controller fixtures ──────────────────────────


@pytest.fixture()
def fake_orders() -> FakeOrderService:
    return FakeOrderService()


@pytest.fixture()
def fake_products() -> FakeProductService:
    return FakeProductService()


@pytest.fixture()
def order_controller(fake_orders: FakeOrderService) -> OrderController:
    return OrderController(fake_orders, logging.getLogger("test.orders"))


@pytest_asyncio.fixture()
async def client(order_controller: OrderController, fake_products: FakeProductService):
    app = FastAPI()
    app.include_router(order_routes(order_controller))
    app.include_router(
        product_routes(ProductController(fake_products, logging.getLogger("test.products")))
    )
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ── Store fixtures ───────────────────────────────


@pytest.fixture()
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}"


@pytest_asyncio.fixture()
async def engine(database_url: str):
    eng = create_async_engine(database_url)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    await migrations.migrate(engine)
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def seeded(engine, session_factory):
    """Two products, two orders; order 1 has two items, order 2 has none."""
    async with engine.begin() as conn:
        await conn.execute(insert(schema.products), [
            {"id": 1, "name": "Mug", "description": "", "price": 4, "stock": 10},
            {"id": 2, "name": "Shirt", "description": "cotton", "price": 15, "stock": 3},
        ])
        await conn.execute(insert(schema.orders), [
            {"id": 1, "customer_name": "alice", "total_amount": 23, "status": "pending"},
            {"id": 2, "customer_name": "bob", "total_amount": 4, "status": "shipped"},
        ])
        await conn.execute(insert(schema.order_items), [
            {"id": 1, "order_id": 1, "product_id": 1, "quantity": 2, "price": 4},
            {"id": 2, "order_id": 1, "product_id": 2, "quantity": 1, "price": 15},
        ])
    return session_factory
