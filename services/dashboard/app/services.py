"""
Dashboard Service — サービス層

コマンド / クエリを組み合わせてビジネス操作を提供する。
ストアの例外はここでログに残し、クライアントに見せてよいメッセージだけを持つ
ドメイン例外 (OrderServiceError / ProductServiceError) に変換する。
"""

import logging
from typing import Protocol

from pydantic import BaseModel
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from . import commands, queries
from .errors import (
    OrderNotFoundError,
    OrderServiceError,
    ProductNotFoundError,
    ProductServiceError,
)
from .events import EventPublisher, OrderDeleted, OrderStatusUpdated
from .models import Order, OrderItem, Product
from .schema import MAX_ID

logger = logging.getLogger(__name__)


# ── Interfaces (コントローラが依存する契約) ──────


class OrderServiceProtocol(Protocol):
    async def update_order_status(self, order_id: int, status: str) -> None: ...

    async def get_all_orders(self) -> list[Order]: ...

    async def get_order_by_id(self, order_id: int) -> Order: ...

    async def delete_order(self, order_id: int) -> None: ...

    async def get_order_detail(self, order_id: int) -> tuple[Order, list[OrderItem]]: ...


class ProductServiceProtocol(Protocol):
    async def create_product(
        self, name: str, description: str, price: float, stock: int
    ) -> Product: ...

    async def get_all_products(self) -> list[Product]: ...

    async def get_product_by_id(self, product_id: int) -> Product: ...

    async def delete_product(self, product_id: int) -> None: ...


# ── Order ────────────────────────────────────────


class OrderService:
    """注文のステータス更新・取得・削除・詳細集約"""

    def __init__(
        self,
        session_factory: sessionmaker,
        publisher: EventPublisher | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.publisher = publisher

    async def update_order_status(self, order_id: int, status: str) -> None:
        if not 0 < order_id <= MAX_ID:
            raise OrderNotFoundError(order_id)
        try:
            async with self.session_factory() as session:
                previous = await commands.update_order_status(session, order_id, status)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update status of order %s", order_id)
            raise OrderServiceError("failed to update order status") from exc

        if previous is None:
            raise OrderNotFoundError(order_id)

        logger.info("Order %s status changed: %s -> %s", order_id, previous, status)
        await self._publish(
            OrderStatusUpdated(order_id=order_id, previous_status=previous, status=status)
        )

    async def get_all_orders(self) -> list[Order]:
        try:
            async with self.session_factory() as session:
                rows = await queries.list_orders(session)
        except SQLAlchemyError as exc:
            logger.exception("Failed to list orders")
            raise OrderServiceError("failed to fetch orders") from exc
        return [Order.model_validate(row) for row in rows]

    async def get_order_by_id(self, order_id: int) -> Order:
        if not 0 < order_id <= MAX_ID:
            raise OrderNotFoundError(order_id)
        try:
            async with self.session_factory() as session:
                row = await queries.get_order(session, order_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch order %s", order_id)
            raise OrderServiceError("failed to fetch order") from exc

        if row is None:
            raise OrderNotFoundError(order_id)
        return Order.model_validate(row)

    async def delete_order(self, order_id: int) -> None:
        if not 0 < order_id <= MAX_ID:
            raise OrderNotFoundError(order_id)
        try:
            async with self.session_factory() as session:
                deleted = await commands.delete_order(session, order_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete order %s", order_id)
            raise OrderServiceError("failed to delete order") from exc

        if not deleted:
            raise OrderNotFoundError(order_id)

        logger.info("Order %s deleted", order_id)
        await self._publish(OrderDeleted(order_id=order_id))

    async def get_order_detail(self, order_id: int) -> tuple[Order, list[OrderItem]]:
        """注文と明細を同じセッションで読み出す。"""
        if not 0 < order_id <= MAX_ID:
            raise OrderNotFoundError(order_id)
        try:
            async with self.session_factory() as session:
                row = await queries.get_order(session, order_id)
                item_rows = await queries.list_order_items(session, order_id) if row else []
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch details of order %s", order_id)
            raise OrderServiceError("failed to fetch order details") from exc

        if row is None:
            raise OrderNotFoundError(order_id)
        return Order.model_validate(row), [OrderItem.model_validate(r) for r in item_rows]

    async def _publish(self, event: BaseModel) -> None:
        # ストアへの変更はコミット済みなので、通知の失敗は記録だけして続行する
        if self.publisher is None:
            return
        try:
            await self.publisher.publish(event)
        except RedisError:
            logger.exception("Failed to publish %s", type(event).__name__)


# ── Product ──────────────────────────────────────


class ProductService:
    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    async def create_product(
        self,
        name: str,
        description: str,
        price: float,
        stock: int,
    ) -> Product:
        try:
            async with self.session_factory() as session:
                row = await commands.create_product(session, name, description, price, stock)
        except SQLAlchemyError as exc:
            logger.exception("Failed to create product %r", name)
            raise ProductServiceError("failed to create product") from exc

        logger.info("Product %s created", row["id"])
        return Product.model_validate(row)

    async def get_all_products(self) -> list[Product]:
        try:
            async with self.session_factory() as session:
                rows = await queries.list_products(session)
        except SQLAlchemyError as exc:
            logger.exception("Failed to list products")
            raise ProductServiceError("failed to fetch products") from exc
        return [Product.model_validate(row) for row in rows]

    async def get_product_by_id(self, product_id: int) -> Product:
        if not 0 < product_id <= MAX_ID:
            raise ProductNotFoundError(product_id)
        try:
            async with self.session_factory() as session:
                row = await queries.get_product(session, product_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch product %s", product_id)
            raise ProductServiceError("failed to fetch product") from exc

        if row is None:
            raise ProductNotFoundError(product_id)
        return Product.model_validate(row)

    async def delete_product(self, product_id: int) -> None:
        if not 0 < product_id <= MAX_ID:
            raise ProductNotFoundError(product_id)
        try:
            async with self.session_factory() as session:
                deleted = await commands.delete_product(session, product_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete product %s", product_id)
            raise ProductServiceError("failed to delete product") from exc

        if not deleted:
            raise ProductNotFoundError(product_id)
        logger.info("Product %s deleted", product_id)
