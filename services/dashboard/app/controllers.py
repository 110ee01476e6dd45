"""
Dashboard Service — コントローラ

HTTP の入力を検証してサービスを呼び出し、結果をエンベロープに変換する。
ビジネスロジックは持たない。サービスとロガーはコンストラクタで受け取る。

    400: ID・リクエストボディの検証エラー（サービスは呼ばない）
    404: 対象が存在しない（GET /{id} 系のみ）
    500: サービス層の失敗（メッセージはそのまま返す）
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from .errors import (
    InvalidIdError,
    OrderNotFoundError,
    OrderServiceError,
    ProductNotFoundError,
    ProductServiceError,
)
from .models import CreateProductRequest, OrderDetailResponse, UpdateStatusRequest
from .response import response_error, response_ok
from .schema import MAX_ID
from .services import OrderServiceProtocol, ProductServiceProtocol


def parse_id(raw_id: str) -> int:
    """
    パスの ID を正の整数に変換する。

    空・符号付き・非数値・0・MAX_ID 超過は InvalidIdError。
    """
    if not raw_id or not (raw_id.isascii() and raw_id.isdigit()):
        raise InvalidIdError(raw_id)
    digits = raw_id.lstrip("0")
    if not digits or len(digits) > len(str(MAX_ID)):
        raise InvalidIdError(raw_id)
    value = int(digits)
    if value > MAX_ID:
        raise InvalidIdError(raw_id)
    return value


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


async def parse_body(request: Request, model: type[BaseModel]) -> BaseModel:
    """リクエストボディを JSON として model に検証する。失敗時は ValidationError。"""
    body = await request.body()
    return model.model_validate_json(body)


# ── Order ────────────────────────────────────────


class OrderController:
    def __init__(self, service: OrderServiceProtocol, log: logging.Logger) -> None:
        self.service = service
        self.log = log

    def _parse_id(self, order_id: str) -> int | None:
        self.log.info("Received ID from URL: %r", order_id)
        try:
            return parse_id(order_id)
        except InvalidIdError:
            self.log.error("Invalid order ID: %r", order_id)
            return None

    async def update_status(self, order_id: str, request: Request) -> JSONResponse:
        """注文ステータスを更新する。ステータス値は検証せずそのまま渡す。"""
        id_ = self._parse_id(order_id)
        if id_ is None:
            return response_error("Invalid order ID", "Invalid order ID", 400)

        try:
            req = await parse_body(request, UpdateStatusRequest)
        except ValidationError as exc:
            self.log.error("Invalid input: %s", exc)
            return response_error(describe_validation_error(exc), "Invalid input", 400)

        try:
            await self.service.update_order_status(id_, req.status)
        except OrderServiceError as exc:
            self.log.error("Failed to update order status: %s", exc.message)
            return response_error(exc.message, "Failed to update order status", 500)

        self.log.info("Successfully updated order status: id=%s status=%r", id_, req.status)
        return response_ok(None, "Order status updated successfully")

    async def get_all(self) -> JSONResponse:
        try:
            orders = await self.service.get_all_orders()
        except OrderServiceError as exc:
            self.log.error("Failed to fetch all orders: %s", exc.message)
            return response_error(exc.message, "Failed to fetch all orders", 500)

        return response_ok(orders, "Fetched all orders successfully")

    async def get_by_id(self, order_id: str) -> JSONResponse:
        id_ = self._parse_id(order_id)
        if id_ is None:
            return response_error("Invalid order ID", "Invalid order ID", 400)

        try:
            order = await self.service.get_order_by_id(id_)
        except OrderNotFoundError as exc:
            self.log.error("Order not found: %s", exc.message)
            return response_error(exc.message, "Order not found", 404)
        except OrderServiceError as exc:
            self.log.error("Failed to fetch order by ID: %s", exc.message)
            return response_error(exc.message, "Failed to fetch order", 500)

        return response_ok(order, "Fetched order by ID successfully")

    async def delete(self, order_id: str) -> JSONResponse:
        id_ = self._parse_id(order_id)
        if id_ is None:
            return response_error("Invalid order ID", "Invalid order ID", 400)

        try:
            await self.service.delete_order(id_)
        except OrderServiceError as exc:
            self.log.error("Failed to delete order: %s", exc.message)
            return response_error(exc.message, "Failed to delete order", 500)

        self.log.info("Successfully deleted order: id=%s", id_)
        return response_ok(None, "Order deleted successfully")

    async def get_detail(self, order_id: str) -> JSONResponse:
        """注文と明細を {order, items} にまとめて返す。"""
        id_ = self._parse_id(order_id)
        if id_ is None:
            return response_error("Invalid order ID", "Invalid order ID", 400)

        try:
            order, items = await self.service.get_order_detail(id_)
        except OrderServiceError as exc:
            self.log.error("Failed to fetch order details: %s", exc.message)
            return response_error(exc.message, "Failed to fetch order details", 500)

        detail = OrderDetailResponse(order=order, items=items)
        return response_ok(detail, "Fetched order details successfully")


# ── Product ──────────────────────────────────────


class ProductController:
    def __init__(self, service: ProductServiceProtocol, log: logging.Logger) -> None:
        self.service = service
        self.log = log

    async def create(self, request: Request) -> JSONResponse:
        try:
            req = await parse_body(request, CreateProductRequest)
        except ValidationError as exc:
            self.log.error("Invalid input: %s", exc)
            return response_error(describe_validation_error(exc), "Invalid input", 400)

        try:
            product = await self.service.create_product(
                req.name, req.description, req.price, req.stock
            )
        except ProductServiceError as exc:
            self.log.error("Failed to create product: %s", exc.message)
            return response_error(exc.message, "Failed to create product", 500)

        return response_ok(product, "Product created successfully", 201)

    async def get_all(self) -> JSONResponse:
        try:
            products = await self.service.get_all_products()
        except ProductServiceError as exc:
            self.log.error("Failed to fetch all products: %s", exc.message)
            return response_error(exc.message, "Failed to fetch all products", 500)

        return response_ok(products, "Fetched all products successfully")

    async def get_by_id(self, product_id: str) -> JSONResponse:
        try:
            id_ = parse_id(product_id)
        except InvalidIdError:
            self.log.error("Invalid product ID: %r", product_id)
            return response_error("Invalid product ID", "Invalid product ID", 400)

        try:
            product = await self.service.get_product_by_id(id_)
        except ProductNotFoundError as exc:
            self.log.error("Product not found: %s", exc.message)
            return response_error(exc.message, "Product not found", 404)
        except ProductServiceError as exc:
            self.log.error("Failed to fetch product by ID: %s", exc.message)
            return response_error(exc.message, "Failed to fetch product", 500)

        return response_ok(product, "Fetched product by ID successfully")

    async def delete(self, product_id: str) -> JSONResponse:
        try:
            id_ = parse_id(product_id)
        except InvalidIdError:
            self.log.error("Invalid product ID: %r", product_id)
            return response_error("Invalid product ID", "Invalid product ID", 400)

        try:
            await self.service.delete_product(id_)
        except ProductNotFoundError as exc:
            self.log.error("Product not found: %s", exc.message)
            return response_error(exc.message, "Product not found", 404)
        except ProductServiceError as exc:
            self.log.error("Failed to delete product: %s", exc.message)
            return response_error(exc.message, "Failed to delete product", 500)

        self.log.info("Successfully deleted product: id=%s", id_)
        return response_ok(None, "Product deleted successfully")
