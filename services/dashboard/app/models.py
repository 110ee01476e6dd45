"""
Dashboard Service — リクエスト / レスポンスモデル

ストアの行をそのまま表す値オブジェクト。不変(frozen)として扱う。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Order(BaseModel):
    """注文"""
    model_config = ConfigDict(frozen=True)

    id: int
    customer_name: str
    total_amount: float
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderItem(BaseModel):
    """注文明細（商品・数量・購入時価格）"""
    model_config = ConfigDict(frozen=True)

    id: int
    order_id: int
    product_id: int
    quantity: int
    price: float


class OrderDetailResponse(BaseModel):
    """注文と明細をまとめたレスポンス用の集約。永続化しない。"""
    model_config = ConfigDict(frozen=True)

    order: Order
    items: list[OrderItem]


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
    price: float
    stock: int
    created_at: datetime | None = None


# ── Request Models ───────────────────────────────


class UpdateStatusRequest(BaseModel):
    status: str = Field(min_length=1, max_length=50)


class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    price: float = Field(ge=0, lt=10**8, allow_inf_nan=False)
    stock: int = Field(default=0, ge=0)
