"""
Dashboard Service — クエリハンドラ (CQRS の Read 側)

読み取り専用のクエリ。行は dict にして返し、モデルへの変換はサービス層で行う。
"""

from sqlalchemy import DateTime, Numeric, text
from sqlalchemy.ext.asyncio import AsyncSession

# text() の結果列に型を付けて、ドライバ間で Decimal / datetime を揃える
_ORDER_TYPES = {
    "total_amount": Numeric(10, 2),
    "created_at": DateTime(timezone=True),
    "updated_at": DateTime(timezone=True),
}
_ITEM_TYPES = {"price": Numeric(10, 2)}
_PRODUCT_TYPES = {
    "price": Numeric(10, 2),
    "created_at": DateTime(timezone=True),
}


# ── Order ────────────────────────────────────────


async def get_order(session: AsyncSession, order_id: int) -> dict | None:
    result = await session.execute(
        text("""
            SELECT id, customer_name, total_amount, status, created_at, updated_at
            FROM orders
            WHERE id = :id
        """).columns(**_ORDER_TYPES),
        {"id": order_id},
    )
    row = result.fetchone()
    if not row:
        return None
    return dict(row._mapping)


async def list_orders(session: AsyncSession) -> list[dict]:
    """全注文を新しい順に返す。"""
    result = await session.execute(
        text("""
            SELECT id, customer_name, total_amount, status, created_at, updated_at
            FROM orders
            ORDER BY created_at DESC, id DESC
        """).columns(**_ORDER_TYPES),
    )
    return [dict(row._mapping) for row in result.fetchall()]


async def list_order_items(session: AsyncSession, order_id: int) -> list[dict]:
    """注文に属する明細を登録順に返す。"""
    result = await session.execute(
        text("""
            SELECT id, order_id, product_id, quantity, price
            FROM order_items
            WHERE order_id = :order_id
            ORDER BY id ASC
        """).columns(**_ITEM_TYPES),
        {"order_id": order_id},
    )
    return [dict(row._mapping) for row in result.fetchall()]


# ── Product ──────────────────────────────────────


async def get_product(session: AsyncSession, product_id: int) -> dict | None:
    result = await session.execute(
        text("""
            SELECT id, name, description, price, stock, created_at
            FROM products
            WHERE id = :id
        """).columns(**_PRODUCT_TYPES),
        {"id": product_id},
    )
    row = result.fetchone()
    if not row:
        return None
    return dict(row._mapping)


async def list_products(session: AsyncSession) -> list[dict]:
    result = await session.execute(
        text("""
            SELECT id, name, description, price, stock, created_at
            FROM products
            ORDER BY id ASC
        """).columns(**_PRODUCT_TYPES),
    )
    return [dict(row._mapping) for row in result.fetchall()]
