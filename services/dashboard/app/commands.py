"""
Dashboard Service — コマンドハンドラ (CQRS の Write 側)

状態を変更する操作。各関数は自分でコミットする。
失敗時のロールバックとエラー変換は呼び出し側（サービス層）の責務。
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession


# ── Order ────────────────────────────────────────


async def update_order_status(
    session: AsyncSession,
    order_id: int,
    status: str,
) -> str | None:
    """
    注文ステータスを更新する。

    更新前のステータスを返す。注文が存在しなければ何もせず None を返す。
    UPDATE は読み出したステータスが変わっていない場合だけ行を更新する。
    0 行なら削除か別の更新と競合したので、読み直してやり直す。
    """
    while True:
        result = await session.execute(
            text("SELECT status FROM orders WHERE id = :id"),
            {"id": order_id},
        )
        previous = result.scalar_one_or_none()
        if previous is None:
            await session.rollback()
            return None

        result = await session.execute(
            text("""
                UPDATE orders
                SET status = :status, updated_at = :now
                WHERE id = :id AND status = :previous
            """).bindparams(bindparam("now", type_=DateTime(timezone=True))),
            {
                "id": order_id,
                "status": status,
                "previous": previous,
                "now": datetime.now(timezone.utc),
            },
        )
        if result.rowcount == 1:
            await session.commit()
            return previous
        await session.rollback()


async def delete_order(session: AsyncSession, order_id: int) -> bool:
    """
    注文と明細を同一トランザクションで削除する。

    削除対象が存在しなければ False を返す。
    """
    await session.execute(
        text("DELETE FROM order_items WHERE order_id = :id"),
        {"id": order_id},
    )
    result = await session.execute(
        text("DELETE FROM orders WHERE id = :id"),
        {"id": order_id},
    )
    if result.rowcount == 0:
        await session.rollback()
        return False

    await session.commit()
    return True


# ── Product ──────────────────────────────────────


async def create_product(
    session: AsyncSession,
    name: str,
    description: str,
    price: float,
    stock: int,
) -> dict:
    result = await session.execute(
        text("""
            INSERT INTO products (name, description, price, stock, created_at)
            VALUES (:name, :description, :price, :stock, :now)
            RETURNING id, name, description, price, stock, created_at
        """)
        .bindparams(
            bindparam("price", type_=Numeric(10, 2)),
            bindparam("now", type_=DateTime(timezone=True)),
        )
        .columns(price=Numeric(10, 2), created_at=DateTime(timezone=True)),
        {
            "name": name,
            "description": description,
            "price": Decimal(str(price)),
            "stock": stock,
            "now": datetime.now(timezone.utc),
        },
    )
    row = result.fetchone()
    await session.commit()
    return dict(row._mapping)


async def delete_product(session: AsyncSession, product_id: int) -> bool:
    result = await session.execute(
        text("DELETE FROM products WHERE id = :id"),
        {"id": product_id},
    )
    if result.rowcount == 0:
        await session.rollback()
        return False

    await session.commit()
    return True
