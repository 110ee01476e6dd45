"""
Dashboard Service — スキーママイグレーション

migrations テーブルに適用済みのマイグレーション名を記録し、
未適用のものだけを順番に実行する。起動時に毎回呼ばれても安全。
"""

import logging

from sqlalchemy import Table, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from . import schema
from .errors import MigrationError

logger = logging.getLogger(__name__)

# 適用順。参照先のテーブルを先に作る。
MIGRATIONS: list[tuple[str, Table]] = [
    ("create_products_table", schema.products),
    ("create_orders_table", schema.orders),
    ("create_order_items_table", schema.order_items),
]


async def migrate(
    engine: AsyncEngine,
    migrations: list[tuple[str, Table]] = MIGRATIONS,
) -> list[str]:
    """未適用のマイグレーションを実行し、今回適用した名前の一覧を返す。"""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(schema.migrations.create, checkfirst=True)
    except SQLAlchemyError as exc:
        raise MigrationError("failed to create migrations table") from exc

    applied: list[str] = []
    for name, table in migrations:
        try:
            async with engine.begin() as conn:
                result = await conn.execute(
                    text("SELECT COUNT(1) FROM migrations WHERE name = :name"),
                    {"name": name},
                )
                if result.scalar_one() > 0:
                    logger.info("Migration '%s' already applied, skipping.", name)
                    continue

                await conn.run_sync(table.create, checkfirst=True)
                await conn.execute(
                    text("INSERT INTO migrations (name) VALUES (:name)"),
                    {"name": name},
                )
        except SQLAlchemyError as exc:
            raise MigrationError(f"failed to apply migration {name}") from exc

        logger.info("Migration '%s' applied successfully.", name)
        applied.append(name)

    return applied
