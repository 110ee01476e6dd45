"""
Dashboard Service — FastAPI エントリーポイント

EC 管理ダッシュボード向けのバックエンド。
依存（エンジン・Redis・サービス・コントローラ）は create_app() で組み立てて注入する。

    uvicorn app.main:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from . import migrations
from .config import Settings
from .controllers import OrderController, ProductController
from .events import EventPublisher
from .response import response_error
from .routes import new_routes
from .services import OrderService, ProductService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


async def unhandled_error(request: Request, exc: Exception):
    """想定外の例外もエンベロープ形式の 500 に変換する。"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return response_error("Internal server error", "Internal server error", 500)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    engine = create_async_engine(settings.database_url, echo=settings.sql_echo)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    redis_pool: aioredis.Redis | None = None
    if settings.redis_url:
        redis_pool = aioredis.from_url(settings.redis_url, decode_responses=True)
    else:
        logger.info("REDIS_URL is empty; order events will not be published")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await migrations.migrate(engine)
        yield
        if redis_pool is not None:
            await redis_pool.aclose()
        await engine.dispose()

    app = FastAPI(title="Dashboard Service", lifespan=lifespan)

    # CORS 設定（ダッシュボードのフロントエンドからのアクセスを許可）
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_error)

    publisher = EventPublisher(redis_pool) if redis_pool is not None else None
    orders = OrderController(
        OrderService(async_session, publisher),
        logging.getLogger("app.orders"),
    )
    products = ProductController(
        ProductService(async_session),
        logging.getLogger("app.products"),
    )
    for router in new_routes(orders, products):
        app.include_router(router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": "dashboard-service"}

    return app
