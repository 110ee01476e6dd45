"""
Dashboard Service — ルーティング

コントローラのメソッドをそのままエンドポイントとして登録する。
"""

from fastapi import APIRouter

from .controllers import OrderController, ProductController
from .response import ErrorEnvelope, SuccessEnvelope

_ID_ERRORS = {400: {"model": ErrorEnvelope}, 500: {"model": ErrorEnvelope}}


def order_routes(ctrl: OrderController) -> APIRouter:
    router = APIRouter(prefix="/orders", tags=["orders"])
    router.add_api_route(
        "/update/{order_id}", ctrl.update_status, methods=["PUT"],
        summary="Update order status", response_model=SuccessEnvelope, responses=_ID_ERRORS,
    )
    router.add_api_route(
        "/", ctrl.get_all, methods=["GET"],
        summary="Get all orders", response_model=SuccessEnvelope,
    )
    router.add_api_route(
        "/detail/{order_id}", ctrl.get_detail, methods=["GET"],
        summary="Get order detail by ID", response_model=SuccessEnvelope, responses=_ID_ERRORS,
    )
    router.add_api_route(
        "/{order_id}", ctrl.get_by_id, methods=["GET"],
        summary="Get order by ID", response_model=SuccessEnvelope,
        responses={**_ID_ERRORS, 404: {"model": ErrorEnvelope}},
    )
    router.add_api_route(
        "/{order_id}", ctrl.delete, methods=["DELETE"],
        summary="Delete order by ID", response_model=SuccessEnvelope, responses=_ID_ERRORS,
    )
    return router


def product_routes(ctrl: ProductController) -> APIRouter:
    router = APIRouter(prefix="/products", tags=["products"])
    router.add_api_route(
        "/", ctrl.create, methods=["POST"], status_code=201,
        summary="Create product", response_model=SuccessEnvelope,
        responses={400: {"model": ErrorEnvelope}, 500: {"model": ErrorEnvelope}},
    )
    router.add_api_route(
        "/", ctrl.get_all, methods=["GET"],
        summary="Get all products", response_model=SuccessEnvelope,
    )
    router.add_api_route(
        "/{product_id}", ctrl.get_by_id, methods=["GET"],
        summary="Get product by ID", response_model=SuccessEnvelope,
        responses={**_ID_ERRORS, 404: {"model": ErrorEnvelope}},
    )
    router.add_api_route(
        "/{product_id}", ctrl.delete, methods=["DELETE"],
        summary="Delete product by ID", response_model=SuccessEnvelope,
        responses={**_ID_ERRORS, 404: {"model": ErrorEnvelope}},
    )
    return router


def new_routes(orders: OrderController, products: ProductController) -> list[APIRouter]:
    return [order_routes(orders), product_routes(products)]
