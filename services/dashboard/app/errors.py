"""
Dashboard Service — 例外定義

サービス層の例外メッセージはそのままレスポンスに載るため、
内部情報（SQL、接続先など）を含めないこと。
"""


class DashboardError(Exception):
    """すべてのドメイン例外の基底クラス"""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class InvalidIdError(DashboardError):
    """パスパラメータの ID が空、または正の整数でない"""

    def __init__(self, raw_id: str) -> None:
        super().__init__("Invalid ID")
        self.raw_id = raw_id


# ── Order ────────────────────────────────────────


class OrderServiceError(DashboardError):
    """注文サービスの操作失敗"""


class OrderNotFoundError(OrderServiceError):
    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order with ID {order_id} not found")
        self.order_id = order_id


# ── Product ──────────────────────────────────────


class ProductServiceError(DashboardError):
    """商品サービスの操作失敗"""


class ProductNotFoundError(ProductServiceError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class MigrationError(DashboardError):
    """スキーママイグレーションの失敗"""
