"""
Dashboard Service — 設定

環境変数から設定を読み込む。
DATABASE_URL は必須、それ以外はデフォルト値を持つ。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    database_url: str
    redis_url: str | None = "redis://localhost:6379"
    log_level: str = "INFO"
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """環境変数から Settings を組み立てる。REDIS_URL="" でイベント発行を無効化。"""
        redis_url = os.environ.get("REDIS_URL", "redis://localhost:6379")
        return cls(
            database_url=os.environ["DATABASE_URL"],
            redis_url=redis_url or None,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            sql_echo=os.environ.get("SQL_ECHO", "").lower() in ("1", "true", "yes"),
        )
