"""
Dashboard Service — レスポンスエンベロープ

すべての API レスポンスを同じ形に揃える。HTTP ステータスは本文にも載せる。

    成功: {"status": 200, "message": "...", "data": ...}
    失敗: {"status": 400, "message": "...", "error": "..."}

フィールド名はクライアントとの契約なので変更しないこと。
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class SuccessEnvelope(BaseModel):
    status: int
    message: str
    data: Any = None


class ErrorEnvelope(BaseModel):
    status: int
    message: str
    error: str


def response_ok(data: Any, message: str, status_code: int = 200) -> JSONResponse:
    envelope = SuccessEnvelope(status=status_code, message=message, data=jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


def response_error(error: str, message: str, status_code: int) -> JSONResponse:
    envelope = ErrorEnvelope(status=status_code, message=message, error=error)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())
