"""
共通スキーマ定義（APIで共通利用する型）

【初心者向け】
- ErrorResponse: { "error": { "code": "...", "message": "..." } }（OpenAPIのエラー例として表示）
"""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """エラーレスポンス"""
    detail: dict[str, dict[str, str]]


# routers の responses= にそのまま渡す
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "INVALID_INPUT"},
    404: {"model": ErrorResponse, "description": "NOT_FOUND"},
    408: {"model": ErrorResponse, "description": "TIMEOUT"},
    500: {"model": ErrorResponse, "description": "INTERNAL_ERROR"},
}
