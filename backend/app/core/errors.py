"""
共通エラーハンドリング（APIで返すエラー形式の統一）

【初心者向け】
- フロントエンドが { "error": { "code": "...", "message": "..." } } で
  エラーを受け取れるよう、共通形式で例外を投げる
- raise_invalid_input 等のヘルパーで、コードごとのHTTPステータスを自動設定
- 採点エンジン自体は例外を投げない（ここを使うのは写真の受付・LLM・履歴のみ）
"""
from typing import Literal, NoReturn

from fastapi import HTTPException, status

# エラーコード一覧（型安全のため Literal で定義）
ErrorCode = Literal[
    "INVALID_INPUT",
    "NOT_FOUND",
    "TIMEOUT",
    "INTERNAL_ERROR",
]

# エラーコードとHTTPステータスのマッピング
ERROR_STATUS_MAP: dict[ErrorCode, int] = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TIMEOUT": status.HTTP_408_REQUEST_TIMEOUT,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(HTTPException):
    """アプリケーション共通エラー

    detail に { "error": { "code": ..., "message": ... } } を入れて返す
    """

    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(
            status_code=ERROR_STATUS_MAP[code],
            detail={"error": {"code": code, "message": message}}
        )


def raise_invalid_input(message: str) -> NoReturn:
    """INVALID_INPUTエラーを発生させる（写真データ・インデックスの不正など）"""
    raise AppError("INVALID_INPUT", message)


def raise_not_found(message: str) -> NoReturn:
    """NOT_FOUNDエラーを発生させる（学習履歴が見つからない）"""
    raise AppError("NOT_FOUND", message)


def raise_timeout(message: str) -> NoReturn:
    """TIMEOUTエラーを発生させる（LLMの応答待ち切れ）"""
    raise AppError("TIMEOUT", message)


def raise_internal_error(message: str) -> NoReturn:
    """INTERNAL_ERRORエラーを発生させる（LLMエラー・出力のパース失敗）"""
    raise AppError("INTERNAL_ERROR", message)
