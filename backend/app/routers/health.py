"""
Health check APIルーター（死活確認用）

【初心者向け】
- GET /health: サーバーが生きているか + Gemini APIキーが設定済みかを返す
- キーの値そのものは返さない
"""
from fastapi import APIRouter

from app.core.settings import settings

router = APIRouter()


@router.get("")
async def health_check():
    """ヘルスチェック用エンドポイント"""
    return {"ok": True, "has_gemini_key": bool(settings.gemini_api_key)}
