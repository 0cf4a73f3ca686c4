"""
LLMアダプタ層

【初心者向け】
- VisionLLMClientインターフェースを実装したクライアントを提供
- 写真の読み取りに画像入力対応のGeminiを使う
- routers からは FastAPI の Depends(get_llm_client) で受け取る（テストで差し替え可能）
"""
from app.llm.base import VisionLLMClient
from app.llm.gemini import get_gemini_client


def get_llm_client() -> VisionLLMClient:
    """
    LLMクライアントを取得

    Returns:
        VisionLLMClientインターフェースを実装したクライアント

    Raises:
        ValueError: GEMINI_API_KEY が未設定の場合
    """
    return get_gemini_client()
