"""
LLMアダプタ層の基底定義（抽象インターフェース・例外）

【初心者向け】
- VisionLLMClient: Protocol。Gemini 等の実装が generate_from_image(...) を提供する約束
- LLMTimeoutError / LLMInternalError: LLM 呼び出し失敗時に raise。routers で捕捉
"""
from typing import Protocol


class VisionLLMClient(Protocol):
    """
    画像入力対応LLMクライアントのインターフェース

    テストではこのProtocolに準拠した偽クライアントに差し替える
    """

    async def generate_from_image(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        """
        プロンプトと画像をLLMに渡し、出力テキストを取得

        Args:
            prompt: 指示文
            image_bytes: 画像データ（デコード済み）
            mime_type: 画像のMIMEタイプ

        Returns:
            LLMからの出力テキスト

        Raises:
            LLMTimeoutError: タイムアウト時
            LLMInternalError: その他のエラー時
        """
        ...


class LLMError(Exception):
    """LLM関連の基底例外"""
    pass


class LLMTimeoutError(LLMError):
    """LLM呼び出しのタイムアウトエラー"""
    pass


class LLMInternalError(LLMError):
    """LLM呼び出しの内部エラー（HTTPエラー、空応答等）"""
    pass
