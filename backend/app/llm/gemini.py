"""
Gemini API LLMクライアント（Google Gemini APIとの通信）

【初心者向け】
- Google Gemini APIに写真とプロンプトを渡して問題を生成させる
- VisionLLMClientインターフェースを実装
"""
import asyncio
import logging
import re
import time
from functools import lru_cache

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from app.core.settings import settings
from app.llm.base import LLMTimeoutError, LLMInternalError

# ロガー設定
logger = logging.getLogger(__name__)

# 429（クォータ制限）時の最大リトライ回数と基本待機時間（秒）
MAX_RETRIES = 3
RETRY_DELAY_BASE = 1.0


def _parse_retry_delay(error_str: str) -> float | None:
    """エラーメッセージの "Please retry in 12.3s" から待機秒数を取り出す"""
    match = re.search(r'Please retry in ([\d.]+)s', error_str)
    if match:
        return float(match.group(1))
    return None


class GeminiClient:
    """
    Gemini APIクライアント

    - google.generativeai を使用してGemini APIを呼び出す
    - VisionLLMClientインターフェースに準拠
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_sec: int | None = None,
    ):
        """
        Geminiクライアントを初期化

        Args:
            api_key: Gemini APIキー（デフォルト: settingsから取得）
            model: 使用するモデル名（デフォルト: settingsから取得）
            timeout_sec: タイムアウト秒数（デフォルト: settingsから取得）
        """
        self.api_key = api_key or settings.gemini_api_key
        self.model_name = model or settings.gemini_model
        self.timeout_sec = timeout_sec or settings.gemini_timeout_sec

        if not self.api_key:
            raise ValueError("Gemini APIキーが設定されていません。GEMINI_API_KEY環境変数を設定してください。")

        genai.configure(api_key=self.api_key)

        try:
            self.model = genai.GenerativeModel(self.model_name)
        except Exception as e:
            logger.error(f"Geminiモデルの初期化に失敗: {e}")
            raise LLMInternalError(f"Geminiモデルの初期化に失敗しました: {str(e)}")

    def _generation_config(self) -> dict:
        config = {"max_output_tokens": settings.quiz_gemini_max_output_tokens}
        if settings.quiz_gemini_temperature is not None:
            config["temperature"] = settings.quiz_gemini_temperature
        return config

    async def generate_from_image(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        """
        プロンプトと画像をGemini APIに渡し、出力テキストを取得

        Args:
            prompt: 指示文
            image_bytes: 画像データ
            mime_type: 画像のMIMEタイプ

        Returns:
            Gemini APIからの出力テキスト

        Raises:
            LLMTimeoutError: タイムアウト時
            LLMInternalError: APIエラーや空応答時
        """
        contents = [
            prompt,
            {"mime_type": mime_type, "data": image_bytes},
        ]
        generation_config = self._generation_config()

        logger.info(
            f"Gemini 問題生成: model={self.model_name}, mime_type={mime_type}, "
            f"image_bytes={len(image_bytes)}, config={generation_config}"
        )

        # 注意: generate_content は同期APIのため asyncio でラップ
        def _generate():
            for attempt in range(MAX_RETRIES):
                try:
                    response = self.model.generate_content(
                        contents,
                        generation_config=generation_config,
                    )
                    return response.text
                except google_exceptions.ResourceExhausted as e:
                    error_str = str(e)
                    retry_delay = _parse_retry_delay(error_str)

                    if attempt < MAX_RETRIES - 1:
                        wait_time = retry_delay if retry_delay else RETRY_DELAY_BASE * (2 ** attempt)
                        logger.warning(
                            f"Gemini API クォータ制限エラー（429）: {error_str[:200]}... "
                            f"リトライ待機: {wait_time:.1f}秒後（試行 {attempt + 1}/{MAX_RETRIES}）"
                        )
                        time.sleep(wait_time)
                        continue

                    error_message = "Gemini APIのクォータ制限に達しました。しばらく時間をおいてから再度お試しください。"
                    if retry_delay:
                        error_message += f" 推奨待機時間: {retry_delay:.0f}秒"
                    raise LLMInternalError(error_message)
                except Exception as e:
                    raise LLMInternalError(f"Gemini API呼び出しエラー: {str(e)}")

            raise LLMInternalError("Gemini API呼び出しに失敗しました")

        try:
            answer = await asyncio.wait_for(
                asyncio.to_thread(_generate),
                timeout=self.timeout_sec
            )
        except asyncio.TimeoutError:
            logger.error(f"Gemini APIタイムアウト: {self.timeout_sec}秒")
            raise LLMTimeoutError(f"Gemini APIへのリクエストがタイムアウトしました（{self.timeout_sec}秒）")

        if not answer or not answer.strip():
            logger.error("Gemini APIが空応答を返しました")
            raise LLMInternalError("empty_response")

        logger.info(f"Gemini API回答取得成功: {len(answer)}文字")
        return answer


@lru_cache(maxsize=1)
def get_gemini_client() -> GeminiClient:
    """
    Geminiクライアントのシングルトンインスタンスを取得（@lru_cacheで生成を抑える）

    Returns:
        GeminiClientインスタンス
    """
    return GeminiClient()
