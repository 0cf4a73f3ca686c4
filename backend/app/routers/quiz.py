"""
Quiz APIルーター（写真からの問題生成）
"""
import base64
import binascii
import logging
import time

from fastapi import APIRouter, Depends

from app.core.errors import raise_internal_error, raise_invalid_input, raise_timeout
from app.core.settings import settings
from app.llm import get_llm_client
from app.llm.base import LLMInternalError, LLMTimeoutError, VisionLLMClient
from app.llm.prompt import build_image_quiz_prompt
from app.quiz.parser import QuizParseError, parse_quiz_result
from app.quiz.session import clamp_question_count, shuffle_questions
from app.schemas.common import ERROR_RESPONSES
from app.schemas.quiz import QuizImageRequest, QuizResult

# ロガー設定
logger = logging.getLogger(__name__)

router = APIRouter()


def llm_client_dependency() -> VisionLLMClient:
    """
    LLMクライアントを取得する（テストでは dependency_overrides で差し替える）

    APIキー未設定は INTERNAL_ERROR（HTTP 500）
    """
    try:
        return get_llm_client()
    except ValueError as e:
        logger.error(f"LLMクライアントの初期化に失敗: {e}")
        raise_internal_error(str(e))


def _decode_image(request: QuizImageRequest) -> bytes:
    """base64の画像データを検証してデコードする"""
    if len(request.image_base64) < settings.quiz_image_min_base64_len:
        raise_invalid_input("画像データが短すぎます。写真を選び直してください。")
    if len(request.mime_type) < settings.quiz_mime_type_min_len:
        raise_invalid_input("MIMEタイプが不正です。")

    try:
        return base64.b64decode(request.image_base64, validate=True)
    except (binascii.Error, ValueError):
        raise_invalid_input("画像データがbase64として読めません。")


@router.post("/generate-from-image", response_model=QuizResult, responses=ERROR_RESPONSES)
async def generate_from_image(
    request: QuizImageRequest,
    llm: VisionLLMClient = Depends(llm_client_dependency),
) -> QuizResult:
    """
    写真に写った本文から問題セットを生成する

    Args:
        request: 画像（base64）、MIMEタイプ、出題数

    Returns:
        title と questions（shuffle=true なら順番をシャッフルし、出題数で切り詰める）
    """
    t_start = time.perf_counter()

    image_bytes = _decode_image(request)
    count = clamp_question_count(request.question_count)
    prompt = build_image_quiz_prompt(count)

    try:
        text = await llm.generate_from_image(prompt, image_bytes, request.mime_type)
    except LLMTimeoutError as e:
        raise_timeout(str(e))
    except LLMInternalError as e:
        raise_internal_error(str(e))

    try:
        result = parse_quiz_result(text)
    except QuizParseError as e:
        logger.error(f"問題セットのパースに失敗: {e}")
        raise_internal_error(str(e))

    questions = result.questions
    if request.shuffle:
        questions = shuffle_questions(questions)

    # 生成数が足りなければあるだけ出す
    questions = questions[:clamp_question_count(count, available=len(questions))]
    result = QuizResult(title=result.title, questions=questions)

    t_total_ms = (time.perf_counter() - t_start) * 1000
    logger.info(
        f"[QUIZ:GENERATE] title='{result.title}', questions={len(result.questions)}, "
        f"total_ms={t_total_ms:.0f}"
    )
    return result
