"""
Judge APIルーター（自由入力の採点）

【初心者向け】
- POST /judge: 1問分を採点して { points, label, reason } を返す
- POST /judge/batch: 回答済みの問題をまとめて採点し、合計点とやり直し対象（インデックスと問題）を返す
"""
import logging

from fastapi import APIRouter

from app.core.errors import raise_invalid_input
from app.quiz.session import (
    score_session,
    select_retry_indexes,
    select_retry_questions,
    summarize_session,
)
from app.schemas.common import ERROR_RESPONSES
from app.schemas.judge import (
    JudgeBatchRequest,
    JudgeBatchResponse,
    JudgeRequest,
    ScoreResult,
)
from app.scoring import score_answer

# ロガー設定
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ScoreResult)
async def judge_answer(request: JudgeRequest) -> ScoreResult:
    """
    回答を判定する

    - question: 必須。問題レコード（type / answer は必須）
    - user_answer (userAnswer): 任意。空なら 0点
    """
    result = score_answer(request.question, request.user_answer)
    logger.info(f"[JUDGE] type={request.question.type}, points={result.points}, label={result.label}")
    return result


@router.post("/batch", response_model=JudgeBatchResponse, responses=ERROR_RESPONSES)
async def judge_batch(request: JudgeBatchRequest) -> JudgeBatchResponse:
    """
    回答済みの問題をまとめて判定する（やり直しセットの再採点など）

    answers のインデックスが questions の範囲外なら INVALID_INPUT（HTTP 400）
    """
    out_of_range = [i for i in request.answers if not 0 <= i < len(request.questions)]
    if out_of_range:
        raise_invalid_input(f"存在しない問題インデックスです: {sorted(out_of_range)}")

    results = score_session(request.questions, request.answers)
    summary = summarize_session(request.questions, results)

    logger.info(
        f"[JUDGE:BATCH] questions={summary.total}, checked={summary.checked}, "
        f"score={summary.score}/{summary.max_score}"
    )

    return JudgeBatchResponse(
        results=results,
        summary=summary,
        retry_indexes=select_retry_indexes(results),
        retry_questions=select_retry_questions(request.questions, results),
    )
