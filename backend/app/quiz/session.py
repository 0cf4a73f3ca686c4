"""
クイズセッションの進行ロジック（出題数・シャッフル・集計・やり直し）

【初心者向け】
- 採点そのものは app.scoring.score_answer に任せる
- ここでは「何問出すか」「合計何点か」「どれをやり直すか」を決める
- 採点結果（ScoreResult）は変更しない値として扱い、インデックス → 結果の dict に貯める
"""
import random
from typing import Any, Mapping, Sequence

from app.core.settings import settings
from app.schemas.judge import ScoreResult, SessionSummary
from app.schemas.quiz import Question
from app.scoring import score_answer


def clamp_question_count(raw: Any, available: int | None = None) -> int:
    """
    出題数を 1〜quiz_max_questions（available があればそれ以下）に収める

    数値として読めなければ settings.quiz_question_count を使う。
    """
    try:
        n = int(raw)
    except (TypeError, ValueError):
        n = settings.quiz_question_count

    n = max(1, min(settings.quiz_max_questions, n))
    if available is not None and available > 0:
        n = min(n, available)
    return n


def shuffle_questions(questions: Sequence[Question], rng: random.Random | None = None) -> list[Question]:
    """シャッフルした新しいリストを返す（元のリストは変更しない）"""
    shuffled = list(questions)
    (rng or random).shuffle(shuffled)
    return shuffled


def score_session(questions: Sequence[Question], answers: Mapping[int, str]) -> dict[int, ScoreResult]:
    """
    回答済みの問題だけを採点する

    Args:
        questions: 出題中の問題リスト
        answers: 問題インデックス → 回答

    Returns:
        問題インデックス → ScoreResult（範囲外のインデックスは無視）
    """
    results: dict[int, ScoreResult] = {}
    for index in sorted(answers):
        if 0 <= index < len(questions):
            results[index] = score_answer(questions[index], answers[index])
    return results


def summarize_session(questions: Sequence[Question], results: Mapping[int, ScoreResult]) -> SessionSummary:
    """合計点・満点（1問1点）・採点済み数を集計"""
    total = len(questions)
    checked = sum(1 for index in results if 0 <= index < total)
    score = sum(results[index].points for index in results if 0 <= index < total)

    return SessionSummary(
        score=score,
        max_score=total,
        total=total,
        checked=checked,
        finished=total > 0 and checked >= total,
    )


def select_retry_indexes(results: Mapping[int, ScoreResult]) -> list[int]:
    """満点でなかった（部分点・不正解）問題のインデックス"""
    return sorted(index for index, result in results.items() if result.points < 1)


def select_retry_questions(questions: Sequence[Question], results: Mapping[int, ScoreResult]) -> list[Question]:
    """やり直し用の問題リスト（インデックス順）"""
    return [questions[i] for i in select_retry_indexes(results) if 0 <= i < len(questions)]
