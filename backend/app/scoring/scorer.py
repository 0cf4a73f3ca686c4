"""
回答の採点（問題タイプ別の振り分けと部分点判定）

【初心者向け】
- multiple_choice: 正規化後の完全一致のみ（1 or 0点）
- true_false: waar/onwaar・juist/fout 等を解釈して比較（1 or 0点）
- short_answer: 編集距離の類似度とキーワード一致率を組み合わせて 1 / 0.5 / 0点
- どんな入力でも例外を投げずに ScoreResult を返す
"""
import logging

from app.core.settings import settings
from app.schemas.judge import ScoreResult
from app.schemas.quiz import Question
from app.scoring.candidates import split_possible_answers
from app.scoring.similarity import jaccard, similarity
from app.scoring.text import normalize, tokenize
from app.scoring.true_false import parse_true_false

# ロガー設定
logger = logging.getLogger(__name__)


def _correct(reason: str) -> ScoreResult:
    return ScoreResult(points=1, label="correct", reason=reason)


def _partial(reason: str) -> ScoreResult:
    return ScoreResult(points=0.5, label="partial", reason=reason)


def _wrong(reason: str) -> ScoreResult:
    return ScoreResult(points=0, label="wrong", reason=reason)


def score_answer(question: Question, user_answer: str | None) -> ScoreResult:
    """
    問題レコードとユーザーの回答から採点結果を返す

    Args:
        question: 問題レコード
        user_answer: ユーザーの自由入力（空文字列も可）

    Returns:
        ScoreResult（points と label は常に対応: 1=correct, 0.5=partial, 0=wrong）
    """
    ua_raw = (user_answer or "").strip()
    if not ua_raw:
        return _wrong("No answer.")

    if question.type == "multiple_choice":
        return _score_multiple_choice(question, ua_raw)

    if question.type == "true_false":
        return _score_true_false(question, ua_raw)

    return _score_short_answer(question, ua_raw)


def _score_multiple_choice(question: Question, ua_raw: str) -> ScoreResult:
    """選択肢は固定の文字列なので、正規化後の完全一致のみ"""
    if normalize(ua_raw) == normalize(question.answer):
        return _correct("Exact match (multiple choice).")
    return _wrong("Wrong choice.")


def _score_true_false(question: Question, ua_raw: str) -> ScoreResult:
    user_tf = parse_true_false(ua_raw)
    answer_tf = parse_true_false(question.answer)

    if user_tf is None:
        return _wrong("Use waar/onwaar or juist/fout.")

    if answer_tf is None:
        # 正解側が○×として読めない場合は文字列の一致で判定
        logger.debug(f"[SCORE:TRUE_FALSE] 正解を○×として解釈できません: answer='{question.answer[:50]}'")
        if normalize(ua_raw) == normalize(question.answer):
            return _correct("Match.")
        return _wrong("Wrong.")

    if user_tf == answer_tf:
        return _correct("Correct waar/onwaar.")
    return _wrong("Wrong waar/onwaar.")


def _score_short_answer(question: Question, ua_raw: str) -> ScoreResult:
    """
    記述問題の採点

    1. 正解文を候補に分割
    2. 各候補と類似度・キーワード一致率を計算し、類似度最大（同点は一致率）の候補を採用
    3. 一方が他方を含めば加点
    4. combined = max(sim, sim*0.65 + kw*0.35) + 加点 をしきい値で 1 / 0.5 / 0 に振り分け
    """
    candidates = split_possible_answers(question.answer)
    ua_tokens = tokenize(ua_raw)

    best_sim = 0.0
    best_j = 0.0
    best_candidate = candidates[0] if candidates else question.answer

    for candidate in candidates:
        sim = similarity(ua_raw, candidate)
        j = jaccard(ua_tokens, tokenize(candidate))
        if sim > best_sim or (sim == best_sim and j > best_j):
            best_sim = sim
            best_j = j
            best_candidate = candidate

    norm_user = normalize(ua_raw)
    norm_candidate = normalize(best_candidate)
    contains = norm_candidate in norm_user or norm_user in norm_candidate
    boost = settings.score_containment_boost if contains else 0.0

    blended = best_sim * settings.score_similarity_weight + best_j * settings.score_keyword_weight
    combined = max(best_sim, blended) + boost

    logger.debug(
        f"[SCORE:SHORT_ANSWER] candidates={len(candidates)}, "
        f"best_candidate='{best_candidate[:50]}', "
        f"sim={best_sim:.3f}, kw={best_j:.3f}, boost={boost}, combined={combined:.3f}"
    )

    metrics = f"sim {best_sim:.2f}, kw {best_j:.2f}"
    if combined >= settings.score_correct_threshold:
        return _correct(f"Strong match ({metrics}).")
    if combined >= settings.score_partial_threshold:
        return _partial(f"Almost correct ({metrics}).")
    return _wrong(f"Too far off ({metrics}).")
