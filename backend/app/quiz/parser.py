"""
写真から生成された問題セットのJSONパース
"""
import json
import logging

from pydantic import ValidationError

from app.schemas.quiz import Question, QuizResult

# ロガー設定
logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Quiz"


class QuizParseError(ValueError):
    """LLM出力から問題セットを取り出せない場合のエラー"""
    pass


def extract_json_object(text: str) -> dict:
    """
    LLM出力からJSONオブジェクトを取り出す

    処理順序:
    1. そのまま json.loads
    2. 最初の { から最後の } までを切り出して json.loads

    Raises:
        QuizParseError: 空応答、またはJSONとして読めない場合
    """
    if not text or not text.strip():
        raise QuizParseError("empty_response")

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = None

    if data is None:
        start = text.find("{")
        end = text.rfind("}")
        if start < 0 or end <= start:
            logger.error(f"JSONブロックの {{}} が見つかりません（先頭200文字）: {text[:200]}")
            raise QuizParseError("Model output is not valid JSON.")

        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            logger.error(f"JSONパースエラー: {e}")
            raise QuizParseError(f"Model output is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise QuizParseError("Model output is not a JSON object.")

    return data


def parse_quiz_result(response_text: str) -> QuizResult:
    """
    LLMレスポンスから問題セットをパース

    - 不正な問題レコード（type 不明、answer 欠落など）は警告ログを出して捨てる
    - title がなければ "Quiz"

    Args:
        response_text: LLMからのレスポンステキスト

    Returns:
        QuizResult

    Raises:
        QuizParseError: JSONが読めない、または有効な問題が0件の場合
    """
    logger.info(
        f"[PARSE:RAW_PREVIEW] "
        f"raw_len={len(response_text) if response_text else 0}, "
        f"raw_head={response_text[:150] if response_text else 'EMPTY'}"
    )

    data = extract_json_object(response_text)

    questions_data = data.get("questions")
    if not isinstance(questions_data, list):
        raise QuizParseError("JSONに 'questions' リストが含まれていません")

    questions: list[Question] = []
    for i, question_data in enumerate(questions_data):
        if not isinstance(question_data, dict):
            logger.warning(f"問題 {i} が dict ではありません: {type(question_data).__name__}")
            continue
        try:
            questions.append(Question.model_validate(question_data))
        except ValidationError as e:
            logger.warning(f"問題 {i} のパースに失敗: {e.error_count()} errors, keys={list(question_data.keys())}")
            continue

    logger.info(f"[PARSE:QUESTIONS] accepted={len(questions)}, total={len(questions_data)}")

    if not questions:
        raise QuizParseError("AI gaf geen vragen terug. Probeer een scherpere foto.")

    title = str(data.get("title") or "").strip() or DEFAULT_TITLE
    return QuizResult(title=title, questions=questions)
