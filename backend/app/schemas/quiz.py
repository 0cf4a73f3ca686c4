"""
Quiz API用スキーマ（写真からの問題生成・問題レコードの型）

【初心者向け】
- Question: 1問分（type, difficulty, question, choices, answer, explanation, evidence）
- QuizResult: 生成結果（title + questions）
- QuizImageRequest: 写真（base64）とMIMEタイプ、シャッフル有無と出題数
"""
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

QuestionType = Literal["short_answer", "true_false", "multiple_choice"]
Difficulty = Literal["easy", "medium", "hard"]


def _to_text(value: Any) -> str:
    """LLMが文字列以外（true / 3 / ["A", "B"]）を返した場合に文字列へ寄せる"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(_to_text(v) for v in value)
    return str(value)


class Question(BaseModel):
    """問題レコード（生成後は変更しない）"""
    model_config = ConfigDict(frozen=True)

    type: QuestionType = Field(..., description="問題タイプ")
    difficulty: Difficulty = Field(default="medium", description="難易度")
    question: str = Field(default="", description="問題文")
    choices: Optional[list[str]] = Field(
        None,
        description="選択肢（multiple_choice のみ）"
    )
    answer: str = Field(..., description="正解（複数の正解を ', ' や ' of ' で含むことがある）")
    explanation: str = Field(default="", description="解説")
    evidence: str = Field(default="", description="写真の本文からの根拠スニペット")

    @field_validator("answer", "question", "explanation", "evidence", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _to_text(value)

    @field_validator("choices", mode="before")
    @classmethod
    def _coerce_choices(cls, value: Any) -> Optional[list[str]]:
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            return [_to_text(value)]
        return [_to_text(v) for v in value]


class QuizResult(BaseModel):
    """写真から生成された問題セット"""
    title: str = Field(..., description="短いタイトル")
    questions: list[Question] = Field(..., description="問題リスト")


class QuizImageRequest(BaseModel):
    """写真からの問題生成リクエスト"""
    model_config = ConfigDict(populate_by_name=True)

    image_base64: str = Field(
        ...,
        alias="imageBase64",
        description="画像データ（data: プレフィックスなしのbase64）"
    )
    mime_type: str = Field(
        ...,
        alias="mimeType",
        description="画像のMIMEタイプ（例: image/jpeg）"
    )
    shuffle: bool = Field(
        default=True,
        description="問題順をシャッフルするかどうか"
    )
    question_count: Optional[int] = Field(
        None,
        alias="questionCount",
        description="出題数（1〜quiz_max_questions、未指定なら quiz_question_count）"
    )
