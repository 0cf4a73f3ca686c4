"""
Judge API用スキーマ（採点のリクエスト・レスポンス型）

【初心者向け】
- ScoreResult: points（0 / 0.5 / 1）, label（correct / partial / wrong）, reason
- JudgeRequest: 問題レコード + ユーザーの自由入力
- JudgeBatchRequest: 問題リスト + {index: 回答}（やり直しセットの再採点など）
"""
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.quiz import Question

Points = Literal[0, 0.5, 1]
Label = Literal["correct", "partial", "wrong"]


class ScoreResult(BaseModel):
    """採点結果（作成後は変更しない値オブジェクト）"""
    model_config = ConfigDict(frozen=True)

    points: Points
    label: Label
    reason: str


class SessionSummary(BaseModel):
    """セッションの集計"""
    score: float = Field(..., description="合計点（部分点0.5を含む）")
    max_score: int = Field(..., description="満点（1問1点）")
    total: int = Field(..., description="出題数")
    checked: int = Field(..., description="採点済みの問題数")
    finished: bool = Field(..., description="全問採点済みかどうか")


class JudgeRequest(BaseModel):
    """判定リクエスト"""
    model_config = ConfigDict(populate_by_name=True)

    question: Question = Field(..., description="問題レコード")
    user_answer: str = Field(default="", alias="userAnswer", description="ユーザーの回答（自由入力）")


class JudgeBatchRequest(BaseModel):
    """まとめて判定するリクエスト"""
    questions: list[Question] = Field(..., description="出題中の問題リスト")
    answers: dict[int, str] = Field(..., description="問題インデックス → 回答")


class JudgeBatchResponse(BaseModel):
    """まとめて判定したレスポンス"""
    results: dict[int, ScoreResult]
    summary: SessionSummary
    retry_indexes: list[int] = Field(..., description="満点でなかった問題のインデックス（やり直し用）")
    retry_questions: list[Question] = Field(..., description="やり直し用の問題リスト（インデックス順）")
