"""
学習履歴API用スキーマ

【初心者向け】
- StudySessionCreate: 終了したセッションの結果（mode, score, max_score, total_questions, topic, run_id）
- StudySession: 保存済みの1件（id, created_at, run_key 付き）
- run_id はクライアントが1回の出題ごとに振るID。同じ回の二重送信だけを1件にまとめる
"""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

SessionMode = Literal["normal", "retry"]


class StudySessionCreate(BaseModel):
    """学習セッション保存リクエスト"""
    model_config = ConfigDict(populate_by_name=True)

    mode: SessionMode = Field(default="normal", description="通常 or やり直し")
    score: float = Field(..., ge=0, description="合計点")
    max_score: int = Field(..., ge=0, description="満点")
    total_questions: int = Field(..., ge=0, description="出題数")
    checked: Optional[int] = Field(
        None,
        ge=0,
        description="採点済み数（未指定なら total_questions）"
    )
    topic: Optional[str] = Field(None, description="トピック（問題セットのタイトル）")
    run_id: Optional[str] = Field(
        None,
        alias="runId",
        max_length=64,
        description="1回の出題を表すID（未指定なら毎回新しい履歴として保存）"
    )


class StudySession(BaseModel):
    """保存済み学習セッション"""
    id: str = Field(..., description="セッションID")
    mode: SessionMode
    score: float
    max_score: int
    total_questions: int
    topic: Optional[str] = None
    created_at: str = Field(..., description="作成日時（ISO形式）")
    run_key: str = Field(..., description="同じ回の二重保存を防ぐキー")


class StudySessionListResponse(BaseModel):
    """学習履歴一覧レスポンス"""
    sessions: list[StudySession]
    total: int
