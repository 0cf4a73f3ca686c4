"""
学習履歴APIルーター

【初心者向け】
- POST /sessions: 終了したセッションの結果を保存（同じ runId の同じ結果は1回だけ）
- GET /sessions: 新しい順の一覧
- GET /sessions/{id}, DELETE /sessions/{id}
"""
from typing import Optional

from fastapi import APIRouter, Query

from app.core.errors import raise_not_found
from app.quiz.store import delete_session, get_session, list_sessions, save_session
from app.schemas.common import ERROR_RESPONSES
from app.schemas.session import StudySession, StudySessionCreate, StudySessionListResponse

router = APIRouter()


@router.post("", response_model=StudySession)
async def create_session(request: StudySessionCreate) -> StudySession:
    """学習セッションの結果を保存する"""
    return save_session(request)


@router.get("", response_model=StudySessionListResponse)
async def get_sessions(
    limit: Optional[int] = Query(None, ge=1, le=100, description="取得件数上限"),
) -> StudySessionListResponse:
    """学習履歴の一覧を取得する（新しい順）"""
    sessions = list_sessions(limit=limit)
    return StudySessionListResponse(sessions=sessions, total=len(sessions))


@router.get("/{session_id}", response_model=StudySession, responses=ERROR_RESPONSES)
async def get_session_by_id(session_id: str) -> StudySession:
    """学習セッションを1件取得する"""
    session = get_session(session_id)
    if session is None:
        raise_not_found("学習履歴が見つかりません。")
    return session


@router.delete("/{session_id}", responses=ERROR_RESPONSES)
async def delete_session_by_id(session_id: str):
    """学習セッションを削除する"""
    if not delete_session(session_id):
        raise_not_found("学習履歴が見つかりません。")
    return {"deleted": True, "id": session_id}
