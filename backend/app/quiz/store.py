"""
学習履歴ストア（JSONファイルベース永続化）

1セッション = 1 JSONファイル（<id>.json）。
同じ回（run_id + 結果が同じ run_key）の二重保存はせず、直近の保存済みのものを返す。
run_id がなければ毎回新しい履歴として保存する。
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, List

from app.core.settings import settings
from app.schemas.session import StudySession, StudySessionCreate

# ロガー設定
logger = logging.getLogger(__name__)


def _get_store_dir() -> Path:
    """
    ストアディレクトリのパスを取得（存在しない場合は作成）

    settings.sessions_dir が相対パスならリポジトリルートからの相対として扱う。

    Returns:
        Path: ストアディレクトリのパス
    """
    store_dir = Path(settings.sessions_dir)
    if not store_dir.is_absolute():
        # backend/app/quiz/store.py から見て ../../..
        repo_root = Path(__file__).resolve().parent.parent.parent.parent
        store_dir = repo_root / store_dir

    store_dir.mkdir(parents=True, exist_ok=True)
    return store_dir


def build_run_key(request: StudySessionCreate) -> str:
    """
    1回のセッション結果を表すキー

    mode:score:max_score:total:topic:checked（run_id があれば先頭に付ける）
    """
    checked = request.checked if request.checked is not None else request.total_questions
    key = (
        f"{request.mode}:{request.score:g}:{request.max_score}:"
        f"{request.total_questions}:{request.topic or ''}:{checked}"
    )
    if request.run_id:
        key = f"{request.run_id}:{key}"
    return key


def _session_path(session_id: str) -> Optional[Path]:
    """セッションIDからファイルパス（UUID以外のIDは None）"""
    try:
        uuid.UUID(session_id)
    except ValueError:
        return None
    return _get_store_dir() / f"{session_id}.json"


def _read_session(file_path: Path) -> StudySession:
    with open(file_path, "r", encoding="utf-8") as f:
        return StudySession.model_validate(json.load(f))


def _iter_sessions() -> List[StudySession]:
    sessions = []
    for file_path in _get_store_dir().glob("*.json"):
        try:
            sessions.append(_read_session(file_path))
        except Exception as e:
            logger.warning(f"Failed to load study session from {file_path}: {e}")
            continue
    return sessions


def _latest_session_files() -> List[Path]:
    """最後に書き込まれたファイル（更新時刻が同じものは全部）"""
    stamped = [(p.stat().st_mtime_ns, p) for p in _get_store_dir().glob("*.json")]
    if not stamped:
        return []
    latest = max(mtime for mtime, _ in stamped)
    return [p for mtime, p in stamped if mtime == latest]


def find_latest_by_run_key(run_key: str) -> Optional[StudySession]:
    """直近に保存されたセッションの run_key が一致すればそれを返す"""
    for file_path in _latest_session_files():
        try:
            session = _read_session(file_path)
        except Exception as e:
            logger.warning(f"Failed to load study session from {file_path}: {e}")
            continue
        if session.run_key == run_key:
            return session
    return None


def save_session(request: StudySessionCreate) -> StudySession:
    """
    学習セッションをJSONファイルとして保存

    Args:
        request: セッション結果

    Returns:
        StudySession: 保存したセッション（同じ回の保存が直前にあればそれ）
    """
    run_key = build_run_key(request)

    if request.run_id:
        existing = find_latest_by_run_key(run_key)
        if existing is not None:
            logger.info(f"[SESSION:SAVE] 既に保存済みのためスキップ: {existing.id} (run_key={run_key})")
            return existing

    session = StudySession(
        id=str(uuid.uuid4()),
        mode=request.mode,
        score=request.score,
        max_score=request.max_score,
        total_questions=request.total_questions,
        topic=request.topic,
        created_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        run_key=run_key,
    )

    file_path = _get_store_dir() / f"{session.id}.json"

    try:
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(session.model_dump(), f, ensure_ascii=False, indent=2)

        logger.info(f"[SESSION:SAVE] StudySession saved: {session.id} -> {file_path}")
        return session

    except Exception as e:
        logger.error(f"Failed to save study session {session.id}: {e}")
        raise


def get_session(session_id: str) -> Optional[StudySession]:
    """
    学習セッションを読み込み

    Returns:
        StudySession、またはNone（見つからない場合）
    """
    file_path = _session_path(session_id)

    if file_path is None or not file_path.exists():
        logger.warning(f"StudySession not found: {session_id}")
        return None

    try:
        return _read_session(file_path)
    except Exception as e:
        logger.error(f"Failed to load study session {session_id}: {e}")
        raise


def list_sessions(limit: Optional[int] = None) -> List[StudySession]:
    """
    学習履歴の一覧（新しい順）

    Args:
        limit: 取得件数上限（None なら settings.session_history_limit）
    """
    if limit is None:
        limit = settings.session_history_limit

    sessions = _iter_sessions()
    sessions.sort(key=lambda s: s.created_at, reverse=True)
    return sessions[:limit]


def delete_session(session_id: str) -> bool:
    """
    学習セッションを削除

    Returns:
        bool: 削除成功時True、見つからない場合False
    """
    file_path = _session_path(session_id)

    if file_path is None or not file_path.exists():
        logger.warning(f"StudySession not found for deletion: {session_id}")
        return False

    try:
        file_path.unlink()
        logger.info(f"StudySession deleted: {session_id}")
        return True

    except Exception as e:
        logger.error(f"Failed to delete study session {session_id}: {e}")
        raise
