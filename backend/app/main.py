"""
FastAPIアプリケーションのエントリーポイント（アプリの起動入口）

【初心者向け】
このファイルはStudySnapのバックエンドAPIサーバーを起動する「玄関」です。
- FastAPI: PythonのWebフレームワーク。REST APIを簡単に作れる
- /health, /quiz, /judge, /sessions のルート（APIの窓口）を登録します

実行方法:
    venv有効化後:
    pip install -e .
    uvicorn app.main:app --reload --port 8000 --app-dir backend
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import settings
from app.routers import health, judge, quiz, sessions

# ロガー設定
logger = logging.getLogger(__name__)

app = FastAPI(
    title="StudySnap API",
    description="Photo-to-quiz generation and answer scoring API",
    version="0.1.0",
)

# CORS設定: フロントエンドからAPIを呼ぶ際の跨域通信を許可
# 環境変数 CORS_ORIGINS で許可するオリジン（例: http://localhost:3000）を指定
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ルーター登録: 各APIの「窓口」をURLパスに割り当て
# /health=死活確認, /quiz=写真から問題生成, /judge=採点, /sessions=学習履歴
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(quiz.router, prefix="/quiz", tags=["quiz"])
app.include_router(judge.router, prefix="/judge", tags=["judge"])
app.include_router(sessions.router, prefix="/sessions", tags=["sessions"])


@app.on_event("startup")
async def startup_event():
    """起動時の処理: 設定の要点をログ出力（観測性）"""
    logger.info(
        f"StudySnap API 起動: gemini_model={settings.gemini_model}, "
        f"has_gemini_key={bool(settings.gemini_api_key)}, "
        f"stopword_locales={settings.stopword_locales}"
    )


@app.get("/")
async def root():
    """ルートエンドポイント"""
    return {"message": "StudySnap API"}
