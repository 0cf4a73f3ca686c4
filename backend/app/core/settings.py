"""
アプリケーション設定（環境変数・定数の一元管理）

【初心者向け】
- Pydantic Settings: 環境変数や.envを読んで型付きで扱うための仕組み
- ここで定義した値は app.core.settings.settings から参照できる
- 主な分類: CORS, Gemini(LLM), Quiz, 採点しきい値, ストップワード, 学習履歴
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """
    アプリケーション設定クラス
    環境変数（または.env）の値が自動でここにマッピングされる
    """

    # CORS設定
    cors_origins: List[str] = ["http://localhost:3000"]

    # Gemini API設定
    gemini_api_key: str = Field(
        default="",
        alias="GEMINI_API_KEY",
        description="Gemini APIキー"
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        alias="GEMINI_MODEL",
        description="写真からの問題生成に使うGeminiモデル名（画像入力対応モデル）"
    )
    gemini_timeout_sec: int = Field(
        default=120,
        alias="GEMINI_TIMEOUT_SEC",
        description="Gemini API呼び出しのタイムアウト秒数"
    )
    quiz_gemini_max_output_tokens: int = Field(
        default=2200,
        alias="QUIZ_GEMINI_MAX_OUTPUT_TOKENS",
        description="Quiz生成時の最大出力トークン数（10問分のJSONが収まる長さ）"
    )
    quiz_gemini_temperature: float | None = Field(
        default=None,
        alias="QUIZ_GEMINI_TEMPERATURE",
        description="Quiz生成時の temperature（未指定ならモデルのデフォルト）"
    )

    # Quiz設定
    quiz_question_count: int = Field(
        default=10,
        alias="QUIZ_QUESTION_COUNT",
        description="1枚の写真から生成する問題数（表示数のデフォルトも兼ねる）"
    )
    quiz_max_questions: int = Field(
        default=50,
        alias="QUIZ_MAX_QUESTIONS",
        description="1セッションで出題できる問題数の上限"
    )
    quiz_image_min_base64_len: int = Field(
        default=50,
        alias="QUIZ_IMAGE_MIN_BASE64_LEN",
        description="画像（base64）の最小文字数（これ未満は不正入力）"
    )
    quiz_mime_type_min_len: int = Field(
        default=3,
        alias="QUIZ_MIME_TYPE_MIN_LEN",
        description="MIMEタイプの最小文字数"
    )

    # 採点しきい値（経験的に決めた値、アルゴリズムを触らずに調整できるよう設定に出す）
    score_correct_threshold: float = Field(
        default=0.88,
        alias="SCORE_CORRECT_THRESHOLD",
        description="記述問題: combined がこの値以上なら正解（1点）"
    )
    score_partial_threshold: float = Field(
        default=0.68,
        alias="SCORE_PARTIAL_THRESHOLD",
        description="記述問題: combined がこの値以上なら部分点（0.5点）"
    )
    score_containment_boost: float = Field(
        default=0.08,
        alias="SCORE_CONTAINMENT_BOOST",
        description="回答と正解候補の一方が他方を含む場合の加点"
    )
    score_similarity_weight: float = Field(
        default=0.65,
        alias="SCORE_SIMILARITY_WEIGHT",
        description="combined の編集距離類似度の重み"
    )
    score_keyword_weight: float = Field(
        default=0.35,
        alias="SCORE_KEYWORD_WEIGHT",
        description="combined のキーワード一致率（Jaccard）の重み"
    )

    # ストップワード（オランダ語・英語の混在が前提の教材）
    stopword_locales: List[str] = Field(
        default=["nl", "en"],
        alias="STOPWORD_LOCALES",
        description="有効にするストップワードのロケール（app.scoring.stopwords.STOPWORDS のキー）"
    )

    # 学習履歴（セッション結果）の保存先
    sessions_dir: str = Field(
        default="backend/data/study_sessions",
        alias="SESSIONS_DIR",
        description="学習セッション結果のJSON保存ディレクトリ（リポジトリルートからの相対パス）"
    )
    session_history_limit: int = Field(
        default=20,
        alias="SESSION_HISTORY_LIMIT",
        description="学習履歴一覧で返す最大件数"
    )

    # Pydantic v2の設定（Configクラスの代わりにmodel_configを使用）
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,  # Fieldのaliasとフィールド名の両方で読み込み可能
        extra="ignore"  # 未定義の環境変数を無視
    )


# グローバル設定インスタンス
settings = Settings()
