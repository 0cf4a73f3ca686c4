"""
採点用テキスト正規化・トークン化
"""
import re
from typing import List

from app.scoring.stopwords import remove_stopwords

# 除去する句読点（空白には置換せず、そのまま削除）
_PUNCTUATION_RE = re.compile(r"[.,;:!?()\[\]{}\"'`]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """
    テキストを比較用に正規化する

    処理内容:
    1. 小文字化
    2. 句読点 . , ; : ! ? ( ) [ ] { } " ' ` を削除
    3. 連続する空白を1つに
    4. 前後の空白を削除

    句読点を先に削除してから空白を詰めるので、正規化済みの文字列を
    もう一度正規化しても変わらない。

    Args:
        text: 元のテキスト（None は空文字列扱い）

    Returns:
        正規化されたテキスト

    Example:
        "  Paris,  France! " → "paris france"
    """
    if not text:
        return ""

    normalized = text.lower()
    normalized = _PUNCTUATION_RE.sub("", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def tokenize(text: str | None) -> List[str]:
    """
    正規化したテキストを内容語トークンに分割する

    - 空白で分割し、空の断片は捨てる
    - ストップワード（de, het, the, ...）を除去
    - 順序と重複はそのまま（呼び出し側で集合にする）
    """
    norm = normalize(text)
    if not norm:
        return []

    tokens = [t.strip() for t in norm.split(" ")]
    tokens = [t for t in tokens if t]
    return remove_stopwords(tokens)
