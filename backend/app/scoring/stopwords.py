"""
ストップワード（採点時に無視する機能語）

【初心者向け】
- 教材はオランダ語と英語が混在するため、両言語の機能語をロケール別に持つ
- 有効なロケールは settings.stopword_locales で切り替える（コード変更なしで追加可能）
"""
from typing import Iterable, List, Set

from app.core.settings import settings

# ロケール別ストップワード
STOPWORDS: dict[str, frozenset[str]] = {
    "nl": frozenset({
        "de", "het", "een", "en", "of", "van", "in", "op", "voor",
        "zijn", "wordt", "is",
    }),
    "en": frozenset({
        "to", "the", "a", "an", "is", "of", "in",
    }),
}


def get_stopwords(locales: Iterable[str] | None = None) -> Set[str]:
    """
    指定ロケールのストップワードの和集合を返す

    Args:
        locales: ロケールのリスト（None なら settings.stopword_locales）

    Returns:
        ストップワード集合（未知のロケールは無視）
    """
    if locales is None:
        locales = settings.stopword_locales

    words: Set[str] = set()
    for locale in locales:
        words |= STOPWORDS.get(locale.lower(), frozenset())
    return words


def remove_stopwords(tokens: List[str], locales: Iterable[str] | None = None) -> List[str]:
    """トークン列からストップワードを除去する（順序・重複は維持）"""
    stopwords = get_stopwords(locales)
    return [t for t in tokens if t not in stopwords]
