"""
正解候補の分割（「A, B」「A / B」「A of B」など複数の正解を含む解答文）
"""
import re
from typing import List

# 区切り: , / ; と単語としての or / of（蘭: または）/ en（蘭: と）
# NOTE: "en"/"or" で分割するため、自然に "and" 相当を含む1つの正解も分割されうる
# NOTE: \b は Unicode の単語境界。アクセント付き文字（é, ë など）も単語の一部として扱い、その隣では区切らない
_ALTERNATIVE_SPLIT_RE = re.compile(r",|/|;|\bor\b|\bof\b|\ben\b", re.IGNORECASE)


def split_possible_answers(answer: str | None) -> List[str]:
    """
    解答文を受理できる正解候補のリストに分割する

    - 空なら []
    - 分割して1つ以下しか残らなければ [元の文字列]
    - それ以外は [元の文字列, 断片...]（重複除去、出現順を維持）

    Example:
        "Paris, France" → ["Paris, France", "Paris", "France"]
    """
    raw = (answer or "").strip()
    if not raw:
        return []

    parts = [p.strip() for p in _ALTERNATIVE_SPLIT_RE.split(raw)]
    parts = [p for p in parts if p]

    if len(parts) <= 1:
        return [raw]

    return list(dict.fromkeys([raw, *parts]))
