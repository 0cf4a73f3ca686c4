"""
文字列類似度（編集距離）とキーワード一致率（Jaccard）
"""
from typing import Iterable

from app.scoring.text import normalize


def levenshtein(a: str, b: str) -> int:
    """
    レーベンシュタイン距離（挿入・削除・置換いずれもコスト1）

    (len(a)+1) x (len(b)+1) のDPテーブルで計算する。
    """
    m = len(a)
    n = len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,  # 削除
                dp[i][j - 1] + 1,  # 挿入
                dp[i - 1][j - 1] + cost,  # 置換
            )

    return dp[m][n]


def similarity(a: str | None, b: str | None) -> float:
    """
    正規化後の2つの文字列の類似度（0.0〜1.0）

    similarity = 1 - distance / max(len(A), len(B))

    - 両方とも空: 1.0（空同士は一致とみなす）
    - 片方だけ空: 0.0
    """
    norm_a = normalize(a)
    norm_b = normalize(b)

    if not norm_a and not norm_b:
        return 1.0
    if not norm_a or not norm_b:
        return 0.0

    dist = levenshtein(norm_a, norm_b)
    max_len = max(len(norm_a), len(norm_b))
    return 1.0 - dist / max_len


def jaccard(a_tokens: Iterable[str], b_tokens: Iterable[str]) -> float:
    """
    トークン集合の Jaccard 係数 |A∩B| / |A∪B|

    両方とも空なら 1.0（0/0 を避ける）。
    """
    set_a = set(a_tokens)
    set_b = set(b_tokens)

    if not set_a and not set_b:
        return 1.0

    union = set_a | set_b
    return len(set_a & set_b) / len(union)
