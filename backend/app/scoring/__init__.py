"""
採点エンジン

【初心者向け】
- score_answer(question, user_answer) だけ使えばよい
- 部品（normalize / similarity / jaccard / split_possible_answers / parse_true_false）も公開
- 入出力のみの純粋関数なので、並行に呼んでも安全
"""
from app.scoring.candidates import split_possible_answers
from app.scoring.scorer import score_answer
from app.scoring.similarity import jaccard, levenshtein, similarity
from app.scoring.text import normalize, tokenize
from app.scoring.true_false import parse_true_false

__all__ = [
    "score_answer",
    "normalize",
    "tokenize",
    "levenshtein",
    "similarity",
    "jaccard",
    "split_possible_answers",
    "parse_true_false",
]
