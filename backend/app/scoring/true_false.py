"""
○×（waar/onwaar）回答の解釈
"""
from app.scoring.text import normalize

TRUE_VALUES = frozenset({"true", "t", "waar", "juist", "yes", "y", "1", "w"})
FALSE_VALUES = frozenset({"false", "f", "onwaar", "fout", "no", "n", "0", "o"})

# 後ろに理由が続く回答（"waar, want ..."）用の前方一致
# "onwaar" は "waar" で始まらないので、この順でも誤判定しない
TRUE_PREFIXES = ("waar", "juist")
FALSE_PREFIXES = ("onwaar", "fout")


def parse_true_false(text: str | None) -> bool | None:
    """
    自由入力を True / False に解釈する

    Returns:
        True / False、解釈できなければ None
    """
    x = normalize(text)

    if x in TRUE_VALUES:
        return True
    if x in FALSE_VALUES:
        return False

    # 完全一致しない場合は前方一致（contains ではない）
    if x.startswith(TRUE_PREFIXES):
        return True
    if x.startswith(FALSE_PREFIXES):
        return False

    return None
