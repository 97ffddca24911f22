import re
from typing import List

_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")
MIN_TOKEN_LENGTH = 3


def normalize_text(text: str) -> str:
    """Trim, collapse whitespace runs to one space, lowercase."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text.strip()).lower()


def tokenize(text: str) -> List[str]:
    """Lowercase, blank out non-alphanumerics, split, drop tokens shorter than 3 chars."""
    if not text:
        return []
    cleaned = _NON_ALNUM.sub(" ", text.lower())
    return [tok for tok in cleaned.split() if len(tok) >= MIN_TOKEN_LENGTH]


def split_lines(text: str) -> List[str]:
    # Same split the renderer applies, so line numbers line up with what is displayed.
    return (text or "").split("\n")


def exact_similarity(a: str, b: str) -> float:
    """Identical after normalizing => 1.0, containment => length ratio, else 0."""
    norm_a = normalize_text(a)
    norm_b = normalize_text(b)
    if not norm_a or not norm_b:
        return 0.0
    if norm_a == norm_b:
        return 1.0
    if norm_a in norm_b or norm_b in norm_a:
        return min(len(norm_a), len(norm_b)) / max(len(norm_a), len(norm_b))
    return 0.0


def token_jaccard(tokens_a: List[str], tokens_b: List[str]) -> float:
    set_a, set_b = set(tokens_a), set(tokens_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)
