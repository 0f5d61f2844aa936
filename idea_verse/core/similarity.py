"""
Textual similarity between ideas.
Token-set Jaccard over Latin/digit runs and Hangul runs, with a
character-level fallback for texts without any word tokens.
"""

import re
from typing import Optional

import numpy as np

# Latin letters/digits and Hangul syllables are tokenized independently,
# so mixed-language text yields both kinds of tokens.
TOKEN_PATTERN = re.compile(r"[a-z0-9]+|[가-힣]+")
WHITESPACE_PATTERN = re.compile(r"\s+")


def tokenize(text: Optional[str]) -> set[str]:
    """Return the set of lowercase word tokens in `text`."""
    if not text:
        return set()
    return set(TOKEN_PATTERN.findall(text.lower()))


def _jaccard(a: set, b: set) -> Optional[float]:
    union = a | b
    if not union:
        return None
    return len(a & b) / len(union)


def similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """
    Similarity of two texts in [0, 1].

    Args:
        text_a: First text (None is treated as empty)
        text_b: Second text

    Returns:
        Jaccard similarity of the token sets. If neither text has tokens,
        Jaccard similarity of the whitespace-stripped character sets;
        0.0 if those are empty too.
    """
    score = _jaccard(tokenize(text_a), tokenize(text_b))
    if score is not None:
        return score

    chars_a = set(WHITESPACE_PATTERN.sub("", text_a or ""))
    chars_b = set(WHITESPACE_PATTERN.sub("", text_b or ""))
    score = _jaccard(chars_a, chars_b)
    return 0.0 if score is None else score


def similarity_matrix(texts: list[str]) -> np.ndarray:
    """
    Pairwise similarity for a list of texts.

    This is O(n^2) in the number of texts, which is fine for tens to low
    hundreds of ideas but is the scaling limit of the graph builder.

    Returns:
        Symmetric array of shape (n, n); the diagonal holds self-similarity.
    """
    n = len(texts)
    matrix = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        matrix[i, i] = similarity(texts[i], texts[i])
        for j in range(i + 1, n):
            score = similarity(texts[i], texts[j])
            matrix[i, j] = score
            matrix[j, i] = score
    return matrix
