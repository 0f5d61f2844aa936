"""
Keyword vocabulary helpers: validation, home-group resolution and colors.
"""

from typing import Iterable, Optional

import config
from idea_verse.core.models import Idea
from idea_verse.core.similarity import tokenize


def validate_keywords(keywords: Iterable[str]) -> list[str]:
    """
    Validate a keyword list coming from a caller or the UI.

    Args:
        keywords: Candidate keyword strings

    Returns:
        The keywords as a list, order preserved

    Raises:
        ValueError: If there are more than two keywords, duplicates,
            or values outside the vocabulary
    """
    keywords = list(keywords or [])

    if len(keywords) > config.MAX_KEYWORDS_PER_IDEA:
        raise ValueError(
            f"An idea can have at most {config.MAX_KEYWORDS_PER_IDEA} keywords, "
            f"got {len(keywords)}"
        )
    if len(set(keywords)) != len(keywords):
        raise ValueError(f"Duplicate keywords: {keywords}")

    unknown = [k for k in keywords if k not in config.AVAILABLE_KEYWORDS]
    if unknown:
        raise ValueError(
            f"Unknown keywords {unknown}. Available: {list(config.AVAILABLE_KEYWORDS)}"
        )
    return keywords


def infer_keyword(title: str) -> Optional[str]:
    """Return the first vocabulary keyword that appears as a word of `title`."""
    tokens = tokenize(title)
    for keyword in config.AVAILABLE_KEYWORDS:
        if keyword.lower() in tokens:
            return keyword
    return None


def effective_keywords(idea: Idea) -> list[str]:
    """
    Keywords an idea is grouped under (one or two entries, never empty).

    Explicit keywords win, capped at the first two distinct values. An idea
    without keywords falls back to a vocabulary keyword found in its title,
    then to the default group.
    """
    result: list[str] = []
    for keyword in idea.keywords or []:
        keyword = (keyword or "").strip()
        if keyword and keyword not in result:
            result.append(keyword)
        if len(result) == config.MAX_KEYWORDS_PER_IDEA:
            break

    if result:
        return result

    inferred = infer_keyword(idea.title)
    return [inferred] if inferred else [config.DEFAULT_GROUP]


def keyword_sort_key(keyword: str) -> tuple[int, int, str]:
    """Vocabulary order first, unknown keywords alphabetically, default group last."""
    if keyword == config.DEFAULT_GROUP:
        return (2, 0, keyword)
    if keyword in config.AVAILABLE_KEYWORDS:
        return (0, config.AVAILABLE_KEYWORDS.index(keyword), keyword)
    return (1, 0, keyword)


def _hash_keyword(keyword: str) -> int:
    # 32-bit string hash (h * 31 + code), wrapped to a signed int
    h = 0
    for char in keyword:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def keyword_color(keyword: Optional[str]) -> str:
    """Stable hex color for a keyword; gray for empty or default-group keywords."""
    if not keyword or keyword == config.DEFAULT_GROUP:
        return config.FALLBACK_KEYWORD_COLOR
    palette = config.TAG_PALETTE
    return palette[_hash_keyword(keyword) % len(palette)]


def keyword_color_map(keywords: Iterable[str]) -> dict[str, str]:
    """Map each distinct, non-default keyword to its color."""
    color_map: dict[str, str] = {}
    for keyword in keywords:
        if keyword and keyword != config.DEFAULT_GROUP and keyword not in color_map:
            color_map[keyword] = keyword_color(keyword)
    return color_map
