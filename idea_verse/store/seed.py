"""
Sample-data loader.
Reads a CSV of ideas (title, body, keywords) for seeding an idea store.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pandas as pd

from idea_verse.core.models import Idea
import config

logger = logging.getLogger(__name__)

COLUMN_CANDIDATES = {
    "title": ["title", "Title", "idea", "Idea", "text", "Text"],
    "body": ["body", "Body", "content", "Content", "description", "Description"],
    "keywords": ["keywords", "Keywords", "tags", "Tags"],
    "id": ["id", "ID", "Id"],
    "created_at": ["created_at", "createdAt", "date", "Date"],
    "bookmarked": ["bookmarked", "Bookmarked"],
    "source_url": ["source_url", "sourceUrl", "url", "URL"],
}

KEYWORD_SPLIT = re.compile(r"[,|;]")


def _detect_columns(columns: list[str]) -> dict[str, str]:
    """Map target field names to the CSV's actual column names."""
    mapping = {}
    columns_lower = {c.lower(): c for c in columns}
    for target, candidates in COLUMN_CANDIDATES.items():
        for candidate in candidates:
            if candidate in columns:
                mapping[target] = candidate
                break
            if candidate.lower() in columns_lower:
                mapping[target] = columns_lower[candidate.lower()]
                break
    return mapping


def parse_keywords(value) -> list[str]:
    """Split a keyword cell into at most two distinct keywords."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    result = []
    for part in KEYWORD_SPLIT.split(str(value)):
        part = part.strip()
        if part and part not in result:
            result.append(part)
    return result[:config.MAX_KEYWORDS_PER_IDEA]


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    if value is None or pd.isna(value):
        return False
    return bool(value)


def load_seed_ideas(csv_path: Optional[Path] = None) -> list[Idea]:
    """
    Load sample ideas from a CSV file.

    Args:
        csv_path: Path to the CSV (defaults to config.SEED_IDEAS_PATH)

    Returns:
        List of ideas; empty if the file doesn't exist.

    Raises:
        ValueError: If the CSV has no title-like column
    """
    csv_path = Path(csv_path) if csv_path else config.SEED_IDEAS_PATH
    if not csv_path.exists():
        logger.warning(f"Seed file not found: {csv_path}")
        return []

    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    if df.empty:
        return []

    mapping = _detect_columns(list(df.columns))
    if "title" not in mapping:
        raise ValueError(
            f"Seed CSV must have a 'title' column. "
            f"Available columns: {list(df.columns)}"
        )

    df = df.rename(columns={actual: target for target, actual in mapping.items()})

    # Remove rows with empty titles and log how many were dropped
    original_count = len(df)
    df = df[df["title"].str.strip() != ""].reset_index(drop=True)
    dropped_count = original_count - len(df)
    if dropped_count > 0:
        logger.warning(f"Dropped {dropped_count} seed rows with empty titles")

    # Stagger default timestamps so the newest-first order follows the file
    base_time = datetime.now(timezone.utc)

    ideas = []
    for i, row in df.iterrows():
        created_at = None
        if row.get("created_at"):
            created_at = pd.to_datetime(row["created_at"], utc=True, errors="coerce")
        if created_at is None or pd.isna(created_at):
            created_at = base_time - timedelta(minutes=i)
        else:
            created_at = created_at.to_pydatetime()

        ideas.append(Idea(
            id=str(row["id"]).strip() if row.get("id") else f"seed_{i}",
            title=row["title"].strip(),
            body=(row.get("body") or "").strip(),
            keywords=parse_keywords(row.get("keywords")),
            bookmarked=_parse_bool(row.get("bookmarked")),
            created_at=created_at,
            source_url=(row.get("source_url") or "").strip() or None,
        ))

    logger.info(f"Loaded {len(ideas)} seed ideas from {csv_path}")
    return ideas
