"""Shape processed news articles into persisted records."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from common.hashing import generate_article_key
from compile_news.models import NewsArticle


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def to_record(
    article: NewsArticle,
    candidate_id: str,
    now: Optional[datetime] = None,
) -> dict:
    """Build the persisted record for ``article``, stamping its last-modified time."""
    article.last_modified = now or datetime.now(timezone.utc)
    record = asdict(article)
    record["published_date"] = _isoformat(article.published_date)
    record["last_modified"] = _isoformat(article.last_modified)
    record["abbreviated_content"] = article.abbreviated_content or ""
    record["summarized_content"] = article.summarized_content or ""
    return {
        "key": generate_article_key(candidate_id, article.url),
        "candidate_id": candidate_id,
        **record,
    }
