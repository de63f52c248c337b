"""Find news article URLs and metadata for a candidate with Google Custom Search."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import requests

from common.datetime import parse_offset_datetime
from compile_news.config import HttpConfig, SearchConfig
from compile_news.errors import DiscoveryError
from compile_news.models import NewsArticle

logger = logging.getLogger(__name__)

URL_METATAG = "og:url"
PUBLISHER_METATAGS = (
    "article:publisher",
    "og:site_name",
    "twitter:app:name:googleplay",
    "dc.source",
)
PUBLISHED_DATE_METATAGS = (
    "article:published_time",
    "article:published",
    "datepublished",
    "og:pubdate",
    "pubdate",
    "published",
    "article:modified_time",
    "article:modified",
    "modified",
)


def search_news_articles(
    candidate_name: str,
    search_config: Optional[SearchConfig] = None,
    http_config: Optional[HttpConfig] = None,
    session: Optional[requests.Session] = None,
) -> list[NewsArticle]:
    """Search for ``candidate_name``; returns [] if the search fails."""
    search_config = search_config or SearchConfig()
    try:
        payload = fetch_search_results(candidate_name, search_config, http_config, session)
    except DiscoveryError as e:
        logger.error("Failed to fetch search results for %s: %s", candidate_name, e)
        return []
    articles = parse_search_results(payload, search_config.max_results)
    logger.info("Found %d articles for %s", len(articles), candidate_name)
    return articles


def fetch_search_results(
    candidate_name: str,
    search_config: SearchConfig,
    http_config: Optional[HttpConfig] = None,
    session: Optional[requests.Session] = None,
) -> dict:
    http_config = http_config or HttpConfig()
    params = {
        "key": os.environ.get("CUSTOM_SEARCH_KEY", ""),
        "cx": os.environ.get("CUSTOM_SEARCH_ENGINE_ID", ""),
        "q": candidate_name,
        "num": search_config.max_results,
    }
    try:
        response = (session or requests).get(
            search_config.endpoint,
            params=params,
            timeout=http_config.timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        raise DiscoveryError(str(e)) from e
    if not isinstance(payload, dict):
        raise DiscoveryError("Search response is not a JSON object")
    return payload


def parse_search_results(payload: dict, max_results: int = 10) -> list[NewsArticle]:
    """
    Build articles from a Custom Search response.

    Results are ranked in response order starting at 1. Results without page
    metatags or a canonical URL are skipped and don't consume a rank.
    """
    articles: list[NewsArticle] = []
    items = payload.get("items")
    if not isinstance(items, list):
        return articles

    priority = 1
    for item in items:
        if len(articles) >= max_results:
            break
        metadata = _first_metatags(item)
        if metadata is None:
            continue
        url = metadata.get(URL_METATAG)
        if not url or not isinstance(url, str):
            continue
        articles.append(
            NewsArticle(
                url=url,
                publisher=extract_publisher(metadata),
                published_date=extract_published_date(metadata),
                priority=max(1, min(priority, max_results)),
            )
        )
        priority += 1
    return articles


def _first_metatags(item: Any) -> Optional[dict]:
    try:
        metadata = item["pagemap"]["metatags"][0]
    except (KeyError, IndexError, TypeError):
        return None
    return metadata if isinstance(metadata, dict) else None


def extract_publisher(metadata: dict) -> Optional[str]:
    for tag in PUBLISHER_METATAGS:
        if tag in metadata:
            return metadata[tag]
    return None


def extract_published_date(metadata: dict):
    """First parsable date among the published-date metatags, in priority order."""
    for tag in PUBLISHED_DATE_METATAGS:
        if tag not in metadata:
            continue
        published = parse_offset_datetime(metadata[tag])
        if published is not None:
            return published
    return None
