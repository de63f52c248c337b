"""robots.txt location and parsing."""

from __future__ import annotations

import math
import re
from urllib.parse import urlparse, urlunparse
from urllib.robotparser import RobotFileParser

from compile_news.models import Grant

FRACTIONAL_CRAWL_DELAY = re.compile(r"^(\s*crawl-delay\s*:\s*)(\d*\.\d+)", re.IGNORECASE)


def robots_txt_url(url: str) -> str:
    """Return ``scheme://host/robots.txt`` for ``url``."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Not an absolute http(s) URL: {url!r}")
    return urlunparse((parsed.scheme, parsed.netloc, "/robots.txt", "", "", ""))


def _round_up_crawl_delay(line: str) -> str:
    # RobotFileParser only keeps whole-second delays
    return FRACTIONAL_CRAWL_DELAY.sub(
        lambda match: f"{match.group(1)}{math.ceil(float(match.group(2)))}", line
    )


def parse_grant(robots_txt: str, url: str, user_agent: str = "*") -> Grant:
    """Evaluate ``url`` against a robots.txt body for ``user_agent``."""
    parser = RobotFileParser()
    parser.parse([_round_up_crawl_delay(line) for line in robots_txt.splitlines()])
    delay = parser.crawl_delay(user_agent)
    return Grant(
        has_access=parser.can_fetch(user_agent, url),
        crawl_delay=float(delay) if delay is not None else None,
    )
