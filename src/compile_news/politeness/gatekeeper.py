"""Politeness checks before scraping a news article page."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from compile_news.config import HttpConfig, PolitenessConfig
from compile_news.errors import (
    CompileNewsError,
    CrawlDelayExceededError,
    PageFetchError,
    PolicyFetchError,
)
from compile_news.models import ErrorKind, Grant, StageResult
from compile_news.politeness.host_access import HostAccessClock
from compile_news.politeness.robots import parse_grant, robots_txt_url

logger = logging.getLogger(__name__)


@dataclass
class GateDecision:
    """Whether a page may be scraped, with its HTML when it was fetched."""
    allowed: bool
    html: Optional[bytes] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def denied(cls, error: ErrorKind) -> "GateDecision":
        return cls(allowed=False, error=error)


class Gatekeeper:
    """
    Decides whether a URL may be scraped and, if so, fetches it politely.

    robots.txt is fetched for every URL; any failure to fetch or read it is
    treated as a denial. Crawl delays are honoured through the shared
    ``HostAccessClock``: a request that would have to wait longer than
    ``max_crawl_delay`` is denied instead of stalling the run.
    """

    def __init__(
        self,
        host_access: Optional[HostAccessClock] = None,
        http_config: Optional[HttpConfig] = None,
        politeness_config: Optional[PolitenessConfig] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.host_access = host_access or HostAccessClock()
        self.http_config = http_config or HttpConfig()
        self.politeness_config = politeness_config or PolitenessConfig()
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", self.http_config.user_agent)
        self._sleep = sleep

    def decide(self, url: str) -> GateDecision:
        """Check robots.txt for ``url`` and return the page HTML if scraping is allowed."""
        try:
            robots_url = robots_txt_url(url)
            grant = self.fetch_grant(robots_url, url)
        except Exception as e:
            logger.warning("robots.txt unavailable for %s, treating as denied: %s", url, e)
            return GateDecision.denied(ErrorKind.POLICY_FETCH)

        access = self.await_access(grant, robots_url)
        if not access.ok:
            logger.info("Access to %s not granted (%s)", url, access.error.value)
            return GateDecision.denied(access.error)

        try:
            html = self.fetch_page(url)
        except Exception as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            return GateDecision.denied(ErrorKind.PAGE_FETCH)
        return GateDecision(allowed=True, html=html)

    def fetch_grant(self, robots_url: str, url: str) -> Grant:
        try:
            response = self.session.get(robots_url, timeout=self.http_config.timeout)
            response.raise_for_status()
            robots_txt = response.text
        except requests.RequestException as e:
            raise PolicyFetchError(str(e)) from e
        return parse_grant(robots_txt, url, self.politeness_config.user_agent_token)

    def await_access(self, grant: Grant, robots_url: str) -> StageResult[float]:
        """Block until ``grant``'s crawl delay allows the request; returns the time waited."""
        if not grant.has_access:
            return StageResult.failure(ErrorKind.ACCESS_DENIED)
        if grant.crawl_delay is None:
            return StageResult.success(0.0)
        try:
            wait = self.reserve_slot(robots_url, grant.crawl_delay)
        except CompileNewsError as e:
            return StageResult.failure(e.kind, str(e))
        if wait > 0:
            logger.info("Waiting %.2fs for crawl delay of %s", wait, robots_url)
            self._sleep(wait)
        return StageResult.success(wait)

    def reserve_slot(self, robots_url: str, crawl_delay: float) -> float:
        max_wait = self.politeness_config.max_crawl_delay
        wait = self.host_access.reserve(robots_url, crawl_delay, max_wait)
        if wait is None:
            raise CrawlDelayExceededError(
                f"Next access to {robots_url} is more than {max_wait}s away"
            )
        return wait

    def fetch_page(self, url: str) -> bytes:
        try:
            response = self.session.get(url, timeout=self.http_config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise PageFetchError(str(e)) from e
        return response.content
