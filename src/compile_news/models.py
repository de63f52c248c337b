"""Data models for the compile_news pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class NewsArticle:
    """A discovered news article and its derived content."""
    url: str = ""
    title: str = ""
    publisher: Optional[str] = None
    published_date: Optional[datetime] = None
    content: str = ""
    abbreviated_content: Optional[str] = None
    summarized_content: Optional[str] = None
    priority: int = 1
    last_modified: Optional[datetime] = None

    def set_content(self, title: Optional[str], content: Optional[str]) -> None:
        """Replace title and content, dropping content derived from the old content."""
        self.title = title or ""
        self.content = content or ""
        self.abbreviated_content = None
        self.summarized_content = None

    def clear_content(self) -> None:
        self.set_content("", "")


@dataclass
class Grant:
    """Access grant for one path, as read from a site's robots.txt."""
    has_access: bool = True
    crawl_delay: Optional[float] = None


class ErrorKind(str, Enum):
    """Terminal, non-retried failure outcomes of a pipeline stage."""
    POLICY_FETCH = "policy_fetch"
    ACCESS_DENIED = "access_denied"
    CRAWL_DELAY_EXCEEDED = "crawl_delay_exceeded"
    PAGE_FETCH = "page_fetch"
    EXTRACTION = "extraction"
    SALIENCE_SERVICE = "salience_service"
    SEGMENTATION = "segmentation"
    TOKENIZATION = "tokenization"
    RANKING = "ranking"


@dataclass
class StageResult(Generic[T]):
    """Outcome of one pipeline stage: a value, or the kind of failure that stopped it."""
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: Optional[str] = None) -> "StageResult[T]":
        return cls(error=error, message=message)


class ArticleOutcome(str, Enum):
    """Terminal state of one discovered article."""
    DENIED = "denied"
    EXTRACT_FAILED = "extract_failed"
    IRRELEVANT = "irrelevant"
    PROCESSED = "processed"


@dataclass
class Candidate:
    """A candidate whose news coverage is compiled."""
    name: str
    id: str
    party: Optional[str] = None


@dataclass
class CompileSummary:
    """Per-candidate counts of how discovered articles ended up."""
    candidate_id: str
    discovered: int = 0
    denied: int = 0
    extract_failed: int = 0
    irrelevant: int = 0
    processed: int = 0
    stored: int = 0
    outcomes: dict[str, ArticleOutcome] = field(default_factory=dict)
