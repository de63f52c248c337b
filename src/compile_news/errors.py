"""Exceptions raised inside pipeline stages.

Each stage converts these into a ``StageResult`` at its boundary, so none of
them escape to the orchestrator.
"""

from compile_news.models import ErrorKind


class CompileNewsError(Exception):
    kind: ErrorKind


class PolicyFetchError(CompileNewsError):
    """robots.txt could not be fetched or parsed."""
    kind = ErrorKind.POLICY_FETCH


class CrawlDelayExceededError(CompileNewsError):
    """The required crawl delay is longer than the configured cap."""
    kind = ErrorKind.CRAWL_DELAY_EXCEEDED


class PageFetchError(CompileNewsError):
    kind = ErrorKind.PAGE_FETCH


class ExtractionError(CompileNewsError):
    kind = ErrorKind.EXTRACTION


class SalienceServiceError(CompileNewsError):
    kind = ErrorKind.SALIENCE_SERVICE


class SegmentationError(CompileNewsError):
    kind = ErrorKind.SEGMENTATION


class TokenizationError(CompileNewsError):
    kind = ErrorKind.TOKENIZATION


class RankingError(CompileNewsError):
    kind = ErrorKind.RANKING


class DiscoveryError(Exception):
    """The search provider request or response was unusable."""
