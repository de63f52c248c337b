"""Extract the title and main text of a news article from its HTML."""

import logging
from typing import Optional, Union

import trafilatura
from lxml import html as lxml_html
from readability import Document

from compile_news.errors import ExtractionError
from compile_news.models import ErrorKind, StageResult

logger = logging.getLogger(__name__)

Html = Union[bytes, str]


class NewsContentExtractor:
    """
    Strips boilerplate (navigation, ads, footers) from article HTML.

    Order:
    1. trafilatura
    2. readability-lxml

    Each tried once. If both fail -> ("", "").
    """

    def extract(self, html: Optional[Html], url: str) -> tuple[str, str]:
        """Return ``(title, content)``; both are "" if nothing could be extracted."""
        result = self.extract_result(html, url)
        if not result.ok:
            logger.warning("Content extraction failed for %s: %s", url, result.message)
            return "", ""
        return result.value

    def extract_result(self, html: Optional[Html], url: str) -> StageResult[tuple[str, str]]:
        if not html:
            return StageResult.failure(ErrorKind.EXTRACTION, "No HTML to extract from")

        try:
            extracted = extract_with_trafilatura(html, url)
            if extracted:
                return StageResult.success(extracted)
        except Exception as e:
            logger.warning("trafilatura failed for %s: %s", url, e)

        try:
            extracted = extract_with_readability(html)
            if extracted:
                return StageResult.success(extracted)
        except Exception as e:
            logger.warning("readability failed for %s: %s", url, e)

        return StageResult.failure(ErrorKind.EXTRACTION, "All extraction methods failed")


def _decode(html: Html) -> str:
    if isinstance(html, bytes):
        try:
            return html.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExtractionError(str(e)) from e
    return html


def extract_with_trafilatura(html: Html, url: str) -> Optional[tuple[str, str]]:
    text = trafilatura.extract(html, url=url)
    if not text:
        return None
    metadata = trafilatura.extract_metadata(html, default_url=url)
    title = metadata.title if metadata is not None and metadata.title else ""
    return title, text


def extract_with_readability(html: Html) -> Optional[tuple[str, str]]:
    doc = Document(_decode(html))
    summary_html = doc.summary()

    tree = lxml_html.fromstring(summary_html)
    text = tree.text_content()

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return None
    return doc.short_title() or "", "\n".join(lines)
