"""Compile relevant, summarized news articles for a candidate."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from compile_news.config import CompileNewsConfig
from compile_news.discover.custom_search import search_news_articles
from compile_news.extract.content_extractor import NewsContentExtractor
from compile_news.models import ArticleOutcome, Candidate, CompileSummary, NewsArticle
from compile_news.politeness.gatekeeper import Gatekeeper
from compile_news.politeness.host_access import HostAccessClock
from compile_news.process.content_processor import NewsContentProcessor
from compile_news.relevance.relevancy_checker import RelevancyChecker
from compile_news.store.records import to_record
from compile_news.store.sinks import ArticleSink

logger = logging.getLogger(__name__)

Discover = Callable[[str], list[NewsArticle]]


class NewsCompiler:
    """
    Carries each discovered article through the pipeline, one URL at a time:

    1. Check robots.txt and crawl delay, then scrape the page.
    2. Extract the title and main text from the HTML.
    3. Check the text's relevancy to the candidate and their party.
    4. Abbreviate and summarize the text.
    5. Store the article record in every sink.

    A failure at any stage ends that article's run; the next article is
    processed regardless.
    """

    def __init__(
        self,
        config: CompileNewsConfig,
        gatekeeper: Gatekeeper,
        extractor: NewsContentExtractor,
        relevancy_checker: RelevancyChecker,
        processor: NewsContentProcessor,
        sinks: Sequence[ArticleSink] = (),
        discover: Optional[Discover] = None,
    ):
        self.config = config
        self.gatekeeper = gatekeeper
        self.extractor = extractor
        self.relevancy_checker = relevancy_checker
        self.processor = processor
        self.sinks = list(sinks)
        self.discover = discover or self._search

    def _search(self, candidate_name: str) -> list[NewsArticle]:
        return search_news_articles(
            candidate_name,
            search_config=self.config.search,
            http_config=self.config.http,
        )

    def compile_news_articles(self, candidate: Candidate) -> CompileSummary:
        logger.info("Compiling news articles for %s (%s)", candidate.name, candidate.id)
        summary = CompileSummary(candidate_id=candidate.id)

        articles = self.discover(candidate.name)
        summary.discovered = len(articles)
        if not articles:
            logger.warning("No articles discovered for %s", candidate.name)
            return summary

        for article in articles:
            outcome = self.compile_article(article, candidate)
            summary.outcomes[article.url] = outcome
            if outcome is ArticleOutcome.DENIED:
                summary.denied += 1
            elif outcome is ArticleOutcome.EXTRACT_FAILED:
                summary.extract_failed += 1
            elif outcome is ArticleOutcome.IRRELEVANT:
                summary.irrelevant += 1
            else:
                summary.processed += 1

            if self._should_store(outcome) and self.store(article, candidate.id):
                summary.stored += 1

        logger.info(
            "Compiled %d articles for %s: %d stored, %d denied, %d extraction failures, %d irrelevant",
            summary.discovered,
            candidate.name,
            summary.stored,
            summary.denied,
            summary.extract_failed,
            summary.irrelevant,
        )
        return summary

    def compile_article(self, article: NewsArticle, candidate: Candidate) -> ArticleOutcome:
        """Run one article through the pipeline, updating it in place."""
        decision = self.gatekeeper.decide(article.url)
        if not decision.allowed:
            article.clear_content()
            return ArticleOutcome.DENIED

        extracted = self.extractor.extract_result(decision.html, article.url)
        if not extracted.ok:
            logger.warning("No content extracted from %s: %s", article.url, extracted.message)
            article.clear_content()
            return ArticleOutcome.EXTRACT_FAILED
        title, content = extracted.value
        article.set_content(title, content)

        relevant = self.relevancy_checker.check(article.content, candidate.name, candidate.party)
        if not relevant.ok:
            logger.warning("Relevancy check failed for %s: %s", article.url, relevant.message)
            return ArticleOutcome.IRRELEVANT
        if not relevant.value:
            logger.info("Skipping %s: not relevant to %s", article.url, candidate.name)
            return ArticleOutcome.IRRELEVANT

        self.processor.process(article)
        return ArticleOutcome.PROCESSED

    def _should_store(self, outcome: ArticleOutcome) -> bool:
        if outcome is ArticleOutcome.PROCESSED:
            return True
        if outcome in (ArticleOutcome.DENIED, ArticleOutcome.EXTRACT_FAILED):
            return self.config.storage.store_unprocessed
        return False

    def store(self, article: NewsArticle, candidate_id: str) -> bool:
        """Write the article to every sink; returns False if any sink failed."""
        record = to_record(article, candidate_id)
        stored = True
        for sink in self.sinks:
            try:
                sink.store(record)
            except Exception as e:
                logger.error("Failed to store %s in %s: %s", article.url, type(sink).__name__, e)
                stored = False
        return stored


def build_compiler(
    config: CompileNewsConfig,
    sinks: Sequence[ArticleSink] = (),
    host_access: Optional[HostAccessClock] = None,
) -> NewsCompiler:
    """Build a compiler with the default components; share ``host_access`` across runs."""
    return NewsCompiler(
        config=config,
        gatekeeper=Gatekeeper(
            host_access=host_access or HostAccessClock(),
            http_config=config.http,
            politeness_config=config.politeness,
        ),
        extractor=NewsContentExtractor(),
        relevancy_checker=RelevancyChecker(config=config.relevance),
        processor=NewsContentProcessor(config=config.processing),
        sinks=sinks,
    )


def compile_news_articles(
    candidates: Sequence[Candidate],
    config: CompileNewsConfig,
    sinks: Sequence[ArticleSink] = (),
) -> list[CompileSummary]:
    """Compile news articles for each candidate, sharing one per-host access clock."""
    compiler = build_compiler(config, sinks=sinks, host_access=HostAccessClock())
    return [compiler.compile_news_articles(candidate) for candidate in candidates]
