"""Abbreviate and extractively summarize news article content."""

from __future__ import annotations

import logging
from typing import Any, Optional

import spacy

from compile_news.config import ProcessingConfig
from compile_news.errors import (
    CompileNewsError,
    RankingError,
    SegmentationError,
    TokenizationError,
)
from compile_news.models import NewsArticle, StageResult
from compile_news.process.ranking import order_by_rank, rank_vertices
from compile_news.process.similarity import build_similarity_graph

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY_PIPES = {"parser", "senter", "sentencizer"}


def load_sentence_pipeline(model: str) -> Any:
    """Load a spaCy pipeline that can mark sentence boundaries."""
    nlp = spacy.load(model, disable=["ner", "lemmatizer"])
    if not SENTENCE_BOUNDARY_PIPES & set(nlp.pipe_names):
        nlp.add_pipe("sentencizer")
    return nlp


class NewsContentProcessor:
    """
    Derives the abbreviated and summarized content of a news article.

    Summaries are extractive: sentences are connected by the cosine similarity
    of their word counts, ranked by rank propagation over that graph, and the
    top ``summary_sentence_count`` are returned in their original order.
    """

    def __init__(self, config: Optional[ProcessingConfig] = None, nlp: Any = None):
        self.config = config or ProcessingConfig()
        self._nlp = nlp

    @property
    def nlp(self) -> Any:
        if self._nlp is None:
            logger.info("Loading spaCy model: %s", self.config.spacy_model)
            self._nlp = load_sentence_pipeline(self.config.spacy_model)
        return self._nlp

    def process(self, article: NewsArticle) -> NewsArticle:
        """Set both derived fields from the article's current content."""
        article.abbreviated_content = self.abbreviate(article.content)
        article.summarized_content = self.summarize(article.content)
        return article

    def abbreviate(self, content: str) -> str:
        words = content.split(" ")
        return " ".join(words[: min(len(words), self.config.max_word_count)])

    def summarize(self, content: str) -> str:
        """Extractive summary of ``content``, or "" if summarization fails."""
        result = self.summarize_result(content)
        if not result.ok:
            logger.warning("Summarization failed (%s): %s", result.error.value, result.message)
            return ""
        return result.value

    def summarize_result(self, content: str) -> StageResult[str]:
        try:
            sentences = self.split_sentences(content)
            if len(sentences) <= self.config.summary_sentence_count:
                return StageResult.success(content)
            tokenized = [self.tokenize(sentence) for sentence in sentences]
            ranking = self._rank(tokenized)
        except CompileNewsError as e:
            return StageResult.failure(e.kind, str(e))

        count = min(self.config.summary_sentence_count, len(sentences))
        chosen = sorted(ranking[:count])
        return StageResult.success(" ".join(sentences[index] for index in chosen))

    def split_sentences(self, content: str) -> list[str]:
        try:
            doc = self.nlp(content)
            sentences = [sent.text.strip() for sent in doc.sents]
        except Exception as e:
            raise SegmentationError(str(e)) from e
        return [sentence for sentence in sentences if sentence]

    def tokenize(self, sentence: str) -> list[str]:
        """Lower-case word tokens of ``sentence``, without punctuation or whitespace."""
        try:
            doc = self.nlp.make_doc(sentence.lower())
        except Exception as e:
            raise TokenizationError(str(e)) from e
        return [token.text for token in doc if not (token.is_punct or token.is_space)]

    def _rank(self, tokenized: list[list[str]]) -> list[int]:
        try:
            graph = build_similarity_graph(tokenized, self.config.similarity_threshold)
            logger.debug(
                "Built sentence graph with %d vertices and %d edges",
                graph.size,
                graph.edge_count,
            )
            scores = rank_vertices(
                graph,
                damping_factor=self.config.damping_factor,
                max_iterations=self.config.max_iterations,
                convergence_tolerance=self.config.convergence_tolerance,
            )
        except RankingError:
            raise
        except Exception as e:
            raise RankingError(str(e)) from e
        return order_by_rank(scores)
