"""Tests for compile_news.process.content_processor module."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
import spacy

from compile_news.config import ProcessingConfig
from compile_news.errors import RankingError, SegmentationError
from compile_news.models import ErrorKind, NewsArticle
from compile_news.process.content_processor import (
    NewsContentProcessor,
    load_sentence_pipeline,
)

ELECTION_TEXT = (
    "Rain fell across Paris overnight. "
    "Jane Doe won the primary election. "
    "Jane Doe thanked voters after the primary election. "
    "Voters gave Jane Doe a clear primary win. "
    "Markets closed slightly higher on Friday."
)


@pytest.fixture
def nlp():
    blank = spacy.blank("en")
    blank.add_pipe("sentencizer")
    return blank


@pytest.fixture
def processor(nlp):
    return NewsContentProcessor(config=ProcessingConfig(), nlp=nlp)


class TestAbbreviate:
    def test_short_content_unchanged(self, processor) -> None:
        assert processor.abbreviate("Jane Doe won.") == "Jane Doe won."

    def test_long_content_keeps_first_words(self) -> None:
        processor = NewsContentProcessor(config=ProcessingConfig(max_word_count=3), nlp=Mock())
        assert processor.abbreviate("one two three four five") == "one two three"

    def test_default_limit_is_one_hundred_words(self, processor) -> None:
        content = " ".join(f"w{i}" for i in range(150))
        abbreviated = processor.abbreviate(content)
        assert abbreviated.split(" ") == [f"w{i}" for i in range(100)]

    def test_exactly_limit_words_unchanged(self, processor) -> None:
        content = " ".join(f"w{i}" for i in range(100))
        assert processor.abbreviate(content) == content

    def test_one_word_over_limit_drops_last(self, processor) -> None:
        content = " ".join(f"w{i}" for i in range(101))
        assert processor.abbreviate(content) == content.rsplit(" ", 1)[0]

    def test_empty_content(self, processor) -> None:
        assert processor.abbreviate("") == ""


class TestSummarize:
    def test_picks_connected_sentences_in_original_order(self, processor) -> None:
        summary = processor.summarize(ELECTION_TEXT)
        assert summary == (
            "Jane Doe won the primary election. "
            "Jane Doe thanked voters after the primary election. "
            "Voters gave Jane Doe a clear primary win."
        )

    def test_few_sentences_returned_unchanged(self, processor) -> None:
        content = "Jane Doe won. She thanked voters."
        assert processor.summarize(content) == content

    def test_exactly_summary_length_returned_unchanged(self, processor) -> None:
        content = "One fact. Two facts. Three facts."
        assert processor.summarize(content) == content

    def test_empty_content(self, processor) -> None:
        assert processor.summarize("") == ""

    def test_summary_sentence_count_is_configurable(self, nlp) -> None:
        processor = NewsContentProcessor(
            config=ProcessingConfig(summary_sentence_count=1), nlp=nlp
        )
        assert processor.summarize(ELECTION_TEXT) in {
            "Jane Doe won the primary election.",
            "Jane Doe thanked voters after the primary election.",
            "Voters gave Jane Doe a clear primary win.",
        }

    def test_unrelated_sentences_keep_document_order(self, processor) -> None:
        content = "Alpha one. Bravo two. Charlie three. Delta four. Echo five."
        # no edges, so every score ties and the earliest sentences win
        assert processor.summarize(content) == "Alpha one. Bravo two. Charlie three."

    def test_segmentation_failure_returns_empty(self) -> None:
        nlp = Mock(side_effect=RuntimeError("model crashed"))
        processor = NewsContentProcessor(nlp=nlp)
        assert processor.summarize(ELECTION_TEXT) == ""

    def test_ranking_failure_returns_empty(self, processor) -> None:
        with patch(
            "compile_news.process.content_processor.rank_vertices",
            side_effect=FloatingPointError("overflow"),
        ):
            result = processor.summarize_result(ELECTION_TEXT)
            summary = processor.summarize(ELECTION_TEXT)
        assert not result.ok
        assert result.error is ErrorKind.RANKING
        assert summary == ""

    def test_tokenization_failure_is_reported(self) -> None:
        nlp = Mock()
        nlp.return_value = SimpleNamespace(
            sents=[SimpleNamespace(text=f"Sentence {i}.") for i in range(5)]
        )
        nlp.make_doc.side_effect = ValueError("bad text")
        processor = NewsContentProcessor(nlp=nlp)

        result = processor.summarize_result(ELECTION_TEXT)

        assert result.error is ErrorKind.TOKENIZATION


class TestProcess:
    def test_sets_both_derived_fields(self, processor) -> None:
        article = NewsArticle(url="https://news.example.com/a", content=ELECTION_TEXT)

        processor.process(article)

        assert article.abbreviated_content == ELECTION_TEXT
        assert article.summarized_content.startswith("Jane Doe won the primary election.")

    def test_summary_failure_still_abbreviates(self) -> None:
        nlp = Mock(side_effect=RuntimeError("model crashed"))
        processor = NewsContentProcessor(config=ProcessingConfig(max_word_count=2), nlp=nlp)
        article = NewsArticle(content="Jane Doe won the primary.")

        processor.process(article)

        assert article.abbreviated_content == "Jane Doe"
        assert article.summarized_content == ""


class TestSplitSentences:
    def test_splits_and_strips(self, processor) -> None:
        assert processor.split_sentences("Jane won. She thanked voters.") == [
            "Jane won.",
            "She thanked voters.",
        ]

    def test_model_error_raises_segmentation_error(self) -> None:
        processor = NewsContentProcessor(nlp=Mock(side_effect=RuntimeError("boom")))
        with pytest.raises(SegmentationError):
            processor.split_sentences("Jane won.")


class TestTokenize:
    def test_lowercases_and_drops_punctuation(self, processor) -> None:
        assert processor.tokenize("Jane Doe won, again!") == ["jane", "doe", "won", "again"]


class TestRank:
    def test_wraps_unexpected_errors(self, processor) -> None:
        with patch(
            "compile_news.process.content_processor.build_similarity_graph",
            side_effect=ValueError("bad graph"),
        ):
            with pytest.raises(RankingError):
                processor._rank([["jane"], ["doe"]])


class TestLoadSentencePipeline:
    def test_adds_sentencizer_when_no_boundary_component(self) -> None:
        fake_nlp = Mock(pipe_names=["tok2vec", "tagger"])
        with patch("compile_news.process.content_processor.spacy.load", return_value=fake_nlp) as load:
            nlp = load_sentence_pipeline("en_core_web_sm")

        load.assert_called_once_with("en_core_web_sm", disable=["ner", "lemmatizer"])
        fake_nlp.add_pipe.assert_called_once_with("sentencizer")
        assert nlp is fake_nlp

    def test_keeps_parser_based_pipeline(self) -> None:
        fake_nlp = Mock(pipe_names=["tok2vec", "parser"])
        with patch("compile_news.process.content_processor.spacy.load", return_value=fake_nlp):
            load_sentence_pipeline("en_core_web_sm")

        fake_nlp.add_pipe.assert_not_called()

    def test_model_loaded_lazily(self) -> None:
        fake_nlp = Mock(pipe_names=["senter"])
        processor = NewsContentProcessor()
        with patch("compile_news.process.content_processor.spacy.load", return_value=fake_nlp) as load:
            assert processor.nlp is fake_nlp
            assert processor.nlp is fake_nlp
        load.assert_called_once()
