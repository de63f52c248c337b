"""Tests for compile_news.relevance.relevancy_checker module."""

from unittest.mock import Mock

import pytest

from compile_news.config import RelevanceConfig
from compile_news.errors import SalienceServiceError
from compile_news.models import ErrorKind
from compile_news.relevance.relevancy_checker import RelevancyChecker

CONTENT = "Jane Doe of the Green Party won the primary."


def _checker(scores: dict, **config) -> RelevancyChecker:
    service = Mock()
    service.salience.side_effect = lambda content, name: scores.get(name, 0.0)
    return RelevancyChecker(salience_service=service, config=RelevanceConfig(**config))


class TestIsRelevant:
    def test_salient_candidate_without_party(self) -> None:
        assert _checker({"Jane Doe": 0.6}).is_relevant(CONTENT, "Jane Doe") is True

    def test_candidate_below_threshold(self) -> None:
        checker = _checker({"Jane Doe": 0.4, "Green Party": 0.9})
        assert checker.is_relevant(CONTENT, "Jane Doe", "Green Party") is False

    def test_candidate_below_threshold_skips_party(self) -> None:
        checker = _checker({"Jane Doe": 0.1})
        checker.is_relevant(CONTENT, "Jane Doe", "Green Party")
        checker.salience_service.salience.assert_called_once_with(CONTENT, "Jane Doe")

    def test_salient_candidate_and_party(self) -> None:
        checker = _checker({"Jane Doe": 0.6, "Green Party": 0.2})
        assert checker.is_relevant(CONTENT, "Jane Doe", "Green Party") is True

    def test_party_below_threshold(self) -> None:
        checker = _checker({"Jane Doe": 0.6, "Green Party": 0.05})
        assert checker.is_relevant(CONTENT, "Jane Doe", "Green Party") is False

    def test_absent_party(self) -> None:
        checker = _checker({"Jane Doe": 0.9})
        assert checker.is_relevant(CONTENT, "Jane Doe", "Green Party") is False

    @pytest.mark.parametrize("party", [None, "", "  ", "Nonpartisan", "INDEPENDENT"])
    def test_unaffiliated_candidate_only_needs_candidate_salience(self, party) -> None:
        checker = _checker({"Jane Doe": 0.6})
        assert checker.is_relevant(CONTENT, "Jane Doe", party) is True
        checker.salience_service.salience.assert_called_once_with(CONTENT, "Jane Doe")

    def test_thresholds_are_configurable(self) -> None:
        checker = _checker({"Jane Doe": 0.3}, candidate_threshold=0.25)
        assert checker.is_relevant(CONTENT, "Jane Doe") is True

    def test_salience_error_propagates(self) -> None:
        service = Mock()
        service.salience.side_effect = RuntimeError("service down")
        checker = RelevancyChecker(salience_service=service)
        with pytest.raises(SalienceServiceError):
            checker.is_relevant(CONTENT, "Jane Doe")


class TestCheck:
    def test_success(self) -> None:
        result = _checker({"Jane Doe": 0.6}).check(CONTENT, "Jane Doe")
        assert result.ok
        assert result.value is True

    def test_irrelevant_is_still_ok(self) -> None:
        result = _checker({}).check(CONTENT, "Jane Doe")
        assert result.ok
        assert result.value is False

    def test_salience_failure(self) -> None:
        service = Mock()
        service.salience.side_effect = SalienceServiceError("service down")
        result = RelevancyChecker(salience_service=service).check(CONTENT, "Jane Doe")

        assert not result.ok
        assert result.error is ErrorKind.SALIENCE_SERVICE


class TestIsAffiliated:
    def test_custom_no_affiliation_names(self) -> None:
        checker = _checker({}, no_affiliation_names=["No Party"])
        assert checker.is_affiliated("no party") is False
        assert checker.is_affiliated("Independent") is True
