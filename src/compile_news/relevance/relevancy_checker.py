"""Check the relevancy of news article content to a candidate."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from compile_news.config import RelevanceConfig
from compile_news.errors import SalienceServiceError
from compile_news.models import ErrorKind, StageResult
from compile_news.relevance.salience import SalienceService, SpacySalienceService

logger = logging.getLogger(__name__)


class RelevancyChecker:
    """
    Accepts content in which the candidate, and their party when they have
    one, are salient enough.

    The candidate threshold is stricter than the party threshold: party names
    are a noisier signal and often appear only in passing.
    """

    def __init__(
        self,
        salience_service: Optional[SalienceService] = None,
        config: Optional[RelevanceConfig] = None,
    ):
        self.config = config or RelevanceConfig()
        self.salience_service = salience_service or SpacySalienceService(self.config.spacy_model)
        self._no_affiliation = _casefold_all(self.config.no_affiliation_names)

    def is_relevant(self, content: str, candidate_name: str, party_name: Optional[str] = None) -> bool:
        """
        Raises:
            SalienceServiceError: If the salience service fails.
        """
        candidate_salience = self.compute_salience(content, candidate_name)
        if candidate_salience < self.config.candidate_threshold:
            logger.debug("Salience of %s is %.3f, below threshold", candidate_name, candidate_salience)
            return False
        if not self.is_affiliated(party_name):
            return True
        party_salience = self.compute_salience(content, party_name)
        return party_salience >= self.config.party_threshold

    def check(self, content: str, candidate_name: str, party_name: Optional[str] = None) -> StageResult[bool]:
        try:
            return StageResult.success(self.is_relevant(content, candidate_name, party_name))
        except SalienceServiceError as e:
            return StageResult.failure(ErrorKind.SALIENCE_SERVICE, str(e))

    def is_affiliated(self, party_name: Optional[str]) -> bool:
        if not party_name or not party_name.strip():
            return False
        return party_name.strip().casefold() not in self._no_affiliation

    def compute_salience(self, content: str, name: str) -> float:
        try:
            return self.salience_service.salience(content, name)
        except SalienceServiceError:
            raise
        except Exception as e:
            raise SalienceServiceError(str(e)) from e


def _casefold_all(names: Iterable[str]) -> set[str]:
    return {name.strip().casefold() for name in names}
