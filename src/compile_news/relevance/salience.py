"""Entity salience computed with spaCy named-entity recognition."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Protocol

import spacy

from compile_news.errors import SalienceServiceError

logger = logging.getLogger(__name__)

ALLOWED_LABELS = {"PERSON", "ORG", "NORP", "GPE", "LOC"}


class SalienceService(Protocol):
    def salience(self, content: str, name: str) -> float:
        """Salience in [0, 1] of the entity called ``name`` in ``content``; 0 if absent."""
        ...


def normalize_entity_name(text: str) -> str:
    entity_name = text.replace("\n", " ").strip().upper()
    if entity_name.endswith("'S") or entity_name.endswith("S'") or entity_name.endswith("’S") or entity_name.endswith("S’"):
        entity_name = entity_name[:-2]
    entity_name = re.sub(r"[^\w]+$", "", entity_name).strip()
    return re.sub(r"\s+", " ", entity_name)


def _contains_alias(short_name: str, long_name: str) -> bool:
    if not short_name or not long_name or short_name == long_name:
        return False
    pattern = rf"(?<!\w){re.escape(short_name)}(?!\w)"
    return re.search(pattern, long_name) is not None


def _mention_weight(start_char: int, text_length: int) -> float:
    # Mentions near the start of the text count up to twice as much as late ones.
    return 1.0 + (1.0 - start_char / max(text_length, 1))


class SpacySalienceService:
    """
    Salience from spaCy NER: an entity's share of all weighted named-entity mentions.

    Short PERSON names ("DOE") that appear inside a longer PERSON name
    ("JANE DOE") are counted towards the longer name. The scores for the most
    recently analysed text are kept in a single attribute, so checking two
    names against the same content parses it only once and concurrent callers
    never see one text paired with another text's scores.
    """

    def __init__(self, model: str = "en_core_web_sm", nlp: Any = None):
        self.model = model
        self._nlp = nlp
        # (text, scores) of the last analysis, replaced as a whole
        self._cache: Optional[tuple[str, dict[str, float]]] = None

    @property
    def nlp(self) -> Any:
        if self._nlp is None:
            logger.info("Loading spaCy model: %s", self.model)
            self._nlp = spacy.load(self.model)
        return self._nlp

    def salience(self, content: str, name: str) -> float:
        scores = self.analyze(content)
        return scores.get(normalize_entity_name(name), 0.0)

    def analyze(self, content: str) -> dict[str, float]:
        """Map each normalized entity name in ``content`` to its salience."""
        cached = self._cache
        if cached is not None and cached[0] == content:
            return cached[1]
        try:
            doc = self.nlp(content)
        except Exception as e:
            raise SalienceServiceError(f"Entity analysis failed: {e}") from e

        weights: dict[str, float] = {}
        labels: dict[str, str] = {}
        for ent in doc.ents:
            if ent.label_ not in ALLOWED_LABELS:
                continue
            entity_name = normalize_entity_name(ent.text)
            if not entity_name:
                continue
            labels.setdefault(entity_name, ent.label_)
            weights[entity_name] = weights.get(entity_name, 0.0) + _mention_weight(
                ent.start_char, len(content)
            )

        person_names = [name for name, label in labels.items() if label == "PERSON"]
        for short_name in person_names:
            candidates = [
                name for name in person_names
                if name in weights and _contains_alias(short_name, name)
            ]
            if not candidates:
                continue
            long_name = max(candidates, key=len)
            weights[long_name] += weights.pop(short_name)

        total = sum(weights.values())
        scores = {name: weight / total for name, weight in weights.items()} if total else {}
        self._cache = (content, scores)
        return scores
