"""Sentence similarity and the per-article sentence graph."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np


@dataclass
class SentenceGraph:
    """Undirected weighted graph over the 0-indexed sentences of one article."""
    size: int
    adjacency: dict[int, list[tuple[int, float]]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for vertex in range(self.size):
            self.adjacency.setdefault(vertex, [])

    def add_edge(self, i: int, j: int, weight: float) -> None:
        self.adjacency[i].append((j, weight))
        self.adjacency[j].append((i, weight))

    def neighbors(self, vertex: int) -> list[tuple[int, float]]:
        return self.adjacency[vertex]

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self.adjacency.values()) // 2


def cosine_similarity(a, b) -> float:
    """Cosine similarity between two vectors, 0 when either has zero norm."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def term_frequency_vectors(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
) -> tuple[np.ndarray, np.ndarray]:
    """Term-frequency vectors of two token lists over their shared local vocabulary."""
    vocab = sorted(set(tokens_a) | set(tokens_b))
    counts_a = Counter(tokens_a)
    counts_b = Counter(tokens_b)
    vector_a = np.array([counts_a[word] for word in vocab], dtype=float)
    vector_b = np.array([counts_b[word] for word in vocab], dtype=float)
    return vector_a, vector_b


def sentence_similarity(tokens_a: Sequence[str], tokens_b: Sequence[str]) -> float:
    return cosine_similarity(*term_frequency_vectors(tokens_a, tokens_b))


def build_similarity_graph(
    tokenized_sentences: Sequence[Sequence[str]],
    threshold: float,
) -> SentenceGraph:
    """Connect every sentence pair whose similarity reaches ``threshold``."""
    graph = SentenceGraph(size=len(tokenized_sentences))
    for i in range(len(tokenized_sentences)):
        for j in range(i + 1, len(tokenized_sentences)):
            similarity = sentence_similarity(tokenized_sentences[i], tokenized_sentences[j])
            if similarity >= threshold:
                graph.add_edge(i, j, similarity)
    return graph
