"""PageRank-style rank propagation over a sentence graph."""

from __future__ import annotations

import logging

import numpy as np

from compile_news.errors import RankingError
from compile_news.process.similarity import SentenceGraph

logger = logging.getLogger(__name__)


def _transition_matrix(graph: SentenceGraph) -> tuple[np.ndarray, np.ndarray]:
    """
    Column-stochastic transition matrix and a mask of vertices without edges.

    A vertex splits its rank evenly over its edges; edge weights only decide
    which edges exist.
    """
    n = graph.size
    matrix = np.zeros((n, n), dtype=float)
    dangling = np.zeros(n, dtype=bool)
    for source in range(n):
        edges = graph.neighbors(source)
        if not edges:
            dangling[source] = True
            continue
        for target, _ in edges:
            matrix[target, source] += 1.0 / len(edges)
    return matrix, dangling


def rank_vertices(
    graph: SentenceGraph,
    damping_factor: float = 0.1,
    max_iterations: int = 100,
    convergence_tolerance: float = 0.0001,
) -> np.ndarray:
    """
    Score every vertex of ``graph`` by iterative rank propagation.

    Each iteration gives every vertex the baseline ``(1 - d) / n`` plus ``d``
    times the rank flowing in along its edges, split evenly over each
    neighbour's edges. Rank held by vertices without edges is spread evenly
    over all vertices, so isolated sentences keep a baseline score instead of
    dropping out. Stops after ``max_iterations`` or once the L1 change falls
    below ``convergence_tolerance``.

    Raises:
        RankingError: If the graph is empty or the scores stop being finite.
    """
    n = graph.size
    if n == 0:
        raise RankingError("Cannot rank an empty graph")

    matrix, dangling = _transition_matrix(graph)
    scores = np.full(n, 1.0 / n)
    baseline = (1.0 - damping_factor) / n

    for iteration in range(max_iterations):
        dangling_rank = scores[dangling].sum() / n
        updated = baseline + damping_factor * (matrix @ scores + dangling_rank)
        if not np.all(np.isfinite(updated)):
            raise RankingError(f"Non-finite scores after {iteration + 1} iterations")
        change = np.abs(updated - scores).sum()
        scores = updated
        if change < convergence_tolerance:
            logger.debug("Rank propagation converged after %d iterations", iteration + 1)
            break

    return scores


def order_by_rank(scores) -> list[int]:
    """Vertex indices by descending score; equal scores keep the earlier sentence first."""
    return sorted(range(len(scores)), key=lambda index: (-scores[index], index))
