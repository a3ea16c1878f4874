from __future__ import annotations
import logging
import warnings
from typing import Dict, List, Tuple, Union

import numpy as np
import networkx as nx

from .datatypes import SimilarityMatrix, ClusterAssignment
from .errors import NonConvergenceWarning

logger = logging.getLogger(__name__)

def normalize_columns(M: np.ndarray) -> np.ndarray:
    sums = M.sum(axis=0)
    sums[sums == 0] = 1.0  # all-zero columns stay zero
    return M / sums

def expand(M: np.ndarray, power: int) -> np.ndarray:
    return np.linalg.matrix_power(M, power)

def inflate(M: np.ndarray, power: float) -> np.ndarray:
    return normalize_columns(np.power(M, power))

def prune(M: np.ndarray, epsilon: float) -> np.ndarray:
    """
    Zero entries below `epsilon` and rescale columns.

    The largest entry of each column always survives, so no column loses
    its whole mass.
    """
    if M.size == 0:
        return M
    keep = M >= epsilon
    keep[M.argmax(axis=0), np.arange(M.shape[1])] = True
    return normalize_columns(np.where(keep, M, 0.0))

def extract_clusters(M: np.ndarray) -> Dict[int, List[int]]:
    """
    Group elements connected through nonzero entries of the attractor matrix.

    Clusters are the weakly connected components of the matrix read as a
    graph, numbered by their smallest member.
    """
    n = M.shape[0]
    G = nx.Graph()
    G.add_nodes_from(range(n))
    rows, cols = np.nonzero(M)
    G.add_edges_from((int(i), int(j)) for i, j in zip(rows, cols) if i != j)
    components = sorted((sorted(c) for c in nx.connected_components(G)), key=lambda c: c[0])
    return {cid: members for cid, members in enumerate(components)}

def run_mcl(matrix: Union[SimilarityMatrix, np.ndarray], max_iterations: int = 100,
            expansion_power: int = 2, inflation_power: float = 2.0,
            prune_epsilon: float = 0.05, tolerance: float = 1e-6) -> Tuple[np.ndarray, bool, int]:
    """
    Iterate expansion, inflation and pruning until the matrix stops changing.

    Returns (final matrix, converged flag, iterations performed). Hitting
    `max_iterations` emits a NonConvergenceWarning and returns the last matrix.
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
    M = matrix.to_array() if isinstance(matrix, SimilarityMatrix) else np.array(matrix, dtype=float)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise ValueError(f"MCL needs a square matrix, got shape {M.shape}")
    if M.shape[0] == 0:
        return M, True, 0
    if np.any(M < 0) or not np.all(np.isfinite(M)):
        raise ValueError("MCL needs finite, non-negative similarities")

    np.fill_diagonal(M, np.maximum(M.diagonal(), 1.0))  # self-loops
    M = normalize_columns(M)

    for it in range(1, max_iterations + 1):
        prev = M
        M = expand(M, expansion_power)
        M = inflate(M, inflation_power)
        M = prune(M, prune_epsilon)
        delta = float(np.abs(M - prev).max())
        logger.debug("MCL iteration %d: max change %.3g", it, delta)
        if delta < tolerance:
            return M, True, it

    msg = f"MCL did not converge within {max_iterations} iterations"
    logger.warning(msg)
    warnings.warn(msg, NonConvergenceWarning, stacklevel=2)
    return M, False, max_iterations

class MatrixMCL:
    """Markov clustering over a similarity matrix."""

    def __init__(self, max_iterations: int = 100, expansion_power: int = 2,
                 inflation_power: float = 2.0, prune_epsilon: float = 0.05,
                 tolerance: float = 1e-6):
        self.max_iterations = max_iterations
        self.expansion_power = expansion_power
        self.inflation_power = inflation_power
        self.prune_epsilon = prune_epsilon
        self.tolerance = tolerance

    @classmethod
    def from_config(cls, cfg) -> "MatrixMCL":
        return cls(cfg.max_iterations, cfg.expansion_power, cfg.inflation_power,
                   cfg.prune_epsilon, cfg.tolerance)

    def get_markov_clusters(self, matrix: Union[SimilarityMatrix, np.ndarray]) -> ClusterAssignment:
        M, converged, iterations = run_mcl(matrix, self.max_iterations, self.expansion_power,
                                           self.inflation_power, self.prune_epsilon, self.tolerance)
        clusters = extract_clusters(M)
        logger.debug("MCL found %d clusters over %d elements", len(clusters), M.shape[0])
        return ClusterAssignment(clusters=clusters, converged=converged, iterations=iterations)
