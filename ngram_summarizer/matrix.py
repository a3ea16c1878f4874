from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple, Union

from .datatypes import TextUnit, NGramGraph, SimilarityMatrix
from .graphing import NGramGraphCreator
from .parallel import ExecutorStrategy, SequentialStrategy
from .similarity import GraphSimilarityCalculator, SimilarityCalculator

logger = logging.getLogger(__name__)

Row = List[Tuple[int, float]]

def _similarity_row(i: int, graphs: Sequence[NGramGraph], calc: SimilarityCalculator) -> Row:
    # pairs (i, j) for j > i only, so every unordered pair is compared once
    gi = graphs[i]
    return [(j, calc.get_similarity(graphs[j], gi).normalized) for j in range(i + 1, len(graphs))]

def similarity_matrix_from_graphs(graphs: Sequence[NGramGraph],
                                  calc: Optional[SimilarityCalculator] = None,
                                  strategy: Optional[ExecutorStrategy] = None) -> SimilarityMatrix:
    """Symmetric normalized-value-similarity matrix with unit self-loops."""
    calc = calc or GraphSimilarityCalculator()
    strategy = strategy or SequentialStrategy()
    matrix = SimilarityMatrix(size=len(graphs))
    rows = strategy.map(lambda i: _similarity_row(i, graphs, calc), list(range(len(graphs))))
    for i, row in enumerate(rows):
        for j, value in row:
            if value > 0.0:
                matrix.set_pair(i, j, value)
    return matrix

class SimilarityMatrixBuilder:
    def __init__(self, creator: Optional[NGramGraphCreator] = None,
                 calc: Optional[SimilarityCalculator] = None,
                 strategy: Optional[ExecutorStrategy] = None):
        self.creator = creator or NGramGraphCreator()
        self.calc = calc or GraphSimilarityCalculator()
        self.strategy = strategy or SequentialStrategy()

    def build(self, units: Sequence[Union[TextUnit, str]]) -> SimilarityMatrix:
        """
        Build each unit's graph once, then compare every pair.

        Matrix index i refers to units[i]; the graphs are only cached for
        the duration of the scan.
        """
        graph_cache: List[NGramGraph] = list(self.strategy.map(self.creator.get_graph, list(units)))
        try:
            matrix = similarity_matrix_from_graphs(graph_cache, self.calc, self.strategy)
        finally:
            graph_cache.clear()
        logger.debug("Similarity matrix over %d units: %d nonzero entries",
                     matrix.size, len(matrix.entries))
        return matrix
