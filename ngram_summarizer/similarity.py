from __future__ import annotations
import math
from typing import Protocol

from .datatypes import NGramGraph, Similarity

class SimilarityCalculator(Protocol):
    def get_similarity(self, g1: NGramGraph, g2: NGramGraph) -> Similarity: ...

def graph_similarity(g1: NGramGraph, g2: NGramGraph) -> Similarity:
    """
    Size, value and containment similarity of two n-gram graphs.

    Edges are common when their (source, target) pair appears in both graphs,
    whatever the weights. Empty inputs resolve to 0 instead of dividing by zero.
    """
    n1, n2 = g1.num_edges, g2.num_edges
    lo, hi = min(n1, n2), max(n1, n2)
    if hi == 0:
        return Similarity(0.0, 0.0, 0.0)

    size = lo / hi

    # iterate the smaller edge set, look up in the larger
    small, large = (g1.edges, g2.edges) if n1 <= n2 else (g2.edges, g1.edges)
    ratios = [min(w, large[pair]) / max(w, large[pair])
              for pair, w in small.items() if pair in large]
    c = len(ratios)

    # fsum is exactly rounded, so the result does not depend on argument order
    value = math.fsum(ratios) / hi if c else 0.0
    containment = c / lo if lo > 0 else 0.0
    return Similarity(size=size, value=value, containment=containment)

class GraphSimilarityCalculator:
    def get_similarity(self, g1: NGramGraph, g2: NGramGraph) -> Similarity:
        return graph_similarity(g1, g2)
