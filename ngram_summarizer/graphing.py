from __future__ import annotations
import logging
from collections import Counter
from typing import Dict, List, Tuple, Union

from .datatypes import TextUnit, NGramGraph, EdgeKey
from .errors import DegenerateInputError
from .preprocessing import normalize_text

logger = logging.getLogger(__name__)

def extract_ngrams(text: str, n: int) -> List[str]:
    """Character n-grams of `text` in sequence order (overlapping)."""
    return [text[i:i+n] for i in range(len(text) - n + 1)]

def _count_edges(ngrams: List[str], window: int, counts: Counter) -> None:
    # link every n-gram to the `window` n-grams that follow it
    for i, src in enumerate(ngrams):
        for dst in ngrams[i+1:i+1+window]:
            counts[(src, dst)] += 1

def build_graph(text: Union[TextUnit, str], min_n: int = 3, max_n: int = 3,
                window: int = 3, lowercase: bool = False) -> NGramGraph:
    """
    Build the n-gram graph of a text.

    Vertices are the distinct character n-grams with lengths in [min_n, max_n];
    a directed edge (a, b) is counted each time b starts within `window`
    positions after a (n-grams of the same length only). Counts are divided
    by the largest count, so the heaviest edge weighs 1.

    Text shorter than min_n gives the empty graph.
    """
    if min_n < 1 or max_n < min_n:
        raise ValueError(f"Invalid n-gram range [{min_n}, {max_n}]")
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if isinstance(text, TextUnit):
        text = text.text
    text = normalize_text(text, lowercase=lowercase)

    if len(text) < min_n:
        logger.debug("Text of length %d is shorter than min_n=%d, empty graph", len(text), min_n)
        return NGramGraph.empty()

    vertices: Dict[str, None] = {}  # insertion-ordered set
    counts: Counter = Counter()
    for n in range(min_n, max_n + 1):
        ngrams = extract_ngrams(text, n)
        vertices.update(dict.fromkeys(ngrams))
        _count_edges(ngrams, window, counts)

    top = max(counts.values()) if counts else 0
    edges: Dict[EdgeKey, float] = {pair: c / top for pair, c in counts.items()}
    return NGramGraph(vertices=tuple(vertices), edges=edges)

def build_graph_strict(text: Union[TextUnit, str], min_n: int = 3, max_n: int = 3,
                       window: int = 3, lowercase: bool = False) -> NGramGraph:
    """Like build_graph, but raise DegenerateInputError instead of returning an empty graph."""
    raw = text.text if isinstance(text, TextUnit) else text
    if len(normalize_text(raw, lowercase=lowercase)) < min_n:
        raise DegenerateInputError(f"Text {raw!r} is shorter than min_n={min_n}")
    return build_graph(raw, min_n=min_n, max_n=max_n, window=window, lowercase=lowercase)

class NGramGraphCreator:
    def __init__(self, min_n: int = 3, max_n: int = 3, window: int = 3, lowercase: bool = False):
        if min_n < 1 or max_n < min_n:
            raise ValueError(f"Invalid n-gram range [{min_n}, {max_n}]")
        self.min_n = min_n
        self.max_n = max_n
        self.window = window
        self.lowercase = lowercase

    @classmethod
    def from_config(cls, cfg) -> "NGramGraphCreator":
        return cls(cfg.min_n, cfg.max_n, cfg.window, cfg.lowercase)

    def get_graph(self, text: Union[TextUnit, str]) -> NGramGraph:
        return build_graph(text, self.min_n, self.max_n, self.window, self.lowercase)

def top_edges(graph: NGramGraph, k: int = 20) -> List[Tuple[EdgeKey, float]]:
    """Heaviest k edges, ties kept in insertion order."""
    return sorted(graph.edges.items(), key=lambda kv: kv[1], reverse=True)[:k]
