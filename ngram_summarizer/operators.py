"""
Binary operators that combine two n-gram graphs into a new one.

Both operators blend weights the same way: for an edge with weight w1 in the
left graph and w2 in the right graph the result weighs

    r * w1 + (1 - r) * w2

where a missing edge counts as weight 0. Intersect keeps only edges present
in both graphs; Merge keeps the union, so an edge seen on one side only ends
up scaled by r (left) or 1 - r (right). Weights therefore stay in (0, 1].

The blend is not associative: folding [a, b, c] weighs c by 1 - r but a by
r * r, so the fold order is part of the result and callers must fix it.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Sequence

from .datatypes import NGramGraph, EdgeKey

logger = logging.getLogger(__name__)

BinaryGraphOperator = Callable[[NGramGraph, NGramGraph], NGramGraph]

def _check_factor(r: float) -> float:
    if not 0.0 < r < 1.0:
        raise ValueError(f"Blend factor must be in (0, 1), got {r}")
    return r

def _vertices_of(edges: Dict[EdgeKey, float], *ordered: Iterable[str]) -> tuple:
    used = set()
    for src, dst in edges:
        used.add(src)
        used.add(dst)
    seen: Dict[str, None] = {}
    for vs in ordered:
        for v in vs:
            if v in used:
                seen.setdefault(v)
    return tuple(seen)

def intersect_graphs(g1: NGramGraph, g2: NGramGraph, r: float = 0.5) -> NGramGraph:
    _check_factor(r)
    edges = {pair: r * w + (1.0 - r) * g2.edges[pair]
             for pair, w in g1.edges.items() if pair in g2.edges}
    return NGramGraph(vertices=_vertices_of(edges, g1.vertices), edges=edges)

def merge_graphs(g1: NGramGraph, g2: NGramGraph, r: float = 0.5) -> NGramGraph:
    _check_factor(r)
    edges: Dict[EdgeKey, float] = {pair: r * w for pair, w in g1.edges.items()}
    for pair, w in g2.edges.items():
        edges[pair] = edges.get(pair, 0.0) + (1.0 - r) * w
    vertices = dict.fromkeys(g1.vertices)
    vertices.update(dict.fromkeys(g2.vertices))
    return NGramGraph(vertices=tuple(vertices), edges=edges)

class IntersectOperator:
    def __init__(self, r: float = 0.5):
        self.r = _check_factor(r)

    def get_result(self, g1: NGramGraph, g2: NGramGraph) -> NGramGraph:
        return intersect_graphs(g1, g2, self.r)

    __call__ = get_result

class MergeOperator:
    def __init__(self, r: float = 0.5):
        self.r = _check_factor(r)

    def get_result(self, g1: NGramGraph, g2: NGramGraph) -> NGramGraph:
        return merge_graphs(g1, g2, self.r)

    __call__ = get_result

def write_graph(graph: NGramGraph, path: Path) -> None:
    """One `source<TAB>target<TAB>weight` line per edge."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        for (src, dst), w in graph.edges.items():
            fh.write(f"{src}\t{dst}\t{w!r}\n")

def materialize(graph: NGramGraph, step: int, label: str = "fold",
                checkpoint_dir: Optional[str] = None) -> NGramGraph:
    """
    Force the running fold result to a standalone value, optionally writing
    it to `checkpoint_dir` so a long fold can be inspected or resumed.
    """
    snapshot = NGramGraph(vertices=tuple(graph.vertices), edges=dict(graph.edges))
    if checkpoint_dir is not None:
        path = Path(checkpoint_dir) / f"{label}_{step}.tsv"
        write_graph(snapshot, path)
        logger.debug("Checkpointed %s at step %d to %s", label, step, path)
    else:
        logger.debug("Materialized %s at step %d (%d edges)", label, step, snapshot.num_edges)
    return snapshot

def fold_graphs(graphs: Sequence[NGramGraph], operator: BinaryGraphOperator,
                materialize_every: int = 20, checkpoint_dir: Optional[str] = None,
                label: str = "fold") -> NGramGraph:
    """
    Left fold of `operator` over `graphs` in the given order.

    A single graph folds to itself and an empty sequence to the empty graph.
    Every `materialize_every` steps the running result is materialized.
    """
    if materialize_every < 1:
        raise ValueError(f"materialize_every must be >= 1, got {materialize_every}")
    if not graphs:
        return NGramGraph.empty()
    result = graphs[0]
    for i in range(1, len(graphs)):
        if i % materialize_every == 0:
            result = materialize(result, i, label=label, checkpoint_dir=checkpoint_dir)
        result = operator(result, graphs[i])
    return result
