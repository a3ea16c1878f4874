from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Optional, Iterator

import numpy as np
import pandas as pd
import networkx as nx

EdgeKey = Tuple[str, str]  # (source n-gram, target n-gram)

@dataclass(frozen=True)
class TextUnit:
    uid: int
    text: str
    source: Optional[str] = None  # file path or label, if any

@dataclass(frozen=True)
class NGramGraph:
    vertices: Tuple[str, ...] = ()
    edges: Dict[EdgeKey, float] = field(default_factory=dict)  # weights in (0, 1]

    @classmethod
    def empty(cls) -> "NGramGraph":
        return cls()

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    def is_empty(self) -> bool:
        return not self.edges

    def edge_pairs(self) -> Iterator[EdgeKey]:
        return iter(self.edges)

    def max_weight(self) -> float:
        return max(self.edges.values()) if self.edges else 0.0

    def to_networkx(self) -> nx.DiGraph:
        G = nx.DiGraph()
        G.add_nodes_from(self.vertices)
        for (src, dst), w in self.edges.items():
            G.add_edge(src, dst, weight=w)
        return G

@dataclass(frozen=True)
class Similarity:
    size: float
    value: float
    containment: float

    @property
    def normalized(self) -> float:
        # value agreement with the structural overlap factored out
        if self.containment > 0.0:
            return self.value / self.containment
        return 0.0

    def component(self, name: str) -> float:
        if name == "size":
            return self.size
        if name == "value":
            return self.value
        if name == "containment":
            return self.containment
        if name == "normalized":
            return self.normalized
        raise ValueError(f"Unknown similarity component: {name}")

    def as_features(self) -> Tuple[float, float, float]:
        """Feature vector (value, containment, normalized) used by graph classifiers."""
        return (self.value, self.containment, self.normalized)

@dataclass
class SimilarityMatrix:
    size: int
    entries: Dict[Tuple[int, int], float] = field(default_factory=dict)

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"Matrix size must be non-negative, got {self.size}")
        for i in range(self.size):
            self.entries[(i, i)] = 1.0
        for (i, j) in self.entries:
            if not (0 <= i < self.size and 0 <= j < self.size):
                raise ValueError(f"Entry ({i}, {j}) is outside a {self.size}x{self.size} matrix")

    def get(self, i: int, j: int) -> float:
        return self.entries.get((i, j), 0.0)

    def set_pair(self, i: int, j: int, value: float) -> None:
        if i == j:
            return  # self-loops stay fixed at 1.0
        self.entries[(i, j)] = value
        self.entries[(j, i)] = value

    def to_array(self) -> np.ndarray:
        M = np.zeros((self.size, self.size), dtype=float)
        for (i, j), v in self.entries.items():
            M[i, j] = v
        return M

    def to_frame(self, labels: Optional[List[str]] = None) -> pd.DataFrame:
        labels = labels or [f"S{i+1}" for i in range(self.size)]
        return pd.DataFrame(self.to_array(), index=labels, columns=labels)

@dataclass
class ClusterAssignment:
    clusters: Dict[int, List[int]]  # cluster id -> member ids in ascending order
    converged: bool = True
    iterations: int = 0

    def __len__(self) -> int:
        return len(self.clusters)

    def members(self, cluster_id: int) -> List[int]:
        return self.clusters[cluster_id]

    def labels(self) -> Dict[int, int]:
        return {m: cid for cid, ms in self.clusters.items() for m in ms}

    def sizes(self) -> Dict[int, int]:
        return {cid: len(ms) for cid, ms in self.clusters.items()}

@dataclass
class EventSummary:
    cluster_id: int
    sentences: List[str]
    subtopics: ClusterAssignment
    subtopic_graphs: List[NGramGraph]
    essence: NGramGraph
    ranking: List[Tuple[float, str]]  # (value similarity to essence, sentence), best first
    summary: List[str]
