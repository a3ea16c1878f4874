from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from .datatypes import NGramGraph
from .graphing import NGramGraphCreator
from .parallel import ExecutorStrategy, SequentialStrategy
from .similarity import GraphSimilarityCalculator, SimilarityCalculator

logger = logging.getLogger(__name__)

def score_sentences(sentences: Sequence[str], essence: NGramGraph,
                    creator: Optional[NGramGraphCreator] = None,
                    calc: Optional[SimilarityCalculator] = None,
                    strategy: Optional[ExecutorStrategy] = None) -> List[Tuple[float, str]]:
    """
    Rank sentences by value similarity to the event essence graph.

    Returns (score, sentence) pairs, best first; equal scores keep input order.
    """
    creator = creator or NGramGraphCreator()
    calc = calc or GraphSimilarityCalculator()
    strategy = strategy or SequentialStrategy()

    def _score(s: str) -> float:
        return calc.get_similarity(creator.get_graph(s), essence).value

    scores = list(strategy.map(_score, list(sentences)))
    order = sorted(range(len(sentences)), key=lambda i: -scores[i])  # stable
    return [(scores[i], sentences[i]) for i in order]

def find_redundant(sentences: Sequence[str], threshold: float = 0.2,
                   creator: Optional[NGramGraphCreator] = None,
                   calc: Optional[SimilarityCalculator] = None) -> List[bool]:
    """
    Greedy scan in list order: each sentence that is not yet redundant is kept
    and marks every later sentence whose normalized value similarity to it
    exceeds `threshold`. A marked sentence never comes back.
    """
    creator = creator or NGramGraphCreator()
    calc = calc or GraphSimilarityCalculator()
    graphs = [creator.get_graph(s) for s in sentences]
    redundant = [False] * len(sentences)
    for i, gi in enumerate(graphs):
        if redundant[i]:
            continue
        for j in range(i + 1, len(graphs)):
            if redundant[j]:
                continue
            if calc.get_similarity(graphs[j], gi).normalized > threshold:
                redundant[j] = True
    return redundant

def remove_redundant_sentences(sentences: Sequence[str], threshold: float = 0.2,
                               creator: Optional[NGramGraphCreator] = None,
                               calc: Optional[SimilarityCalculator] = None) -> List[str]:
    redundant = find_redundant(sentences, threshold, creator, calc)
    kept = [s for s, r in zip(sentences, redundant) if not r]
    logger.debug("Redundancy filter kept %d of %d sentences", len(kept), len(sentences))
    return kept
