"""
Tests for essence scoring and the redundancy filter.
"""

import itertools

import pytest

from ngram_summarizer.datatypes import NGramGraph
from ngram_summarizer.graphing import build_graph
from ngram_summarizer.scoring import find_redundant, remove_redundant_sentences, score_sentences
from ngram_summarizer.similarity import graph_similarity

from conftest import LookupCreator, TableCalculator

MIXED = [
    "the cat sat on the mat",
    "the cat sat on a mat",
    "a cat sat on the mat today",
    "dogs bark loudly at night",
    "dogs bark at night",
    "stock markets fell sharply",
]


class TestScoreSentences:

    def test_ranks_by_value_similarity(self):
        essence = build_graph("the cat sat on the mat")
        ranking = score_sentences(["dogs bark loudly at night", "the cat sat on the mat"], essence)

        assert ranking[0] == (1.0, "the cat sat on the mat")
        assert ranking[1] == (0.0, "dogs bark loudly at night")

    def test_ties_keep_input_order(self):
        ranking = score_sentences(["first one", "second one", "third one"], NGramGraph.empty())
        assert [s for _, s in ranking] == ["first one", "second one", "third one"]

    def test_scores_descending(self):
        essence = build_graph(" ".join(MIXED[:3]))
        scores = [score for score, _ in score_sentences(MIXED, essence)]
        assert scores == sorted(scores, reverse=True)


class TestRedundancyFilter:

    def test_duplicates_collapse(self):
        kept = remove_redundant_sentences(
            ["the cat sat on the mat", "the cat sat on the mat", "dogs bark loudly at night"])
        assert kept == ["the cat sat on the mat", "dogs bark loudly at night"]

    def test_kept_sentences_are_pairwise_below_threshold(self):
        kept = remove_redundant_sentences(MIXED, threshold=0.2)

        assert kept
        for a, b in itertools.combinations(kept, 2):
            assert graph_similarity(build_graph(a), build_graph(b)).normalized <= 0.2

    def test_idempotent(self):
        once = remove_redundant_sentences(MIXED, threshold=0.2)
        assert remove_redundant_sentences(once, threshold=0.2) == once

    def test_marked_sentence_stays_excluded(self):
        """B is redundant to A; C resembles only B, so nothing removes C."""
        calc = TableCalculator({("A", "B"): 0.9, ("B", "C"): 0.9, ("A", "C"): 0.0})
        kept = remove_redundant_sentences(["A", "B", "C"], 0.2, LookupCreator(), calc)
        assert kept == ["A", "C"]

    def test_threshold_is_strict(self):
        calc = TableCalculator({("A", "B"): 0.2})
        assert find_redundant(["A", "B"], 0.2, LookupCreator(), calc) == [False, False]

    def test_empty_input(self):
        assert remove_redundant_sentences([]) == []
