"""
Tests for graph similarity (size, value, containment, normalized value).
"""

import itertools

import pytest

from ngram_summarizer.datatypes import NGramGraph, Similarity
from ngram_summarizer.graphing import build_graph
from ngram_summarizer.similarity import GraphSimilarityCalculator, graph_similarity

from conftest import make_graph

TEXTS = [
    "the cat sat on the mat",
    "the cat sat on a mat",
    "dogs bark loudly at night",
    "a cat and a dog",
    "ab",
]


class TestGraphSimilarity:

    def test_identical_graphs_are_fully_similar(self):
        g = build_graph("the cat sat on the mat")
        s = graph_similarity(g, g)

        assert (s.size, s.value, s.containment, s.normalized) == (1.0, 1.0, 1.0, 1.0)

    def test_empty_graphs(self):
        """Two empty graphs resolve to zeros, not a division error."""
        s = graph_similarity(NGramGraph.empty(), NGramGraph.empty())
        assert (s.size, s.value, s.containment, s.normalized) == (0.0, 0.0, 0.0, 0.0)

    def test_empty_against_nonempty(self):
        s = graph_similarity(NGramGraph.empty(), build_graph("the cat sat"))
        assert (s.size, s.value, s.containment, s.normalized) == (0.0, 0.0, 0.0, 0.0)

    def test_hand_computed_components(self):
        g1 = make_graph({("a", "b"): 1.0, ("b", "c"): 0.5})
        g2 = make_graph({("a", "b"): 0.5, ("c", "d"): 1.0, ("d", "e"): 1.0})
        s = graph_similarity(g1, g2)

        assert s.size == pytest.approx(2 / 3)
        assert s.value == pytest.approx(0.5 / 3)
        assert s.containment == pytest.approx(0.5)
        assert s.normalized == pytest.approx(1 / 3)

    def test_common_edges_ignore_weights(self):
        g1 = make_graph({("a", "b"): 1.0})
        g2 = make_graph({("a", "b"): 0.25})
        s = graph_similarity(g1, g2)

        assert s.containment == 1.0
        assert s.value == pytest.approx(0.25)

    def test_no_common_edges(self):
        s = graph_similarity(make_graph({("a", "b"): 1.0}), make_graph({("b", "a"): 1.0}))
        assert s.size == 1.0
        assert s.value == 0.0
        assert s.containment == 0.0
        assert s.normalized == 0.0

    @pytest.mark.parametrize("t1,t2", list(itertools.combinations(TEXTS, 2)))
    def test_commutative_and_bounded(self, t1, t2):
        g1, g2 = build_graph(t1), build_graph(t2)
        s12, s21 = graph_similarity(g1, g2), graph_similarity(g2, g1)

        assert s12 == s21
        assert s12.normalized == s21.normalized
        for v in (s12.size, s12.value, s12.containment, s12.normalized):
            assert 0.0 <= v <= 1.0

    def test_calculator_class(self):
        g = build_graph("abcabc")
        assert GraphSimilarityCalculator().get_similarity(g, g) == graph_similarity(g, g)


class TestSimilarity:

    def test_normalized_is_value_over_containment(self):
        assert Similarity(0.5, 0.2, 0.4).normalized == pytest.approx(0.5)

    def test_normalized_zero_without_containment(self):
        assert Similarity(0.5, 0.0, 0.0).normalized == 0.0

    def test_component_lookup(self):
        s = Similarity(0.9, 0.3, 0.6)
        assert s.component("size") == 0.9
        assert s.component("value") == 0.3
        assert s.component("containment") == 0.6
        assert s.component("normalized") == pytest.approx(0.5)

    def test_unknown_component_raises(self):
        with pytest.raises(ValueError, match="Unknown similarity component"):
            Similarity(1, 1, 1).component("cosine")

    def test_as_features(self):
        assert Similarity(0.9, 0.3, 0.6).as_features() == pytest.approx((0.3, 0.6, 0.5))
