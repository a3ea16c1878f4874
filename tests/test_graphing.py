"""
Tests for n-gram graph construction.
"""

import pytest

from ngram_summarizer.datatypes import TextUnit, NGramGraph
from ngram_summarizer.errors import DegenerateInputError
from ngram_summarizer.graphing import (
    NGramGraphCreator,
    build_graph,
    build_graph_strict,
    extract_ngrams,
    top_edges,
)


class TestExtractNgrams:

    def test_overlapping_trigrams(self):
        assert extract_ngrams("abcabc", 3) == ["abc", "bca", "cab", "abc"]

    def test_text_shorter_than_n(self):
        assert extract_ngrams("ab", 3) == []


class TestBuildGraph:

    def test_abcabc_trigrams_form_a_cycle(self):
        """Adjacent trigrams of 'abcabc' link abc -> bca -> cab -> abc."""
        g = build_graph("abcabc", min_n=3, max_n=3, window=1)

        assert set(g.vertices) == {"abc", "bca", "cab"}
        assert g.edges == {("abc", "bca"): 1.0, ("bca", "cab"): 1.0, ("cab", "abc"): 1.0}

    def test_abcabc_default_window(self):
        """With window 3 every trigram links to the three that follow it."""
        g = build_graph("abcabc", min_n=3, max_n=3)

        assert g.vertices == ("abc", "bca", "cab")
        assert set(g.edges) == {
            ("abc", "bca"), ("abc", "cab"), ("abc", "abc"),
            ("bca", "cab"), ("bca", "abc"), ("cab", "abc"),
        }
        assert all(w == 1.0 for w in g.edges.values())

    def test_same_text_gives_identical_graphs(self):
        text = "the cat sat on the mat"
        assert build_graph(text) == build_graph(text)

    def test_weights_normalized_by_heaviest_edge(self):
        """a->b occurs twice, b->a once."""
        g = build_graph("abab", min_n=1, max_n=1, window=1)

        assert g.edges == {("a", "b"): 1.0, ("b", "a"): 0.5}
        assert g.max_weight() == 1.0

    def test_all_weights_in_unit_interval(self):
        g = build_graph("the quick brown fox jumps over the lazy dog the end")
        assert g.edges
        assert all(0.0 < w <= 1.0 for w in g.edges.values())

    def test_length_range_collects_all_lengths(self):
        g = build_graph("ab", min_n=1, max_n=2, window=1)

        assert g.vertices == ("a", "b", "ab")
        assert g.edges == {("a", "b"): 1.0}

    def test_short_text_gives_empty_graph(self):
        g = build_graph("ab", min_n=3, max_n=3)
        assert g.is_empty()
        assert g == NGramGraph.empty()

    def test_single_ngram_has_no_edges(self):
        g = build_graph("abc")
        assert g.vertices == ("abc",)
        assert g.num_edges == 0

    def test_accepts_text_unit(self):
        unit = TextUnit(uid=3, text="abcabc")
        assert build_graph(unit) == build_graph("abcabc")

    def test_lowercase_option(self):
        assert build_graph("ABCD", lowercase=True) == build_graph("abcd")

    def test_whitespace_runs_are_collapsed(self):
        assert build_graph("the  cat\nsat") == build_graph("the cat sat")

    @pytest.mark.parametrize("min_n,max_n", [(0, 3), (3, 2)])
    def test_invalid_range_raises(self, min_n, max_n):
        with pytest.raises(ValueError):
            build_graph("abcdef", min_n=min_n, max_n=max_n)

    def test_invalid_window_raises(self):
        with pytest.raises(ValueError):
            build_graph("abcdef", window=0)


class TestBuildGraphStrict:

    def test_short_text_raises(self):
        with pytest.raises(DegenerateInputError):
            build_graph_strict("ab")

    def test_long_text_matches_build_graph(self):
        assert build_graph_strict("abcabc") == build_graph("abcabc")


class TestNGramGraphCreator:

    def test_get_graph_uses_parameters(self):
        creator = NGramGraphCreator(min_n=3, max_n=3, window=1)
        assert creator.get_graph("abcabc") == build_graph("abcabc", window=1)

    def test_invalid_range_raises(self):
        with pytest.raises(ValueError):
            NGramGraphCreator(min_n=4, max_n=2)


class TestGraphHelpers:

    def test_to_networkx(self):
        g = build_graph("abcabc", window=1)
        G = g.to_networkx()

        assert G.number_of_nodes() == 3
        assert G.number_of_edges() == 3
        assert G["abc"]["bca"]["weight"] == 1.0

    def test_top_edges_sorted_by_weight(self):
        g = build_graph("abab", min_n=1, max_n=1, window=1)
        assert top_edges(g, 1) == [(("a", "b"), 1.0)]
