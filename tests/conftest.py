import pytest

from ngram_summarizer.datatypes import NGramGraph, Similarity


def make_graph(edges):
    """NGramGraph from a {(src, dst): weight} dict, vertices in first-seen order."""
    vertices = {}
    for src, dst in edges:
        vertices.setdefault(src)
        vertices.setdefault(dst)
    return NGramGraph(vertices=tuple(vertices), edges=dict(edges))


class LookupCreator:
    """Graph creator stand-in: the graph just carries its sentence as only vertex."""

    def get_graph(self, text):
        return NGramGraph(vertices=(text,))


class TableCalculator:
    """Similarity calculator stand-in driven by a table of normalized similarities."""

    def __init__(self, table):
        self.table = {frozenset(k): v for k, v in table.items()}

    def get_similarity(self, g1, g2):
        v = self.table.get(frozenset((g1.vertices[0], g2.vertices[0])), 0.0)
        return Similarity(size=1.0, value=v, containment=1.0)


@pytest.fixture
def cat_dog_documents():
    from ngram_summarizer.datatypes import TextUnit
    return [
        TextUnit(uid=0, text="The cat sat on the mat. The cat sat on the mat."),
        TextUnit(uid=1, text="Dogs bark loudly at night."),
    ]
