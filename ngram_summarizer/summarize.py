from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Union

from .config import SummarizerConfig
from .datatypes import TextUnit, NGramGraph, ClusterAssignment, EventSummary
from .errors import PersistenceError
from .graphing import NGramGraphCreator
from .matrix import SimilarityMatrixBuilder, similarity_matrix_from_graphs
from .mcl import MatrixMCL
from .operators import IntersectOperator, MergeOperator, fold_graphs
from .parallel import ExecutorStrategy, make_strategy
from .preprocessing import SentenceSplitter, split_sentences, load_documents
from .scoring import score_sentences, remove_redundant_sentences
from .similarity import GraphSimilarityCalculator

logger = logging.getLogger(__name__)

Source = Union[str, Path, Sequence[Union[str, TextUnit]]]

class MultiDocumentSummarizer(Protocol):
    def get_summary(self, source: Source) -> Dict[int, List[str]]: ...

def as_text_units(texts: Sequence[Union[str, TextUnit]]) -> List[TextUnit]:
    return [t if isinstance(t, TextUnit) else TextUnit(uid=i, text=t) for i, t in enumerate(texts)]

class DocumentEventClustering:
    """Groups documents that report the same event, with MCL over document graphs."""

    def __init__(self, cfg: Optional[SummarizerConfig] = None,
                 strategy: Optional[ExecutorStrategy] = None):
        self.cfg = cfg or SummarizerConfig()
        self.builder = SimilarityMatrixBuilder(NGramGraphCreator.from_config(self.cfg),
                                               GraphSimilarityCalculator(), strategy)
        self.mcl = MatrixMCL.from_config(self.cfg)

    def get_clusters(self, documents: Sequence[TextUnit]) -> Dict[int, List[TextUnit]]:
        matrix = self.builder.build(documents)
        assignment = self.mcl.get_markov_clusters(matrix)
        return {cid: [documents[i] for i in members] for cid, members in assignment.clusters.items()}

def build_subtopics(graphs: Sequence[NGramGraph], assignment: ClusterAssignment,
                    cfg: SummarizerConfig, label: str = "subtopic") -> List[NGramGraph]:
    """Intersect the sentence graphs of each cluster, members in sentence order."""
    io = IntersectOperator(cfg.blend_factor)
    return [fold_graphs([graphs[i] for i in members], io, cfg.materialize_every,
                        cfg.checkpoint_dir, label=f"{label}_{cid}")
            for cid, members in assignment.clusters.items()]

def build_essence(subtopics: Sequence[NGramGraph], cfg: SummarizerConfig,
                  label: str = "essence") -> NGramGraph:
    """Merge the subtopic graphs of an event, in cluster order."""
    return fold_graphs(list(subtopics), MergeOperator(cfg.blend_factor), cfg.materialize_every,
                       cfg.checkpoint_dir, label=label)

def summarize_event(cluster_id: int, documents: Sequence[TextUnit],
                    cfg: Optional[SummarizerConfig] = None,
                    splitter: SentenceSplitter = split_sentences,
                    strategy: Optional[ExecutorStrategy] = None) -> EventSummary:
    """Run the sentence-level stages for the documents of one event."""
    cfg = cfg or SummarizerConfig()
    creator = NGramGraphCreator.from_config(cfg)
    calc = GraphSimilarityCalculator()

    logger.info("Extracting sentences of event %d", cluster_id)
    sentences: List[str] = []
    for doc in documents:
        sentences.extend(splitter(doc))
    if not sentences:
        logger.warning("Event %d has no sentences", cluster_id)
        return EventSummary(cluster_id, [], ClusterAssignment({}), [], NGramGraph.empty(), [], [])

    graphs = list(strategy.map(creator.get_graph, sentences)) if strategy else \
        [creator.get_graph(s) for s in sentences]

    logger.info("Creating sentence similarity matrix (%d sentences)", len(sentences))
    matrix = similarity_matrix_from_graphs(graphs, calc, strategy)

    logger.info("Markov clustering on the matrix")
    subtopics = MatrixMCL.from_config(cfg).get_markov_clusters(matrix)

    logger.info("Extracting %d subtopics", len(subtopics))
    subtopic_graphs = build_subtopics(graphs, subtopics, cfg, label=f"event{cluster_id}_subtopic")
    graphs.clear()

    logger.info("Creating the essence of the event")
    essence = build_essence(subtopic_graphs, cfg, label=f"event{cluster_id}_essence")

    logger.info("Comparing each sentence to the essence")
    ranking = score_sentences(sentences, essence, creator, calc, strategy)

    summary = remove_redundant_sentences([s for _, s in ranking], cfg.redundancy_threshold,
                                         creator, calc)
    logger.info("Event %d: kept %d of %d sentences", cluster_id, len(summary), len(sentences))
    return EventSummary(cluster_id=cluster_id, sentences=sentences, subtopics=subtopics,
                        subtopic_graphs=subtopic_graphs, essence=essence,
                        ranking=ranking, summary=summary)

class NGGSummarizer:
    """
    Multi-document summarizer over n-gram graphs.

    Documents are clustered into events; each event gets its own summary,
    keyed by event cluster id.
    """

    def __init__(self, cfg: Optional[SummarizerConfig] = None,
                 splitter: SentenceSplitter = split_sentences,
                 strategy: Optional[ExecutorStrategy] = None):
        self.cfg = cfg or SummarizerConfig()
        self.splitter = splitter
        self._strategy = strategy

    def _documents(self, source: Source) -> List[TextUnit]:
        if isinstance(source, (str, Path)):
            return load_documents(source)
        return as_text_units(source)

    def _run(self, documents: List[TextUnit], strategy: ExecutorStrategy) -> Dict[int, EventSummary]:
        logger.info("Clustering %d documents into events", len(documents))
        events = DocumentEventClustering(self.cfg, strategy).get_clusters(documents)
        logger.info("Events detected: %d", len(events))
        return {cid: summarize_event(cid, docs, self.cfg, self.splitter, strategy)
                for cid, docs in events.items()}

    def summarize_events(self, source: Source) -> Dict[int, EventSummary]:
        documents = self._documents(source)
        if not documents:
            return {}
        if self._strategy is not None:
            return self._run(documents, self._strategy)
        with make_strategy(self.cfg.num_partitions) as strategy:
            return self._run(documents, strategy)

    def get_summary(self, source: Source) -> Dict[int, List[str]]:
        return {cid: ev.summary for cid, ev in self.summarize_events(source).items()}

def summarize(texts: Sequence[Union[str, TextUnit]], cfg: Optional[SummarizerConfig] = None) -> Dict[int, List[str]]:
    # Pipeline glue
    return NGGSummarizer(cfg).get_summary(texts)

def write_summary(cluster_id: int, sentences: Sequence[str], directory: Union[str, Path] = ".") -> Path:
    path = Path(directory) / f"summary_{cluster_id}.txt"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            for s in sentences:
                fh.write(s + "\n")
    except OSError as e:
        raise PersistenceError(cluster_id, str(path), str(e)) from e
    return path

def save_summaries(summaries: Dict[int, Sequence[str]], directory: Union[str, Path] = ".") -> List[int]:
    """Write every summary; a failed write is logged and skipped. Returns failed cluster ids."""
    failed: List[int] = []
    for cid, sentences in summaries.items():
        try:
            write_summary(cid, sentences, directory)
        except PersistenceError as e:
            logger.warning("%s", e)
            failed.append(cid)
    return failed
