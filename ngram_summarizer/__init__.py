from .datatypes import TextUnit, NGramGraph, Similarity, SimilarityMatrix, ClusterAssignment, EventSummary
from .config import SummarizerConfig
from .errors import SummarizerError, DegenerateInputError, PersistenceError, NonConvergenceWarning
from .preprocessing import split_sentences, load_documents
from .graphing import NGramGraphCreator, build_graph
from .similarity import GraphSimilarityCalculator, graph_similarity
from .operators import IntersectOperator, MergeOperator, intersect_graphs, merge_graphs, fold_graphs
from .mcl import MatrixMCL
from .matrix import SimilarityMatrixBuilder
from .parallel import SequentialStrategy, ThreadPoolStrategy, make_strategy
from .scoring import score_sentences, remove_redundant_sentences
from .summarize import NGGSummarizer, DocumentEventClustering, summarize, summarize_event, save_summaries
