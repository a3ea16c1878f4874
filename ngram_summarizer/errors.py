from __future__ import annotations

class SummarizerError(Exception):
    """Base class for summarizer failures."""

class DegenerateInputError(SummarizerError):
    """A text unit is too short to yield a single n-gram."""

class PersistenceError(SummarizerError):
    """A summary could not be written to disk."""

    def __init__(self, cluster_id: int, path: str, reason: str):
        super().__init__(f"Could not write summary {cluster_id} to {path}: {reason}")
        self.cluster_id = cluster_id
        self.path = path

class NonConvergenceWarning(RuntimeWarning):
    """Markov clustering stopped at its iteration cap before converging."""
