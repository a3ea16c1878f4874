from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

@dataclass
class SummarizerConfig:
    # n-gram graphs
    min_n: int = 3
    max_n: int = 3
    window: int = 3  # how many following n-grams each n-gram is linked to
    lowercase: bool = False
    # Markov clustering
    max_iterations: int = 100
    expansion_power: int = 2
    inflation_power: float = 2.0
    prune_epsilon: float = 0.05
    tolerance: float = 1e-6
    # graph combination and selection
    blend_factor: float = 0.5
    redundancy_threshold: float = 0.2
    materialize_every: int = 20
    # execution
    num_partitions: int = 4
    checkpoint_dir: Optional[str] = None

    def __post_init__(self):
        checks = [
            ("min_n", self.min_n >= 1, "must be >= 1"),
            ("max_n", self.max_n >= self.min_n, "must be >= min_n"),
            ("window", self.window >= 1, "must be >= 1"),
            ("max_iterations", self.max_iterations >= 1, "must be >= 1"),
            ("expansion_power", self.expansion_power >= 1, "must be >= 1"),
            ("inflation_power", self.inflation_power > 1.0, "must be > 1"),
            ("prune_epsilon", 0.0 <= self.prune_epsilon < 1.0, "must be in [0, 1)"),
            ("tolerance", self.tolerance > 0.0, "must be > 0"),
            ("blend_factor", 0.0 < self.blend_factor < 1.0, "must be in (0, 1)"),
            ("redundancy_threshold", 0.0 <= self.redundancy_threshold <= 1.0, "must be in [0, 1]"),
            ("materialize_every", self.materialize_every >= 1, "must be >= 1"),
            ("num_partitions", self.num_partitions >= 1, "must be >= 1"),
        ]
        for name, ok, msg in checks:
            if not ok:
                raise ValueError(f"{name} {msg}, got {getattr(self, name)!r}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SummarizerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in values if k not in known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in values.items() if k in known and v is not None})
