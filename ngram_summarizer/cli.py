"""
Command-line entry point.

    ngram-summarize news/ -o summaries/ --threshold 0.25

Reads the .txt/.md/.rtf files of a directory, prints one summary per
detected event and writes summary_<event>.txt files to the output directory.
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .config import SummarizerConfig
from .preprocessing import load_documents
from .summarize import NGGSummarizer, save_summaries

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngram-summarize",
        description="Multi-document extractive summaries from n-gram graphs",
    )
    parser.add_argument("directory", help="Directory of plain-text documents")
    parser.add_argument("-o", "--output", default=".", help="Where summary files are written")
    parser.add_argument("--min-n", type=int, dest="min_n", help="Shortest n-gram length")
    parser.add_argument("--max-n", type=int, dest="max_n", help="Longest n-gram length")
    parser.add_argument("--window", type=int, help="Correlation window size")
    parser.add_argument("--lowercase", action="store_true", default=None, help="Lowercase text first")
    parser.add_argument("--threshold", type=float, dest="redundancy_threshold",
                        help="Redundancy threshold (normalized value similarity)")
    parser.add_argument("--blend", type=float, dest="blend_factor", help="Intersect/merge blend factor")
    parser.add_argument("--inflation", type=float, dest="inflation_power", help="MCL inflation power")
    parser.add_argument("--expansion", type=int, dest="expansion_power", help="MCL expansion power")
    parser.add_argument("--epsilon", type=float, dest="prune_epsilon", help="MCL pruning epsilon")
    parser.add_argument("--max-iterations", type=int, dest="max_iterations", help="MCL iteration cap")
    parser.add_argument("--materialize-every", type=int, dest="materialize_every",
                        help="Materialize fold results every N steps")
    parser.add_argument("--partitions", type=int, dest="num_partitions", help="Worker threads")
    parser.add_argument("--checkpoint-dir", dest="checkpoint_dir", help="Write fold checkpoints here")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")
    return parser

_CONFIG_KEYS = ("min_n", "max_n", "window", "lowercase", "redundancy_threshold", "blend_factor",
                "inflation_power", "expansion_power", "prune_epsilon", "max_iterations",
                "materialize_every", "num_partitions", "checkpoint_dir")

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        cfg = SummarizerConfig.from_mapping({k: getattr(args, k) for k in _CONFIG_KEYS})
        documents = load_documents(args.directory)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if not documents:
        print(f"error: no documents found in {args.directory}", file=sys.stderr)
        return 2

    summaries = NGGSummarizer(cfg).get_summary(documents)
    for cid, sentences in summaries.items():
        print(f"== Event {cid} ({len(sentences)} sentences)")
        for s in sentences:
            print(s)
        print()

    failed = save_summaries(summaries, args.output)
    return 1 if failed else 0

if __name__ == "__main__":
    sys.exit(main())
