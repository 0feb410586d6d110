"""
Command-line interface for range-set.

Loads a YAML config describing a RangeCollection, prints its intervals
and draws random samples from it.

Usage:
    range-set config.yaml [--samples N] [--seed S] [--show]
    python -m range_set.cli config.yaml --samples 1000
"""

import argparse
import sys
from collections import Counter
from typing import List, Optional

from tqdm import tqdm

from .config import build_collection, build_sampler, get_config_value, load_config
from .logging_config import get_logger, setup_logging
from .sampler import EmptyRangeError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and sample a range set.")
    parser.add_argument("config", type=str, help="Path to YAML configuration file")
    parser.add_argument("--samples", type=int, default=0, help="number of random draws")
    parser.add_argument("--seed", type=int, default=None, help="overrides sampler.seed from the config")
    parser.add_argument("--show", action="store_true", default=False, help="print the stored intervals")
    parser.add_argument("--no-progress", action="store_true", default=False)
    parser.add_argument("--log-level", type=str, default=None, help="overrides logging.level from the config")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the range-set CLI."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.seed is not None:
        config["sampler"]["seed"] = args.seed
    setup_logging(args.log_level or get_config_value(config, "logging.level", "INFO"), force=True)

    collection = build_collection(config)
    if collection:
        logger.info(
            f"Loaded {len(collection)} intervals covering "
            f"[{collection.min_bound()}, {collection.max_bound()}]"
        )
    else:
        logger.info("Loaded an empty range set")

    if args.show:
        for interval in collection:
            print(f"[{interval.min}, {interval.max}] -> {interval.value!r}")

    if args.samples <= 0:
        return 0

    sampler = build_sampler(config, collection)
    counts: Counter = Counter()
    try:
        for _ in tqdm(range(args.samples), disable=args.no_progress):
            # keyed by repr, YAML values may be unhashable lists or mappings
            counts[repr(sampler.sample())] += 1
    except EmptyRangeError as e:
        logger.error(f"Error: {e}")
        return 2

    for value, count in counts.most_common():
        print(f"{value}\t{count}\t{count / args.samples:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
