#!/usr/bin/env python3
"""
llselect - Keep only occursIn / occursSince / occursUntil facts.

Usage:
    llselect INPUT OUTPUT

INPUT may be JSONL, TSV or N-Triples (optionally compressed); the
output format follows the OUTPUT suffix (.tsv, otherwise JSONL).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from langlinks.selector import SPOTLX_RELATIONS, select_facts
from langlinks.store import iter_facts, write_facts


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for llselect."""
    parser = argparse.ArgumentParser(description="Select SPOTLX facts from a deduced fact file")
    parser.add_argument("input", type=Path, help="Input fact file")
    parser.add_argument("output", type=Path, help="Output fact file (.jsonl or .tsv)")
    args = parser.parse_args(argv)

    if not args.input.exists():
        logger.error(f"Input file not found: {args.input}")
        return 1

    logger.info(f"Selecting {', '.join(sorted(SPOTLX_RELATIONS))} from {args.input}")
    count = write_facts(select_facts(iter_facts(args.input)), args.output)
    logger.info(f"  Selected: {count:,} facts")
    logger.info(f"  -> {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
