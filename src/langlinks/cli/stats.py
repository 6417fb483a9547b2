#!/usr/bin/env python3
"""
llstats - Summarize an llextract output directory.

Usage:
    llstats OUTPUT_DIR [--by-language]
"""

import argparse
import logging
import sys
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table

from langlinks.extractor import STATS_FILENAME, THEMES
from langlinks.store import load_stats


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def count_lines(path: Path) -> int:
    count = 0
    with open(path, 'rb') as f:
        for line in f:
            if line.strip():
                count += 1
    return count


def scan_output(output_dir: Path, output_format: Optional[str] = None) -> Dict[str, Dict[str, int]]:
    """
    Count facts per theme and language from the files in output_dir.
    With output_format, only files of that format are counted.

    Returns: {theme name: {language or '': fact count}}
    """
    counts: Dict[str, Dict[str, int]] = defaultdict(dict)

    suffixes = (f".{output_format}",) if output_format else ('.jsonl', '.tsv')
    for path in sorted(output_dir.iterdir()):
        if path.suffix not in suffixes:
            continue
        stem = path.stem
        for theme in THEMES:
            if theme.multilingual and stem.startswith(theme.name + "_"):
                counts[theme.name][stem[len(theme.name) + 1:]] = count_lines(path)
                break
            if not theme.multilingual and stem == theme.name:
                counts[theme.name][""] = count_lines(path)
                break

    return counts


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for llstats."""
    parser = argparse.ArgumentParser(description="Summarize extracted dictionaries")
    parser.add_argument("output_dir", type=Path, help="llextract output directory")
    parser.add_argument("--by-language", action="store_true", help="Show one row per language")
    args = parser.parse_args(argv)

    if not args.output_dir.is_dir():
        logger.error(f"Output directory not found: {args.output_dir}")
        return 1

    console = Console()
    output_format = None

    stats_path = args.output_dir / STATS_FILENAME
    if stats_path.exists():
        stats = load_stats(stats_path)
        output_format = stats.get('output_format')
        console.print(f"Triples read: {stats.get('triples', 0):,}")
        console.print(f"Items flushed: {stats.get('items', 0):,}")
        console.print(f"Unsupported language bindings: {stats.get('unsupported_bindings', 0):,}")
        console.print(f"Trailing names not flushed: {stats.get('trailing_bindings', 0):,}")
        console.print()
    else:
        logger.warning(f"No {STATS_FILENAME} in {args.output_dir}; counting files only")

    counts = scan_output(args.output_dir, output_format)

    table = Table(title=f"Dictionaries in {args.output_dir}")
    table.add_column("Theme")
    if args.by_language:
        table.add_column("Language")
    table.add_column("Facts", justify="right")

    for theme in THEMES:
        per_language = counts.get(theme.name, {})
        if args.by_language:
            for language, count in sorted(per_language.items()):
                table.add_row(theme.name, language or "-", f"{count:,}")
        else:
            table.add_row(theme.name, f"{sum(per_language.values()):,}")

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
