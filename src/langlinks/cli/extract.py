#!/usr/bin/env python3
"""
llextract - Extract multilingual dictionaries from a Wikidata triple dump.

Usage:
    llextract INPUT OUTPUT_DIR [options]

INPUT is an N-Triples file (optionally .gz or .bz2), or a directory
containing wikidata.rdf.

Example:
    llextract data/raw/wikidata.nt.bz2 data/dictionaries --languages en,de,fr
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from langlinks.config import OUTPUT_FORMATS, load_config
from langlinks.extractor import extract_dictionaries
from langlinks.languages import LanguageCatalog


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


DEFAULT_INPUT_NAME = "wikidata.rdf"


def resolve_input(path: Path) -> Path:
    """A directory stands for the wikidata.rdf inside it."""
    if path.is_dir():
        return path / DEFAULT_INPUT_NAME
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract entity, category and infobox dictionaries from Wikidata language links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", type=Path, help=f"N-Triples file, or directory containing {DEFAULT_INPUT_NAME}")
    parser.add_argument("output_dir", type=Path, help="Directory for the dictionary files")
    parser.add_argument("--config", type=Path, help="Settings file (default: config/extract.yaml)")
    parser.add_argument(
        "--languages", "-l",
        help="Comma-separated language codes, most preferred first (overrides the catalog file)"
    )
    parser.add_argument("--format", choices=OUTPUT_FORMATS, dest="output_format", help="Output format")
    parser.add_argument("--no-progress", action="store_true", help="Disable the live progress panel")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for llextract."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    input_path = resolve_input(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        return 1

    try:
        config = load_config(args.config)
        catalog = LanguageCatalog.from_string(args.languages) if args.languages else None
        config = config.with_overrides(catalog=catalog, output_format=args.output_format)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    extract_dictionaries(
        input_path,
        args.output_dir,
        config,
        show_progress=not (args.no_progress or args.quiet),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
