"""
triples.py — Streaming N-Triples reader.

Reads one triple per line from plain, gzip (.gz) or bzip2 (.bz2) files.
Terms are kept as written: IRIs keep their angle brackets and literals
keep their quotes and tags, e.g.

  <http://de.wikipedia.org/wiki/Berlin> <http://schema.org/inLanguage> "de" .

yields Triple('<http://de.wikipedia.org/wiki/Berlin>',
              '<http://schema.org/inLanguage>', '"de"').

Comment lines, blank lines and Turtle @prefix/@base directives are
skipped. Lines that do not hold exactly three terms are skipped and
counted as malformed.
"""

import bz2
import gzip
import logging
import re
from pathlib import Path
from typing import Iterator, NamedTuple, Optional, TextIO


logger = logging.getLogger(__name__)


# IRI | blank node | literal with optional language tag or datatype | bare token
TERM_PATTERN = re.compile(
    r'<[^>]*>'
    r'|_:\S+'
    r'|"(?:[^"\\]|\\.)*"(?:@[A-Za-z0-9-]+|\^\^<[^>]*>)?'
    r'|[^\s<>"]+'
)

DIRECTIVE_PREFIXES = ('@prefix', '@base', 'PREFIX ', 'BASE ')


class Triple(NamedTuple):
    subject: str
    relation: str
    object: str

    def arg(self, position: int) -> str:
        """Term by position: 1 = subject, 2 = relation, 3 = object."""
        return self[position - 1]


def parse_line(line: str) -> Optional[Triple]:
    """
    Parse one N-Triples line. A comment after the closing '.' is ignored.

    Returns:
        The triple, or None for blank, comment, directive and malformed lines
    """
    body = line.strip()
    if not body or body.startswith('#') or body.startswith(DIRECTIVE_PREFIXES):
        return None

    terms = []
    for match in TERM_PATTERN.finditer(body):
        term = match.group()
        if term.startswith('#'):
            break
        if term.startswith('.#'):
            terms.append('.')
            break
        terms.append(term)

    if terms and terms[-1] == '.':
        terms.pop()
    elif terms and terms[-1].endswith('.') and terms[-1][0] not in '<"':
        # Bare token glued to the terminator, e.g. ex:Berlin.
        terms[-1] = terms[-1][:-1]

    if len(terms) != 3:
        return None
    return Triple(*terms)


def _is_content(line: str) -> bool:
    body = line.strip()
    return bool(body) and not body.startswith('#') and not body.startswith(DIRECTIVE_PREFIXES)


def open_text(path: Path) -> TextIO:
    """Open a possibly compressed UTF-8 text file for reading."""
    suffix = path.suffix.lower()
    if suffix == '.gz':
        return gzip.open(path, 'rt', encoding='utf-8', errors='replace')
    if suffix == '.bz2':
        return bz2.open(path, 'rt', encoding='utf-8', errors='replace')
    return open(path, 'r', encoding='utf-8', errors='replace')


class TripleReader:
    """
    Iterator over the triples of a file.

    The file is opened on construction (so a missing file fails before any
    processing) and must be closed afterwards; use it as a context manager:

        with TripleReader(path) as reader:
            for triple in reader:
                ...
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")

        self.lines_read = 0
        self.malformed = 0
        self._file: Optional[TextIO] = open_text(self.path)

    def __iter__(self) -> Iterator[Triple]:
        if self._file is None:
            raise ValueError(f"Reader for {self.path} is closed")

        for line in self._file:
            self.lines_read += 1
            triple = parse_line(line)
            if triple is None:
                if _is_content(line):
                    self.malformed += 1
                    logger.debug(f"Skipping malformed line {self.lines_read}: {line.strip()[:200]}")
                continue
            yield triple

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
