"""
store.py — Writing and reading fact files.

Dictionaries are written one file per theme and language:

  output/entityDictionary_de.jsonl
  output/categoryWords.jsonl

Formats:
  jsonl  {"subject": "<de/Berlin>", "relation": "<_hasTranslation>", "object": "<Berlin>"}
  tsv    <id>\\t<subject>\\t<relation>\\t<object>   (YAGO layout, id column left empty)

Fact files given to iter_facts() may also be N-Triples (.nt, .ttl), and
any of the three may be gzip or bzip2 compressed.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Iterator, List, Optional

import orjson

from langlinks.facts import Emission, Fact, Theme
from langlinks.triples import TripleReader, open_text


logger = logging.getLogger(__name__)


def encode_fact(fact: Fact, output_format: str) -> bytes:
    """Serialize one fact as a line in the given format."""
    if output_format == 'jsonl':
        return orjson.dumps({
            "subject": fact.subject,
            "relation": fact.relation,
            "object": fact.object,
        }) + b'\n'
    if output_format == 'tsv':
        return ('\t'.join(("", fact.subject, fact.relation, fact.object)) + '\n').encode('utf-8')
    raise ValueError(f"Unknown output format: {output_format}")


class FactWriter:
    """
    Appends emitted facts to per-theme, per-language files.

    Files are created on first write, so languages that never receive a
    fact get no file. Use as a context manager to close all files.
    """

    def __init__(self, output_dir: Path, output_format: str = 'jsonl'):
        if output_format not in ('jsonl', 'tsv'):
            raise ValueError(f"Unknown output format: {output_format}")

        self.output_dir = Path(output_dir)
        self.output_format = output_format
        self.counts: Dict[str, int] = {}
        self._files: Dict[str, BinaryIO] = {}
        self._paths: Dict[str, Path] = {}

    def remove_stale(self, themes: Iterable[Theme]) -> List[Path]:
        """
        Delete fact files of `themes` left in output_dir by an earlier run,
        in either format. Returns the removed paths.
        """
        if not self.output_dir.is_dir():
            return []

        removed = []
        for theme in themes:
            pattern = f"{theme.name}_*" if theme.multilingual else theme.name
            for suffix in ('jsonl', 'tsv'):
                for path in sorted(self.output_dir.glob(f"{pattern}.{suffix}")):
                    if path in self._paths.values():
                        continue
                    path.unlink()
                    removed.append(path)
                    logger.debug(f"Removed stale {path}")
        return removed

    def path_for(self, theme: Theme, language: Optional[str] = None) -> Path:
        return self.output_dir / f"{theme.file_stem(language)}.{self.output_format}"

    def _file_for(self, theme: Theme, language: Optional[str]) -> BinaryIO:
        stem = theme.file_stem(language)
        f = self._files.get(stem)
        if f is None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path = self.path_for(theme, language)
            f = open(path, 'wb')
            self._files[stem] = f
            self._paths[stem] = path
            self.counts[stem] = 0
            logger.debug(f"Opened {path}")
        return f

    def write(self, emission: Emission) -> None:
        f = self._file_for(emission.theme, emission.language)
        f.write(encode_fact(emission.fact, self.output_format))
        self.counts[emission.theme.file_stem(emission.language)] += 1

    def write_all(self, emissions: Iterable[Emission]) -> int:
        written = 0
        for emission in emissions:
            self.write(emission)
            written += 1
        return written

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def files_written(self) -> List[Path]:
        return sorted(self._paths.values())

    def close(self) -> None:
        for f in self._files.values():
            f.close()
        self._files.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _base_suffix(path: Path) -> str:
    """File type suffix, ignoring a trailing compression suffix."""
    suffixes = [s.lower() for s in path.suffixes]
    if suffixes and suffixes[-1] in ('.gz', '.bz2'):
        suffixes = suffixes[:-1]
    return suffixes[-1] if suffixes else ''


def iter_facts(path: Path) -> Iterator[Fact]:
    """
    Stream the facts of a JSONL, TSV or N-Triples file.

    Lines that cannot be decoded are skipped.

    Raises:
        FileNotFoundError: if the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    kind = _base_suffix(path)

    if kind == '.jsonl':
        with open_text(path) as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = orjson.loads(line)
                    yield Fact(entry['subject'], entry['relation'], entry['object'])
                except (orjson.JSONDecodeError, KeyError, TypeError):
                    logger.debug(f"Skipping undecodable line {line_num} in {path.name}")
                    continue

    elif kind == '.tsv':
        with open_text(path) as f:
            for line in f:
                columns = line.rstrip('\n').split('\t')
                if len(columns) >= 4:
                    yield Fact(columns[1], columns[2], columns[3])
                elif len(columns) == 3:
                    yield Fact(*columns)

    else:
        with TripleReader(path) as reader:
            for triple in reader:
                yield Fact(*triple)


def write_facts(facts: Iterable[Fact], path: Path) -> int:
    """Write facts to a single JSONL or TSV file chosen by suffix. Returns the count."""
    path = Path(path)
    output_format = 'tsv' if path.suffix.lower() == '.tsv' else 'jsonl'
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, 'wb') as f:
        for fact in facts:
            f.write(encode_fact(fact, output_format))
            count += 1
    return count


def write_stats(stats: dict, path: Path) -> None:
    """Write a statistics dict as indented, key-sorted JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(orjson.dumps(stats, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS))
        f.write(b'\n')


def load_stats(path: Path) -> dict:
    with open(path, 'rb') as f:
        return orjson.loads(f.read())
