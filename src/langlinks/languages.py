"""
languages.py — Ordered catalog of supported Wikipedia languages.

The catalog order encodes translation priority: earlier languages are
preferred as the canonical name of an item. The first entry is the
reference language (conventionally English). Category and infobox
dictionaries are only derived when an item's canonical language is the
reference language.

Catalog file format (YAML):
  languages:
    - en
    - de
    - fr
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import yaml


logger = logging.getLogger(__name__)


# Fallback when no catalog file is configured
DEFAULT_LANGUAGES = ("en", "de", "fr", "nl", "it", "es", "ro", "pl", "ar", "fa")


class LanguageCatalog:
    """
    Immutable, ordered set of supported language codes.

    Usage:
        catalog = LanguageCatalog(["en", "de", "fr"])
        catalog.most_preferred({"fr", "de"})  # -> "de"
    """

    def __init__(self, languages: Iterable[str]):
        codes = tuple(code.strip() for code in languages)

        if not codes:
            raise ValueError("Language catalog must contain at least one language")
        if any(not code for code in codes):
            raise ValueError(f"Language catalog contains an empty code: {list(codes)}")

        seen = set()
        for code in codes:
            if code in seen:
                raise ValueError(f"Duplicate language in catalog: {code}")
            seen.add(code)

        self._languages: Tuple[str, ...] = codes
        self._members = frozenset(codes)

    @property
    def languages(self) -> Tuple[str, ...]:
        return self._languages

    @property
    def reference(self) -> str:
        """The most preferred language (first catalog entry)."""
        return self._languages[0]

    def is_reference(self, language: Optional[str]) -> bool:
        return language == self._languages[0]

    def most_preferred(self, present: Iterable[str]) -> Optional[str]:
        """
        Return the highest-priority catalog language found in `present`.

        Scans the catalog in priority order and returns the first hit,
        or None if `present` shares no language with the catalog.
        """
        present = set(present)
        for language in self._languages:
            if language in present:
                return language
        return None

    def __contains__(self, language: object) -> bool:
        return language in self._members

    def __iter__(self):
        return iter(self._languages)

    def __len__(self) -> int:
        return len(self._languages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguageCatalog):
            return NotImplemented
        return self._languages == other._languages

    def __hash__(self) -> int:
        return hash(self._languages)

    def __repr__(self) -> str:
        return f"LanguageCatalog({list(self._languages)!r})"

    @classmethod
    def default(cls) -> "LanguageCatalog":
        return cls(DEFAULT_LANGUAGES)

    @classmethod
    def from_string(cls, codes: str) -> "LanguageCatalog":
        """Parse a comma-separated list such as 'en,de,fr'."""
        return cls([code for code in codes.split(",") if code.strip()])


def codes_from_yaml(values: List[object], source: object) -> List[str]:
    """
    Check that every YAML catalog entry is a string.

    YAML 1.1 reads unquoted codes such as `no` (Norwegian) or `on` as
    booleans, so those must be quoted in the file.
    """
    codes = []
    for value in values:
        if not isinstance(value, str):
            raise ValueError(
                f"Language code {value!r} in {source} is not a string; "
                f"quote it (e.g. \"no\" for Norwegian)"
            )
        codes.append(value)
    return codes


def load_catalog(path: Path) -> LanguageCatalog:
    """
    Load a language catalog from a YAML file.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file has no usable 'languages' list
    """
    if not path.exists():
        raise FileNotFoundError(f"Language catalog not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or not isinstance(data.get('languages'), list):
        raise ValueError(f"Expected a 'languages' list in {path}")

    catalog = LanguageCatalog(codes_from_yaml(data['languages'], path))

    logger.debug(f"Loaded {len(catalog)} languages from {path} (reference: {catalog.reference})")
    return catalog
