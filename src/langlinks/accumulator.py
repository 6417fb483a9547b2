"""
accumulator.py — Per-item state for dictionary extraction.

LanguageAccumulator holds the names of the item currently being read,
one per supported language. CategoryWordMemo remembers which languages
already had their word for "category" emitted during the run.
"""

from typing import Dict, Set

from langlinks.languages import LanguageCatalog


class LanguageAccumulator:
    """
    Mapping {language code -> page name} for the current item.

    Only languages from the catalog are accepted; a second name for the
    same language replaces the first. Call reset() once the item has
    been flushed.
    """

    def __init__(self, catalog: LanguageCatalog):
        self.catalog = catalog
        self._names: Dict[str, str] = {}

    def bind(self, language: str, name: str) -> bool:
        """Record `name` for `language`. Returns False if the language is unsupported."""
        if language not in self.catalog:
            return False
        self._names[language] = name
        return True

    def reset(self) -> None:
        """Discard all bindings of the current item."""
        self._names.clear()

    def is_empty(self) -> bool:
        return not self._names

    def snapshot(self) -> Dict[str, str]:
        return dict(self._names)

    def __len__(self) -> int:
        return len(self._names)


class CategoryWordMemo:
    """Languages whose category word has been emitted. Only grows."""

    def __init__(self):
        self._languages: Set[str] = set()

    def first_time(self, language: str) -> bool:
        """Mark `language` as seen; True if it was not seen before."""
        if language in self._languages:
            return False
        self._languages.add(language)
        return True

    def __contains__(self, language: object) -> bool:
        return language in self._languages

    def __len__(self) -> int:
        return len(self._languages)
