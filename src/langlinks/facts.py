"""
facts.py — Facts, output themes, and identifier construction.

Identifiers follow the YAGO conventions:

  for_string("Cities")                     -> "Cities"   (quoted)
  for_string_with_language("Stadt", "de")  -> "Stadt"@de
  for_entity("New York")                   -> <New_York>
  for_foreign_entity("Berlin", "de")       -> <de/Berlin>
  for_wiki_category("Cities")              -> <wikicat_Cities>
  for_foreign_wiki_category("Städte", "de") -> <de/wikicat_Städte>

Names in the reference language (English) carry no language prefix, so
the English canonical name of an entity is its plain identifier.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional
from urllib.parse import unquote


# Language whose identifiers are written without a language prefix
ENGLISH = "en"

HAS_TRANSLATION = "<_hasTranslation>"
HAS_CATEGORY_WORD = "<_hasCategoryWord>"

WIKICAT_PREFIX = "wikicat_"


class Fact(NamedTuple):
    """A (subject, relation, object) statement written to a dictionary."""
    subject: str
    relation: str
    object: str


@dataclass(frozen=True)
class Theme:
    """
    A named output collection of facts.

    Multilingual themes are written once per language, e.g. the theme
    'entityDictionary' in German is stored as 'entityDictionary_de'.
    """
    name: str
    description: str
    multilingual: bool = True

    def file_stem(self, language: Optional[str] = None) -> str:
        if self.multilingual:
            if not language:
                raise ValueError(f"Theme {self.name} requires a language")
            return f"{self.name}_{language}"
        return self.name


class Emission(NamedTuple):
    """A fact bound for a theme; language is None for unscoped themes."""
    theme: Theme
    language: Optional[str]
    fact: Fact


# =============================================================================
# Identifier construction
# =============================================================================

def _escape(text: str) -> str:
    return (text.replace('\\', '\\\\')
                .replace('"', '\\"')
                .replace('\n', '\\n')
                .replace('\r', '\\r')
                .replace('\t', '\\t'))


def for_string(text: str) -> str:
    """Quoted string literal."""
    return f'"{_escape(text)}"'


def for_string_with_language(text: str, language: str) -> str:
    """Quoted string literal with a language tag."""
    return f'"{_escape(text)}"@{language}'


def for_entity(name: str) -> str:
    """Entity identifier for a (reference language) name."""
    return f"<{name.replace(' ', '_')}>"


def for_foreign_entity(name: str, language: str) -> str:
    """Entity identifier for a name in the given language."""
    if language == ENGLISH:
        return for_entity(name)
    return f"<{language}/{name.replace(' ', '_')}>"


def for_wiki_category(name: str) -> str:
    """Identifier of a reference-language Wikipedia category."""
    return for_entity(WIKICAT_PREFIX + name)


def for_foreign_wiki_category(name: str, language: str) -> str:
    """Identifier of a Wikipedia category in the given language."""
    return for_foreign_entity(WIKICAT_PREFIX + name, language)


# =============================================================================
# Decoding of raw triple components
# =============================================================================

def strip_quotes(literal: str) -> str:
    """
    Remove the quotes (and any @lang or ^^<type> suffix) from a literal.

    Values that are not quoted are returned unchanged.
    """
    if not literal.startswith('"'):
        return literal
    end = literal.rfind('"')
    if end <= 0:
        return literal[1:]
    return literal[1:end]


def strip_prefix(iri: str) -> str:
    """
    Reduce an IRI to its local name.

    <http://de.wikipedia.org/wiki/Kategorie:St%C3%A4dte> -> Kategorie:St%C3%A4dte

    Wikipedia page IRIs are cut after '/wiki/' so that slashes inside the
    title survive; other IRIs are cut after the last '/' or '#'.
    """
    name = iri
    if name.startswith('<') and name.endswith('>'):
        name = name[1:-1]

    marker = name.find('/wiki/')
    if marker != -1:
        return name[marker + len('/wiki/'):]

    cut = max(name.rfind('/'), name.rfind('#'))
    return name[cut + 1:]


def decode_percent(text: str) -> str:
    """Decode %XX escapes (UTF-8)."""
    return unquote(text)


def local_name(iri: str) -> str:
    """Prefix-stripped, percent-decoded name of an IRI."""
    return decode_percent(strip_prefix(iri))
