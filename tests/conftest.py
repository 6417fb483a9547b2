"""Pytest configuration and shared fixtures."""
import pytest
import tempfile
from pathlib import Path
from urllib.parse import quote

from langlinks.config import ExtractorConfig
from langlinks.languages import LanguageCatalog
from langlinks.triples import Triple


ITEM_TYPE = "<http://wikiba.se/ontology#Item>"
RDF_TYPE = "<http://www.w3.org/1999/02/22-rdf-syntax-ns#type>"
IN_LANGUAGE = "<http://schema.org/inLanguage>"
ABOUT = "<http://schema.org/about>"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def catalog():
    """Small priority catalog: English first, then German and French."""
    return LanguageCatalog(["en", "de", "fr"])


@pytest.fixture
def config(catalog):
    return ExtractorConfig(catalog=catalog)


@pytest.fixture
def sitelink():
    """Factory for a language-binding triple with a percent-encoded page IRI."""
    def make(language: str, title: str) -> Triple:
        page = f"<http://{language}.wikipedia.org/wiki/{quote(title)}>"
        return Triple(page, IN_LANGUAGE, f'"{language}"')
    return make


@pytest.fixture
def item_marker():
    """Factory for an item type triple (the item boundary)."""
    def make(qid: str = "Q1") -> Triple:
        return Triple(f"<http://www.wikidata.org/entity/{qid}>", RDF_TYPE, ITEM_TYPE)
    return make


@pytest.fixture
def sample_dump(temp_dir):
    """
    N-Triples file with five complete items and one trailing item.

    Items: Berlin (en, de, unsupported xx), Category:Cities (en, de, fr),
    Template:Infobox_settlement (en, de, fr), Paris (fr only),
    Category:Rivers (en, de), then 'Trailing' (en) with no closing marker.
    """
    def marker(qid):
        return f"<http://www.wikidata.org/entity/{qid}> {RDF_TYPE} {ITEM_TYPE} ."

    def link(language, title):
        page = f"<http://{language}.wikipedia.org/wiki/{quote(title)}>"
        return (f"{page} {ABOUT} <http://www.wikidata.org/entity/Q0> .\n"
                f"{page} {IN_LANGUAGE} \"{language}\" .")

    lines = [
        "# Wikidata sitelinks sample",
        "@prefix schema: <http://schema.org/> .",
        "",
        marker("Q64"),
        link("en", "Berlin"),
        link("de", "Berlin"),
        link("xx", "Berlino"),
        marker("Q1457"),
        link("en", "Category:Cities"),
        link("de", "Kategorie:Städte"),
        link("fr", "Catégorie:Villes"),
        marker("Q6541"),
        link("en", "Template:Infobox_settlement"),
        link("de", "Vorlage:Infobox_Ort"),
        link("fr", "Modèle:Infobox_Localité"),
        marker("Q90"),
        link("fr", "Paris"),
        marker("Q4049"),
        link("en", "Category:Rivers"),
        link("de", "Kategorie:Flüsse"),
        "this line is not a triple",
        marker("Q99"),
        link("en", "Trailing"),
    ]

    path = temp_dir / "wikidata.nt"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
