"""
extractor.py — Build multilingual dictionaries from Wikidata language links.

Input is the Wikidata RDF export, where every item is introduced by a type
triple and followed by the sitelinks of its Wikipedia pages:

  <http://www.wikidata.org/entity/Q64> <...#type> <http://wikiba.se/ontology#Item> .
  <http://en.wikipedia.org/wiki/Berlin> <http://schema.org/inLanguage> "en" .
  <http://de.wikipedia.org/wiki/Berlin> <http://schema.org/inLanguage> "de" .
  <http://www.wikidata.org/entity/Q65> <...#type> <http://wikiba.se/ontology#Item> .

Page names are collected per language until the next item marker, then
flushed into up to four dictionaries:

  entityDictionary_<lang>           foreign entity -> entity in the most preferred language
  categoryWords                     language -> its word for "category"
  categoryDictionary_<lang>         foreign category -> English category
  infoboxTemplateDictionary_<lang>  foreign infobox template -> English template name

Names still pending when the input ends are not flushed: only an item
marker completes an item.
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from langlinks.accumulator import CategoryWordMemo, LanguageAccumulator
from langlinks.config import ExtractorConfig
from langlinks.facts import (
    HAS_CATEGORY_WORD,
    HAS_TRANSLATION,
    Emission,
    Fact,
    Theme,
    for_foreign_entity,
    for_foreign_wiki_category,
    for_string,
    for_string_with_language,
    for_wiki_category,
    local_name,
    strip_quotes,
)
from langlinks.patterns import (
    CATEGORY_MARKER,
    INFOBOX_MARKER,
    split_category_name,
    split_infobox_name,
    strip_marker,
)
from langlinks.progress_display import ProgressDisplay
from langlinks.store import FactWriter, write_stats
from langlinks.triples import Triple, TripleReader


logger = logging.getLogger(__name__)


ENTITY_DICTIONARY = Theme(
    "entityDictionary",
    "Maps a foreign entity to a YAGO entity. Data from http://www.wikidata.org/.",
)

CATEGORY_WORDS = Theme(
    "categoryWords",
    "Words for 'category' in different languages.",
    multilingual=False,
)

CATEGORY_DICTIONARY = Theme(
    "categoryDictionary",
    "Maps a foreign category name to the English name.",
)

INFOBOX_TEMPLATE_DICTIONARY = Theme(
    "infoboxTemplateDictionary",
    "Maps a foreign infobox template name to the English name.",
)

THEMES = (ENTITY_DICTIONARY, CATEGORY_WORDS, CATEGORY_DICTIONARY, INFOBOX_TEMPLATE_DICTIONARY)

STATS_FILENAME = "extraction_stats.json"


@dataclass
class ExtractionStats:
    """Counters for one extraction run."""
    triples: int = 0
    bindings: int = 0
    unsupported_bindings: int = 0
    items: int = 0
    items_without_canonical: int = 0
    category_items: int = 0
    infobox_items: int = 0
    malformed_category_names: int = 0
    malformed_infobox_names: int = 0
    trailing_bindings: int = 0
    facts: Dict[str, int] = field(default_factory=dict)

    def count(self, emission: Emission) -> None:
        name = emission.theme.name
        self.facts[name] = self.facts.get(name, 0) + 1

    @property
    def total_facts(self) -> int:
        return sum(self.facts.values())

    def to_dict(self) -> dict:
        data = asdict(self)
        data['total_facts'] = self.total_facts
        return data


class DictionaryExtractor:
    """
    Single forward pass over a triple stream.

    Usage:
        extractor = DictionaryExtractor(config)
        for emission in extractor.extract(triples):
            writer.write(emission)

    One extractor holds the state of one run (the category word memo
    spans the whole run), so use a fresh instance per input.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()
        self.catalog = self.config.catalog
        self.accumulator = LanguageAccumulator(self.catalog)
        self.category_words = CategoryWordMemo()
        self.stats = ExtractionStats()

    def output_themes(self) -> List[str]:
        """File stems of every collection this extractor can write."""
        stems = []
        for theme in THEMES:
            if theme.multilingual:
                stems.extend(theme.file_stem(language) for language in self.catalog)
            else:
                stems.append(theme.file_stem())
        return stems

    def is_binding(self, triple: Triple) -> bool:
        return triple.relation.endswith(self.config.binding_suffix)

    def is_boundary(self, triple: Triple) -> bool:
        return triple.arg(3).endswith(self.config.boundary_suffix)

    def extract(
        self,
        triples: Iterable[Triple],
        progress: Optional[ProgressDisplay] = None,
    ) -> Iterator[Emission]:
        """Yield the emissions of every item completed by an item marker."""
        for triple in triples:
            self.stats.triples += 1
            yield from self.process(triple)
            if progress is not None:
                progress.update(
                    triples=self.stats.triples,
                    items=self.stats.items,
                    facts=self.stats.total_facts,
                )

        if not self.accumulator.is_empty():
            self.stats.trailing_bindings = len(self.accumulator)
            logger.debug(
                f"Input ended with {len(self.accumulator)} names not followed by an item marker; not flushed"
            )
            self.accumulator.reset()

    def process(self, triple: Triple) -> List[Emission]:
        """Feed one triple; returns the emissions of a completed item, if any."""
        if self.is_binding(triple):
            language = strip_quotes(triple.object)
            if self.accumulator.bind(language, local_name(triple.subject)):
                self.stats.bindings += 1
            else:
                self.stats.unsupported_bindings += 1
            return []

        if self.is_boundary(triple) and not self.accumulator.is_empty():
            return self.flush()

        return []

    def flush(self) -> List[Emission]:
        """Derive all dictionary entries of the current item, then reset it."""
        names = self.accumulator.snapshot()
        self.accumulator.reset()
        self.stats.items += 1

        canonical = self.catalog.most_preferred(names)
        if canonical is None:
            self.stats.items_without_canonical += 1
            return []

        emissions = self.entity_translations(names, canonical)

        if self.catalog.is_reference(canonical):
            canonical_name = names[canonical]

            category = strip_marker(canonical_name, CATEGORY_MARKER)
            if category is not None:
                self.stats.category_items += 1
                emissions.extend(self.category_translations(names, category))

            template = strip_marker(canonical_name, INFOBOX_MARKER)
            if template is not None:
                self.stats.infobox_items += 1
                emissions.extend(self.infobox_translations(names, template))

        for emission in emissions:
            self.stats.count(emission)
        return emissions

    def entity_translations(self, names: Dict[str, str], canonical: str) -> List[Emission]:
        target = for_foreign_entity(names[canonical], canonical)
        return [
            Emission(
                ENTITY_DICTIONARY,
                language,
                Fact(for_foreign_entity(name, language), HAS_TRANSLATION, target),
            )
            for language, name in names.items()
        ]

    def category_translations(self, names: Dict[str, str], category: str) -> List[Emission]:
        """Category words and category names for an item whose English name is 'Category:<category>'."""
        target = for_wiki_category(category)
        emissions = []

        for language, name in names.items():
            parts = split_category_name(name)
            if parts is None:
                self.stats.malformed_category_names += 1
                continue
            category_word, bare_name = parts

            if self.category_words.first_time(language):
                emissions.append(Emission(
                    CATEGORY_WORDS,
                    None,
                    Fact(for_string(language), HAS_CATEGORY_WORD, for_string(category_word)),
                ))

            emissions.append(Emission(
                CATEGORY_DICTIONARY,
                language,
                Fact(for_foreign_wiki_category(bare_name, language), HAS_TRANSLATION, target),
            ))

        return emissions

    def infobox_translations(self, names: Dict[str, str], template: str) -> List[Emission]:
        target = for_string(template)
        emissions = []

        for language, name in names.items():
            bare_name = split_infobox_name(name)
            if bare_name is None:
                self.stats.malformed_infobox_names += 1
                continue
            emissions.append(Emission(
                INFOBOX_TEMPLATE_DICTIONARY,
                language,
                Fact(for_string_with_language(bare_name, language), HAS_TRANSLATION, target),
            ))

        return emissions


def extract_dictionaries(
    input_path: Path,
    output_dir: Path,
    config: Optional[ExtractorConfig] = None,
    show_progress: bool = True,
) -> ExtractionStats:
    """
    Run a full extraction from an N-Triples file into output_dir.

    Raises:
        FileNotFoundError: if input_path does not exist (before anything is written)
    """
    config = config or ExtractorConfig()
    extractor = DictionaryExtractor(config)

    logger.info("Extracting multilingual dictionaries")
    logger.info(f"  Input: {input_path}")
    logger.info(f"  Languages: {', '.join(config.catalog)} (reference: {config.catalog.reference})")

    with TripleReader(input_path) as reader:
        with FactWriter(output_dir, config.output_format) as writer:
            writer.remove_stale(THEMES)
            with ProgressDisplay(
                "Extracting dictionaries",
                update_interval=config.progress_interval,
                enabled=show_progress,
            ) as progress:
                writer.write_all(extractor.extract(reader, progress))

    files = writer.files_written

    stats = extractor.stats.to_dict()
    stats['malformed_lines'] = reader.malformed
    stats['languages'] = list(config.catalog)
    stats['output_format'] = config.output_format
    stats['files'] = dict(sorted(writer.counts.items()))
    write_stats(stats, Path(output_dir) / STATS_FILENAME)

    logger.info(f"  Triples read: {extractor.stats.triples:,}")
    logger.info(f"  Items flushed: {extractor.stats.items:,}")
    logger.info(f"  Facts written: {extractor.stats.total_facts:,} in {len(files)} files")
    for theme, count in sorted(extractor.stats.facts.items()):
        logger.info(f"    {theme}: {count:,}")
    logger.info(f"  -> {output_dir}")

    return extractor.stats
