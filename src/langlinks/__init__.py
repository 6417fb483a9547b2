"""
langlinks - Multilingual dictionaries from Wikidata language links.

Reads the sitelinks of Wikidata items (which Wikipedia page describes the
item in which language) and derives:

- entityDictionary_<lang>: foreign page name -> name in the most preferred language
- categoryWords: each language's word for "category"
- categoryDictionary_<lang>: foreign category -> English category
- infoboxTemplateDictionary_<lang>: foreign infobox template -> English template

Usage:
    from langlinks import DictionaryExtractor, ExtractorConfig, LanguageCatalog
    from langlinks.triples import TripleReader

    config = ExtractorConfig(catalog=LanguageCatalog(["en", "de", "fr"]))
    extractor = DictionaryExtractor(config)
    with TripleReader(path) as reader:
        for emission in extractor.extract(reader):
            print(emission.theme.file_stem(emission.language), emission.fact)
"""

from langlinks.config import ExtractorConfig, load_config
from langlinks.extractor import DictionaryExtractor, ExtractionStats, extract_dictionaries
from langlinks.languages import LanguageCatalog

__version__ = "0.1.0"

__all__ = [
    "DictionaryExtractor",
    "ExtractionStats",
    "ExtractorConfig",
    "LanguageCatalog",
    "extract_dictionaries",
    "load_config",
]
