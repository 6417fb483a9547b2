"""Tests for fact file writing and reading."""
import gzip
import json

import pytest

from langlinks.extractor import CATEGORY_WORDS, ENTITY_DICTIONARY
from langlinks.facts import Emission, Fact, HAS_TRANSLATION
from langlinks.store import FactWriter, iter_facts, load_stats, write_facts, write_stats


BERLIN_DE = Fact("<de/Berlin>", HAS_TRANSLATION, "<Berlin>")
PARIS_FR = Fact("<fr/Paris>", HAS_TRANSLATION, "<Paris>")


def test_jsonl_writer(temp_dir):
    with FactWriter(temp_dir, "jsonl") as writer:
        writer.write(Emission(ENTITY_DICTIONARY, "de", BERLIN_DE))
        writer.write(Emission(ENTITY_DICTIONARY, "fr", PARIS_FR))
        writer.write(Emission(ENTITY_DICTIONARY, "de", BERLIN_DE))

    path = temp_dir / "entityDictionary_de.jsonl"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert json.loads(lines[0]) == {
        "subject": "<de/Berlin>",
        "relation": "<_hasTranslation>",
        "object": "<Berlin>",
    }
    assert writer.counts == {"entityDictionary_de": 2, "entityDictionary_fr": 1}
    assert writer.total == 3
    assert [p.name for p in writer.files_written] == [
        "entityDictionary_de.jsonl",
        "entityDictionary_fr.jsonl",
    ]


def test_tsv_writer(temp_dir):
    fact = Fact('"de"', "<_hasCategoryWord>", '"Kategorie:"')
    with FactWriter(temp_dir, "tsv") as writer:
        writer.write_all([Emission(CATEGORY_WORDS, None, fact)])

    line = (temp_dir / "categoryWords.tsv").read_text(encoding="utf-8")
    assert line == '\t"de"\t<_hasCategoryWord>\t"Kategorie:"\n'


def test_no_file_without_facts(temp_dir):
    with FactWriter(temp_dir / "out", "jsonl"):
        pass
    assert not (temp_dir / "out").exists()


def test_remove_stale(temp_dir):
    for name in ("entityDictionary_fr.jsonl", "entityDictionary_de.tsv", "categoryWords.tsv",
                 "categoryDictionary_de.jsonl", "notes.txt"):
        (temp_dir / name).write_text("old\n", encoding="utf-8")

    with FactWriter(temp_dir, "jsonl") as writer:
        removed = writer.remove_stale([ENTITY_DICTIONARY, CATEGORY_WORDS])

    assert sorted(p.name for p in removed) == [
        "categoryWords.tsv",
        "entityDictionary_de.tsv",
        "entityDictionary_fr.jsonl",
    ]
    assert sorted(p.name for p in temp_dir.iterdir()) == ["categoryDictionary_de.jsonl", "notes.txt"]


def test_remove_stale_missing_dir(temp_dir):
    writer = FactWriter(temp_dir / "out", "jsonl")
    assert writer.remove_stale([ENTITY_DICTIONARY]) == []
    assert not (temp_dir / "out").exists()


def test_unknown_format(temp_dir):
    with pytest.raises(ValueError):
        FactWriter(temp_dir, "xml")


def test_unicode_preserved(temp_dir):
    fact = Fact("<de/wikicat_Städte>", HAS_TRANSLATION, "<wikicat_Cities>")
    write_facts([fact], temp_dir / "facts.jsonl")

    assert list(iter_facts(temp_dir / "facts.jsonl")) == [fact]


@pytest.mark.parametrize("name", ["facts.jsonl", "facts.tsv"])
def test_write_then_read(temp_dir, name):
    path = temp_dir / name
    assert write_facts([BERLIN_DE, PARIS_FR], path) == 2
    assert list(iter_facts(path)) == [BERLIN_DE, PARIS_FR]


def test_read_three_column_tsv(temp_dir):
    path = temp_dir / "facts.tsv"
    path.write_text("<a>\t<occursIn>\t<b>\n", encoding="utf-8")
    assert list(iter_facts(path)) == [Fact("<a>", "<occursIn>", "<b>")]


def test_read_ntriples(temp_dir):
    path = temp_dir / "facts.nt"
    path.write_text("<a> <occursIn> <b> .\n<a> <occursSince> \"2001\" .\n", encoding="utf-8")
    assert list(iter_facts(path)) == [
        Fact("<a>", "<occursIn>", "<b>"),
        Fact("<a>", "<occursSince>", '"2001"'),
    ]


def test_read_gzipped_jsonl_skips_bad_lines(temp_dir):
    path = temp_dir / "facts.jsonl.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write('{"subject": "<a>", "relation": "<occursIn>", "object": "<b>"}\n')
        f.write("not json\n")
        f.write('{"subject": "<a>"}\n')

    assert list(iter_facts(path)) == [Fact("<a>", "<occursIn>", "<b>")]


def test_read_missing_file(temp_dir):
    with pytest.raises(FileNotFoundError):
        list(iter_facts(temp_dir / "missing.jsonl"))


def test_stats_round_trip(temp_dir):
    stats = {"triples": 10, "facts": {"entityDictionary": 3}}
    write_stats(stats, temp_dir / "stats.json")
    assert load_stats(temp_dir / "stats.json") == stats
