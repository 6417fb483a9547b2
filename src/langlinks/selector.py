"""
selector.py — Keep only the facts of selected relations.

Produces the final SPOTLX fact set: of the deduced facts, only the
occursIn / occursSince / occursUntil statements are kept. Order and
duplicates of the input are preserved.
"""

from typing import Collection, Iterable, Iterator

from langlinks.facts import Fact, Theme


SPOTLX_FACTS = Theme("spotlxFacts", "SPOTLX deduced facts", multilingual=False)

SPOTLX_RELATIONS = frozenset({
    "<occursIn>",
    "<occursSince>",
    "<occursUntil>",
})


def select_facts(
    facts: Iterable[Fact],
    relations: Collection[str] = SPOTLX_RELATIONS,
) -> Iterator[Fact]:
    """Yield the facts whose relation is in `relations`."""
    for fact in facts:
        if fact.relation in relations:
            yield fact
