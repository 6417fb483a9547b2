"""
patterns.py — Decompose page names into prefix and bare name.

Each function returns None when the name does not have the expected
shape; callers skip such names.

  split_category_name("Kategorie:Städte")     -> ("Kategorie:", "Städte")
  split_infobox_name("Vorlage:Infobox_Stadt") -> "Stadt"
  strip_marker("Category:Cities", "Category:") -> "Cities"
"""

from typing import Optional, Tuple


CATEGORY_MARKER = "Category:"
INFOBOX_MARKER = "Template:Infobox_"


def strip_marker(name: str, marker: str) -> Optional[str]:
    """Return `name` without a leading `marker`, or None if it lacks it."""
    if not name.startswith(marker):
        return None
    return name[len(marker):]


def split_category_name(name: str) -> Optional[Tuple[str, str]]:
    """
    Split a category page name at its first colon.

    Returns:
        (category word including the colon, bare category name),
        or None if the name contains no colon
    """
    cut = name.find(':')
    if cut == -1:
        return None
    return name[:cut + 1], name[cut + 1:]


def split_infobox_name(name: str) -> Optional[str]:
    """Return the part of a template name after its first underscore, or None."""
    cut = name.find('_')
    if cut == -1:
        return None
    return name[cut + 1:]
