"""Slug generation and collision-free slug allocation."""

import re
import unicodedata
from typing import Callable

from pageforge.errors import EmptySeedError
from pageforge.models.template import Row

# Punctuation is dropped outright ("plumber's" -> "plumbers"); separators
# (whitespace, underscores, hyphens) collapse into single hyphens.
_PUNCTUATION_RE = re.compile(r"[^\w\s-]")
_SEPARATOR_RE = re.compile(r"[\s_-]+")

PRIMARY_SEED_FIELD = "keyword"


def slugify(seed: str) -> str:
    """Return a lowercase, ASCII-only, hyphen-separated slug for *seed*.

    Returns an empty string when nothing URL-safe survives normalisation.
    """
    if not seed:
        return ""

    # Normalise unicode, keep only ASCII
    slug = unicodedata.normalize("NFKD", seed)
    slug = slug.encode("ascii", "ignore").decode("ascii")

    slug = _PUNCTUATION_RE.sub("", slug.lower())
    slug = _SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")


def seed_for_row(row: Row, field: str = PRIMARY_SEED_FIELD) -> str:
    """Pick the slug seed for *row*: *field* if set, else the first field's value."""
    if row.get(field):
        return row[field]
    for value in row.values():
        return value or ""
    return ""


def allocate_slug(seed: str, exists: Callable[[str], bool]) -> str:
    """Return the first slug derived from *seed* for which *exists* is false.

    Candidates are tried in order: ``base``, ``base-1``, ``base-2``, …
    Each check runs only after the previous one returned, so *exists* must
    observe every slug committed before the call for the result to be
    unique.

    Raises:
        EmptySeedError: if *seed* normalises to an empty slug.
    """
    base = slugify(seed)
    if not base:
        raise EmptySeedError(f"Cannot derive a slug from {seed!r}.")

    candidate = base
    counter = 1
    while exists(candidate):
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate
