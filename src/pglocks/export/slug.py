"""
URL slugs for lock and command names.

Published export paths depend on this transform; changing it breaks
existing URLs.

    "SELECT FOR UPDATE"            -> "select-for-update"
    "ALTER TABLE SET/DROP DEFAULT" -> "alter-table-set-drop-default"
    "UPDATE (NO KEYS)"             -> "update-no-keys"
"""

import re

_WHITESPACE = re.compile(r"\s+")
_PARENTHESES = re.compile(r"[()]")
_DROPPED_PUNCTUATION = re.compile(r"[.,:]")
_REPEATED_HYPHENS = re.compile(r"-+")


def to_url_slug(name: str) -> str:
    """Lowercase, hyphen-separated, URL-safe form of a name."""
    slug = name.lower()
    slug = _WHITESPACE.sub("-", slug)
    slug = _PARENTHESES.sub("", slug)
    slug = slug.replace("/", "-")
    slug = _DROPPED_PUNCTUATION.sub("", slug)
    slug = slug.replace("+", "plus")
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-")
