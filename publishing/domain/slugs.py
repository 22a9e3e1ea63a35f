"""Slug derivation: URL-safe secondary keys built from human-readable text."""

import hashlib
import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase ASCII slug with runs of other characters collapsed to '-'."""
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALNUM.sub("-", ascii_text).strip("-")


def short_hash(text: str, length: int = 8) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()[:length]


def article_slug(title: str) -> str:
    """Slug for an article title.

    The readable part comes from ``slugify``; the hash suffix keeps titles that
    slugify identically ("Go & You" vs "Go You") apart. The same trimmed title
    always yields the same slug.
    """
    title = title.strip()
    base = slugify(title)
    suffix = short_hash(title)
    return f"{base}-{suffix}" if base else suffix
