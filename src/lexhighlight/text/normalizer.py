"""Phrase normalization shared by index construction and lookup.

A phrase is identified by its canonical form: lowercased, parenthetical
annotations removed, reduced to its Unicode letter runs and joined with single
spaces. Index build and scan both go through ``normalize_phrase`` so that the
two sides always agree on phrase identity.
"""

from collections.abc import Mapping
from typing import Any

import regex

# Maximal runs of Unicode letters. Digits, punctuation and combining marks split runs.
LETTER_RUN_PATTERN = regex.compile(r"\p{L}+")

# Non-nested parenthesized annotations, e.g. "bank (elv)" -> "bank".
_PARENTHETICAL_PATTERN = regex.compile(r"\([^)]*\)")

# Separators between alternate forms in a word or inflection string.
_VARIANT_SEPARATOR_PATTERN = regex.compile(r"[,;，；/]+")


def normalize_phrase(raw: str | None) -> str:
    """Convert a raw phrase into its canonical space-joined token form.

    Args:
        raw: Word, inflection variant or token run. ``None`` is treated as empty.

    Returns:
        The canonical phrase, or an empty string when no letter runs remain.
    """
    if not raw:
        return ""

    cleaned = _PARENTHETICAL_PATTERN.sub(" ", str(raw).lower())
    tokens = LETTER_RUN_PATTERN.findall(cleaned)
    if not tokens:
        return ""
    return " ".join(tokens)


def flatten_inflection(raw: Any) -> str:
    """Flatten an inflection field into a single comma-joined display string.

    Lexicon files carry inflections as a plain string, a list of forms, or a
    mapping of grammatical groups to a form or list of forms.
    """
    if isinstance(raw, str):
        return raw.strip()

    if isinstance(raw, list | tuple):
        return _join_forms(raw)

    if isinstance(raw, Mapping):
        forms: list[Any] = []
        for value in raw.values():
            if isinstance(value, list | tuple):
                forms.extend(value)
            else:
                forms.append(value)
        return _join_forms(forms)

    return ""


def split_variants(text: str | None) -> list[str]:
    """Split a string of alternate forms into trimmed, non-empty variants.

    Separators are ``,`` ``;`` ``/`` and their fullwidth comma/semicolon forms.
    """
    if not text:
        return []
    return [part.strip() for part in _VARIANT_SEPARATOR_PATTERN.split(text) if part.strip()]


def has_variant_separator(text: str | None) -> bool:
    """Return True if the text lists more than one alternate form."""
    if not text:
        return False
    return _VARIANT_SEPARATOR_PATTERN.search(text) is not None


def _join_forms(forms: list[Any] | tuple[Any, ...]) -> str:
    parts = [str(form).strip() for form in forms if form is not None]
    return ", ".join(part for part in parts if part)
