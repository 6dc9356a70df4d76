"""
Location equivalence for profile vs. employer locations.

A missing location is never a mismatch. Substring containment matches
("Seattle" vs "Seattle, WA"), and so does any shared word longer than two
characters.
"""

from __future__ import annotations

import re

# Shared words must be longer than this to count ("wa", "ny" do not)
MIN_SHARED_TOKEN_LENGTH = 2

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_location(text: str) -> str:
    """Lowercase, strip punctuation, collapse whitespace."""
    text = _PUNCTUATION_RE.sub("", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def locations_match(a: str, b: str) -> bool:
    """
    Return True if two free-text locations plausibly describe the same place.

    Empty input on either side returns True: absent data is not evidence of
    a mismatch.
    """
    if not a or not b:
        return True

    norm_a = normalize_location(a)
    norm_b = normalize_location(b)

    if norm_a in norm_b or norm_b in norm_a:
        return True

    tokens_b = set(norm_b.split())
    return any(
        len(token) > MIN_SHARED_TOKEN_LENGTH and token in tokens_b
        for token in norm_a.split()
    )
