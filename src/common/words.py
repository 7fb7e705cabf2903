from __future__ import annotations

import re
from typing import List, Sequence


TOTAL_WORDS = 12

_NON_LETTER_RE = re.compile(r"[^a-z]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize(raw: str) -> str:
    """Normalize raw input into a single slot word.

    Lower-cases, drops everything outside ``a``-``z`` and capitalizes the
    first letter. Input that reduces to nothing yields ``""``.
    """
    letters = _NON_LETTER_RE.sub("", (raw or "").lower())
    if not letters:
        return ""
    return letters[0].upper() + letters[1:]


def split_tokens(text: str) -> List[str]:
    """Split on whitespace runs, dropping empty tokens."""
    return [tok for tok in _WHITESPACE_RE.split((text or "").strip()) if tok]


def first_token(text: str) -> str:
    tokens = split_tokens(text)
    return tokens[0] if tokens else ""


def empty_slots() -> List[str]:
    return [""] * TOTAL_WORDS


def distribute(text: str, focused_index: int, current: Sequence[str]) -> List[str]:
    """Spread pasted text over the phrase slots.

    - No tokens: returns a copy of ``current``.
    - One token: lands on ``focused_index``.
    - Several tokens: always realigns to slot 0, whatever had focus.

    Tokens that would fall past the last slot are dropped. Untouched slots
    keep their previous value and the result is always 12 long.
    """
    out = list(current)
    tokens = split_tokens(text)
    if not tokens:
        return out

    start = focused_index if len(tokens) == 1 else 0
    for offset, tok in enumerate(tokens):
        idx = start + offset
        if idx < 0 or idx >= TOTAL_WORDS:
            break
        out[idx] = sanitize(tok)
    return out


def is_complete(words: Sequence[str]) -> bool:
    return all(w.strip() != "" for w in words)


def is_pristine(words: Sequence[str]) -> bool:
    return all(w.strip() == "" for w in words)


def join_phrase(words: Sequence[str]) -> str:
    return " ".join(words)


__all__ = [
    "TOTAL_WORDS",
    "sanitize",
    "split_tokens",
    "first_token",
    "empty_slots",
    "distribute",
    "is_complete",
    "is_pristine",
    "join_phrase",
]
