"""Word splitting, validation and stop-word filtering."""

from __future__ import annotations

from typing import Collection, Iterable

MINUS_MARKER = "-"


def split_into_words(text: str) -> list[str]:
    """Split text on spaces, dropping empty words."""
    return [word for word in text.split(" ") if word]


def is_valid_word(text: str) -> bool:
    """Reject a bare minus marker and any control character below a space."""
    if text == MINUS_MARKER:
        return False
    return not any(ord(char) < 32 for char in text)


def remove_stop_words(words: Iterable[str], stop_words: Collection[str]) -> list[str]:
    return [word for word in words if word not in stop_words]
