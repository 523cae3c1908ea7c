"""Parsing of raw search queries into plus and minus words."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection

from text_processing import MINUS_MARKER, is_valid_word, split_into_words


@dataclass(frozen=True)
class QueryWord:
    """Single parsed query token."""

    data: str
    is_minus: bool
    is_stop: bool


@dataclass
class Query:
    """Structured query: words that must match and words that exclude a document."""

    plus_words: set[str] = field(default_factory=set)
    minus_words: set[str] = field(default_factory=set)


def parse_query_word(text: str, stop_words: Collection[str]) -> QueryWord | None:
    """Parse one token. Returns None for malformed minus syntax or control characters."""
    if not is_valid_word(text):
        return None

    is_minus = False
    if text.startswith(MINUS_MARKER):
        text = text[len(MINUS_MARKER):]
        if not text or text.startswith(MINUS_MARKER):
            return None
        is_minus = True

    return QueryWord(data=text, is_minus=is_minus, is_stop=text in stop_words)


def parse_query(raw_query: str, stop_words: Collection[str]) -> Query | None:
    """Parse a raw query. Returns None when the query or any of its words is invalid."""
    if not is_valid_word(raw_query):
        return None

    query = Query()
    for word in split_into_words(raw_query):
        query_word = parse_query_word(word, stop_words)
        if query_word is None:
            return None
        if query_word.is_stop:
            continue

        if query_word.is_minus:
            query.minus_words.add(query_word.data)
        else:
            query.plus_words.add(query_word.data)

    return query
