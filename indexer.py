"""Document store and inverted index kept in memory."""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence

INVALID_DOCUMENT_ID = -1


class DocumentStatus(enum.Enum):
    ACTUAL = "Actual"
    IRRELEVANT = "Irrelevant"
    BANNED = "Banned"
    REMOVED = "Removed"


def parse_status(value: str) -> DocumentStatus:
    """Resolve a status from its value ("Actual") or name ("ACTUAL"), ignoring case."""
    normalized = value.strip().lower()
    for status in DocumentStatus:
        if normalized in (status.value.lower(), status.name.lower()):
            return status
    raise ValueError(f"Unknown document status: {value!r}")


@dataclass(frozen=True)
class DocumentData:
    """Stored metadata of a single indexed document."""

    rating: int
    status: DocumentStatus


def compute_average_rating(ratings: Sequence[int]) -> int:
    """Integer mean of ratings truncated toward zero, 0 for no ratings."""
    if not ratings:
        return 0

    rating_sum = sum(ratings)
    average = abs(rating_sum) // len(ratings)
    return average if rating_sum >= 0 else -average


class DocumentStore:
    """Document metadata keyed by id, iterated in ascending id order."""

    def __init__(self) -> None:
        self._documents: dict[int, DocumentData] = {}
        self._ordered_ids: list[int] = []

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    def __iter__(self) -> Iterator[int]:
        return iter(self._ordered_ids)

    def add(self, document_id: int, data: DocumentData) -> None:
        if document_id in self._documents:
            raise KeyError(f"Document {document_id} already stored")
        self._documents[document_id] = data
        bisect.insort(self._ordered_ids, document_id)

    def get(self, document_id: int) -> DocumentData | None:
        return self._documents.get(document_id)

    def id_at(self, index: int) -> int:
        if index < 0 or index >= len(self._ordered_ids):
            return INVALID_DOCUMENT_ID
        return self._ordered_ids[index]


class InvertedIndex:
    """Maps each word to the documents containing it and its term frequency there."""

    def __init__(self) -> None:
        self._word_to_document_freqs: dict[str, dict[int, float]] = {}

    def __contains__(self, word: object) -> bool:
        return word in self._word_to_document_freqs

    def add_document(self, document_id: int, words: Sequence[str]) -> None:
        """Merge the term frequencies of a non-empty word list for one document."""
        if not words:
            return

        inv_word_count = 1 / len(words)
        for word in words:
            document_freqs = self._word_to_document_freqs.setdefault(word, {})
            document_freqs[document_id] = document_freqs.get(document_id, 0.0) + inv_word_count

    def postings(self, word: str) -> Mapping[int, float]:
        """Document id to term frequency for a word; empty for unknown words."""
        return self._word_to_document_freqs.get(word, {})

    def document_frequency(self, word: str) -> int:
        return len(self._word_to_document_freqs.get(word, ()))

    def term_frequencies(self, document_id: int) -> dict[str, float]:
        return {
            word: document_freqs[document_id]
            for word, document_freqs in self._word_to_document_freqs.items()
            if document_id in document_freqs
        }
