"""TF-IDF search server with minus words and document filters."""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Union

from config_loader import AppConfig
from indexer import (
    INVALID_DOCUMENT_ID,
    DocumentData,
    DocumentStatus,
    DocumentStore,
    InvertedIndex,
    compute_average_rating,
)
from query_parser import Query, parse_query
from text_processing import is_valid_word, remove_stop_words, split_into_words

LOGGER = logging.getLogger("search_service.engine")

MAX_RESULT_DOCUMENT_COUNT = 5
RELEVANCE_EPSILON = 1e-6

DocumentPredicate = Callable[[int, DocumentStatus, int], bool]
DocumentFilter = Union[DocumentStatus, DocumentPredicate, None]


@dataclass(frozen=True)
class Document:
    """Single ranked search result."""

    id: int
    relevance: float
    rating: int


def status_predicate(status: DocumentStatus) -> DocumentPredicate:
    """Predicate accepting only documents with the given status."""

    def predicate(document_id: int, document_status: DocumentStatus, rating: int) -> bool:
        return document_status == status

    return predicate


class SearchServer:
    """Indexes documents and ranks them against free-text queries by TF-IDF."""

    INVALID_DOCUMENT_ID = INVALID_DOCUMENT_ID

    def __init__(
        self,
        stop_words: str | Iterable[str] = "",
        *,
        max_result_document_count: int = MAX_RESULT_DOCUMENT_COUNT,
        relevance_epsilon: float = RELEVANCE_EPSILON,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_result_document_count < 1:
            raise ValueError("max_result_document_count must be positive")
        if relevance_epsilon < 0:
            raise ValueError("relevance_epsilon must be non-negative")

        if isinstance(stop_words, str):
            stop_words = split_into_words(stop_words)
        self._stop_words: set[str] = {word for word in stop_words if word}
        self._max_result_document_count = max_result_document_count
        self._relevance_epsilon = relevance_epsilon
        self._logger = logger or LOGGER
        self._documents = DocumentStore()
        self._index = InvertedIndex()

    @property
    def stop_words(self) -> frozenset[str]:
        return frozenset(self._stop_words)

    def set_stop_words(self, text: str) -> None:
        """Add space-separated stop words; already indexed documents are not touched."""
        self._stop_words.update(split_into_words(text))

    def add_document(
        self,
        document_id: int,
        document: str,
        status: DocumentStatus,
        ratings: Sequence[int],
    ) -> bool:
        """Index a document. Returns False and changes nothing when it is rejected."""
        if document_id < 0:
            self._logger.warning("Rejected document %d: negative id", document_id)
            return False
        if document_id in self._documents:
            self._logger.warning("Rejected document %d: duplicate id", document_id)
            return False
        if not is_valid_word(document):
            self._logger.warning("Rejected document %d: invalid characters", document_id)
            return False

        words = remove_stop_words(split_into_words(document), self._stop_words)
        self._index.add_document(document_id, words)
        self._documents.add(
            document_id,
            DocumentData(rating=compute_average_rating(ratings), status=status),
        )

        self._logger.debug("Indexed document %d (%d words)", document_id, len(words))
        return True

    def get_document_count(self) -> int:
        return len(self._documents)

    def get_document_id(self, index: int) -> int:
        """Id at the given position in ascending id order, or INVALID_DOCUMENT_ID."""
        return self._documents.id_at(index)

    def find_top_documents(
        self,
        raw_query: str,
        document_filter: DocumentFilter = None,
    ) -> list[Document] | None:
        """Rank documents for a query.

        ``document_filter`` is a status to match exactly, a predicate called with
        ``(document_id, status, rating)``, or None for actual documents only.
        Returns None for an invalid query and a possibly empty list otherwise.
        """
        query = parse_query(raw_query, self._stop_words)
        if query is None:
            return None

        if document_filter is None:
            predicate = status_predicate(DocumentStatus.ACTUAL)
        elif isinstance(document_filter, DocumentStatus):
            predicate = status_predicate(document_filter)
        else:
            predicate = document_filter

        matches = self._find_all_documents(query, predicate)
        matches.sort(key=functools.cmp_to_key(self._compare_documents))
        return matches[: self._max_result_document_count]

    def match_document(
        self,
        raw_query: str,
        document_id: int,
    ) -> tuple[list[str], DocumentStatus] | None:
        """Plus words of the query found in a document, with the document status.

        The word list is empty when a minus word occurs in the document. Returns
        None for an invalid query or an unknown document.
        """
        query = parse_query(raw_query, self._stop_words)
        if query is None:
            return None

        data = self._documents.get(document_id)
        if data is None:
            self._logger.debug("Match requested for unknown document %d", document_id)
            return None

        for word in query.minus_words:
            if document_id in self._index.postings(word):
                return [], data.status

        matched_words = [
            word for word in sorted(query.plus_words)
            if document_id in self._index.postings(word)
        ]
        return matched_words, data.status

    def _inverse_document_freq(self, word: str) -> float:
        return math.log(self.get_document_count() / self._index.document_frequency(word))

    def _find_all_documents(self, query: Query, predicate: DocumentPredicate) -> list[Document]:
        document_to_relevance: dict[int, float] = {}

        for word in query.plus_words:
            if word not in self._index:
                continue

            inverse_document_freq = self._inverse_document_freq(word)
            for document_id, term_freq in self._index.postings(word).items():
                data = self._documents.get(document_id)
                if predicate(document_id, data.status, data.rating):
                    document_to_relevance[document_id] = (
                        document_to_relevance.get(document_id, 0.0)
                        + term_freq * inverse_document_freq
                    )

        for word in query.minus_words:
            for document_id in self._index.postings(word):
                document_to_relevance.pop(document_id, None)

        return [
            Document(
                id=document_id,
                relevance=document_to_relevance[document_id],
                rating=self._documents.get(document_id).rating,
            )
            for document_id in sorted(document_to_relevance)
        ]

    def _compare_documents(self, lhs: Document, rhs: Document) -> int:
        if abs(lhs.relevance - rhs.relevance) < self._relevance_epsilon:
            return rhs.rating - lhs.rating
        return -1 if lhs.relevance > rhs.relevance else 1


def create_search_server(config: AppConfig, logger: logging.Logger) -> SearchServer:
    """Build a search server from configuration and ingest its documents."""
    server = SearchServer(
        config.stop_words,
        max_result_document_count=config.max_result_document_count,
        relevance_epsilon=config.relevance_epsilon,
        logger=logger,
    )

    added = 0
    for document in config.documents:
        if server.add_document(document.id, document.text, document.status, document.ratings):
            added += 1

    logger.info(
        "Indexed %d of %d configured documents",
        added,
        len(config.documents),
    )
    return server
