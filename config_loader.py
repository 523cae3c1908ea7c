"""Configuration loading utilities for the text search service."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from indexer import DocumentStatus, parse_status


@dataclass(frozen=True)
class DocumentConfig:
    """Document to ingest at startup."""

    id: int
    text: str
    status: DocumentStatus = DocumentStatus.ACTUAL
    ratings: tuple[int, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from YAML."""

    stop_words: tuple[str, ...] = ()
    documents: tuple[DocumentConfig, ...] = field(default_factory=tuple)
    max_result_document_count: int = 5
    relevance_epsilon: float = 1e-6
    host: str = "127.0.0.1"
    port: int = 8000


def load_config(config_path: Path) -> AppConfig:
    """Load and validate configuration from a YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as file:
        raw: dict[str, Any] = yaml.safe_load(file) or {}

    stop_words_raw = raw.get("stop_words", [])
    if isinstance(stop_words_raw, str):
        stop_words = tuple(word for word in stop_words_raw.split(" ") if word)
    elif isinstance(stop_words_raw, list):
        if not all(isinstance(word, str) for word in stop_words_raw):
            raise ValueError("Each entry in 'stop_words' must be a string")
        stop_words = tuple(word for word in stop_words_raw if word)
    else:
        raise ValueError("'stop_words' must be a string or a list of strings")

    max_count = raw.get("max_result_document_count", 5)
    epsilon = raw.get("relevance_epsilon", 1e-6)
    host = raw.get("host", "127.0.0.1")
    port = raw.get("port", 8000)

    if isinstance(max_count, bool) or not isinstance(max_count, int) or max_count < 1:
        raise ValueError("'max_result_document_count' must be a positive integer")
    if isinstance(epsilon, bool) or not isinstance(epsilon, (int, float)) or epsilon < 0:
        raise ValueError("'relevance_epsilon' must be a non-negative number")
    if not isinstance(host, str) or not host:
        raise ValueError("'host' must be a non-empty string")
    if not isinstance(port, int) or not (1 <= port <= 65535):
        raise ValueError("'port' must be an integer between 1 and 65535")

    documents_raw = raw.get("documents") or []
    if not isinstance(documents_raw, list):
        raise ValueError("'documents' must be a list")

    return AppConfig(
        stop_words=stop_words,
        documents=tuple(_parse_document(item) for item in documents_raw),
        max_result_document_count=max_count,
        relevance_epsilon=float(epsilon),
        host=host,
        port=port,
    )


def _parse_document(raw: Any) -> DocumentConfig:
    if not isinstance(raw, dict):
        raise ValueError("Each entry in 'documents' must be a mapping")

    document_id = raw.get("id")
    text = raw.get("text", "")
    status_raw = raw.get("status", DocumentStatus.ACTUAL.value)
    ratings = raw.get("ratings") or []

    if isinstance(document_id, bool) or not isinstance(document_id, int):
        raise ValueError("Document 'id' must be an integer")
    if not isinstance(text, str):
        raise ValueError(f"Document {document_id}: 'text' must be a string")
    if not isinstance(status_raw, str):
        raise ValueError(f"Document {document_id}: 'status' must be a string")
    if not isinstance(ratings, list) or not all(
        isinstance(rating, int) and not isinstance(rating, bool) for rating in ratings
    ):
        raise ValueError(f"Document {document_id}: 'ratings' must be a list of integers")

    return DocumentConfig(
        id=document_id,
        text=text,
        status=parse_status(status_raw),
        ratings=tuple(ratings),
    )
