"""Демонстрация работы поисковой логики без запуска HTTP-сервера."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from config_loader import load_config
from indexer import DocumentStatus
from search_engine import create_search_server

LOGGER = logging.getLogger("search_service.demo")


def run_demo(config_path: Path) -> list[dict[str, object]]:
    """Индексирует документы из конфигурации и выполняет демонстрационные запросы."""
    config = load_config(config_path)
    engine = create_search_server(config, LOGGER)

    demo_queries = [
        ("пушистый пёс", None),
        ("пушистый -хвост", None),
        ("ухоженный скворец", DocumentStatus.BANNED),
        ("--пушистый", None),
    ]

    payloads: list[dict[str, object]] = []
    for query, status in demo_queries:
        results = engine.find_top_documents(query, status)
        if results is None:
            payload: dict[str, object] = {"query": query, "error": "Invalid query"}
        else:
            payload = {
                "query": query,
                "results": [
                    {"document_id": item.id, "relevance": item.relevance, "rating": item.rating}
                    for item in results
                ],
            }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        payloads.append(payload)
    return payloads


def main() -> None:
    """Точка входа демонстрационного режима."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_demo(Path(__file__).resolve().parent / "config.yml")


if __name__ == "__main__":
    main()
