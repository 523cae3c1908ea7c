"""Entry point for the text search HTTP service."""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from config_loader import load_config
from indexer import parse_status
from query_parser import parse_query
from search_engine import SearchServer, create_search_server

LOGGER = logging.getLogger("search_service")

API_PREFIX = "/api/v1"


class SearchRequestHandler(BaseHTTPRequestHandler):
    """HTTP handler exposing health, search, match and document listing endpoints."""

    engine: SearchServer
    logger: logging.Logger

    def do_GET(self) -> None:
        parsed = urlparse(self.path)
        path = parsed.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        params = parse_qs(parsed.query)

        routes = {
            "/health": self._handle_health,
            "/search": self._handle_search,
            "/match": self._handle_match,
            "/documents": self._handle_documents,
        }
        handler = routes.get(path)
        if handler is None:
            self._send_json(
                HTTPStatus.NOT_FOUND,
                {"error": "Not found", "message": "Use GET /search?q=<text>"},
            )
            return

        try:
            handler(params)
        except Exception as exc:
            self.logger.exception("Request failed: %s", self.path)
            self._send_json(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": "internal server error", "details": str(exc)},
            )

    def _handle_health(self, _params: dict[str, list[str]]) -> None:
        self._send_json(
            HTTPStatus.OK,
            {"status": "ok", "documents": self.engine.get_document_count()},
        )

    def _handle_search(self, params: dict[str, list[str]]) -> None:
        query = (params.get("q") or [""])[0]
        if not query.strip():
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Missing query parameter 'q'"})
            return

        status_raw = (params.get("status") or [""])[0].strip()
        status = None
        if status_raw:
            try:
                status = parse_status(status_raw)
            except ValueError:
                self._send_json(
                    HTTPStatus.BAD_REQUEST,
                    {"error": "Invalid query parameter 'status'"},
                )
                return

        results = self.engine.find_top_documents(query, status)
        if results is None:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Invalid query"})
            return

        items = [
            {"id": item.id, "relevance": item.relevance, "rating": item.rating}
            for item in results
        ]
        self._send_json(
            HTTPStatus.OK,
            {"query": query, "total": len(items), "items": items},
        )

    def _handle_match(self, params: dict[str, list[str]]) -> None:
        query = (params.get("q") or [""])[0]
        id_raw = (params.get("id") or [""])[0].strip()
        if not query.strip():
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Missing query parameter 'q'"})
            return

        try:
            document_id = int(id_raw)
        except ValueError:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Invalid query parameter 'id'"})
            return

        if parse_query(query, self.engine.stop_words) is None:
            self._send_json(HTTPStatus.BAD_REQUEST, {"error": "Invalid query"})
            return

        matched = self.engine.match_document(query, document_id)
        if matched is None:
            self._send_json(
                HTTPStatus.NOT_FOUND,
                {"error": f"Document {document_id} not found"},
            )
            return

        words, status = matched
        self._send_json(
            HTTPStatus.OK,
            {"query": query, "id": document_id, "words": words, "status": status.value},
        )

    def _handle_documents(self, _params: dict[str, list[str]]) -> None:
        total = self.engine.get_document_count()
        ids = [self.engine.get_document_id(index) for index in range(total)]
        self._send_json(HTTPStatus.OK, {"total": total, "ids": ids})

    def _send_json(self, status: HTTPStatus, payload: dict[str, object]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        self.send_response(status.value)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:
        self.logger.info("%s - %s", self.client_address[0], format % args)


def main() -> None:
    """Load configuration, ingest configured documents, and start HTTP server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    base_dir = Path(__file__).resolve().parent
    config = load_config(base_dir / "config.yml")

    SearchRequestHandler.engine = create_search_server(config, LOGGER)
    SearchRequestHandler.logger = LOGGER

    server_address = (config.host, config.port)
    httpd = HTTPServer(server_address, SearchRequestHandler)

    LOGGER.info("Search service started on http://%s:%d", config.host, config.port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        LOGGER.info("Shutdown signal received")
    finally:
        httpd.server_close()
        LOGGER.info("Server stopped")


if __name__ == "__main__":
    main()
