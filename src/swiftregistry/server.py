"""
HTTP adapter for the registry service.

Serves the JSON API:

    GET    /v1/swift-codes/{swift-code}
    GET    /v1/swift-codes/country/{countryISO2code}
    POST   /v1/swift-codes
    DELETE /v1/swift-codes/{swift-code}
"""

import json
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import unquote, urlsplit

from swiftregistry.errors import Failure
from swiftregistry.service import SwiftCodeService
from swiftregistry.utils.logging import get_logger

log = get_logger(__name__)

API_PREFIX = "/v1/swift-codes"


class RegistryHTTPServer(ThreadingHTTPServer):
    """Threading HTTP server carrying the registry service."""

    daemon_threads = True

    def __init__(self, address: tuple[str, int], service: SwiftCodeService) -> None:
        super().__init__(address, SwiftCodeHandler)
        self.service = service


class SwiftCodeHandler(BaseHTTPRequestHandler):
    """HTTP request handler mapping routes onto SwiftCodeService calls."""

    server: RegistryHTTPServer

    @property
    def service(self) -> SwiftCodeService:
        return self.server.service

    def _route(self) -> tuple[str, ...] | None:
        """Path segments after the API prefix, or None for foreign paths."""
        path = urlsplit(self.path).path.rstrip("/")
        if path != API_PREFIX and not path.startswith(API_PREFIX + "/"):
            return None
        rest = path[len(API_PREFIX) :].strip("/")
        return tuple(unquote(part) for part in rest.split("/")) if rest else ()

    def do_GET(self) -> None:
        """Handle GET requests."""
        route = self._route()
        if route is not None and len(route) == 1:
            log.info("Received request for SWIFT code details", swift_code=route[0])
            self._respond(self.service.get_details(route[0]))
        elif route is not None and len(route) == 2 and route[0] == "country":
            log.info("Received request for country SWIFT codes", country_iso2=route[1])
            self._respond(self.service.get_by_country(route[1]))
        else:
            self._not_found()

    def do_POST(self) -> None:
        """Handle POST requests."""
        if self._route() != ():
            self._not_found()
            return

        content_type = self.headers.get("Content-Type", "")
        if not content_type.lower().startswith("application/json"):
            self._send_json(
                HTTPStatus.UNSUPPORTED_MEDIA_TYPE, {"message": "Unsupported Media Type."}
            )
            return

        payload = self._read_json()
        if payload is None:
            self._send_json(
                HTTPStatus.BAD_REQUEST, {"message": "Request body is missing or malformed."}
            )
            return

        log.info("Received request to add SWIFT code", swift_code=_swift_code_of(payload))
        self._respond(self.service.add(payload), success=HTTPStatus.CREATED)

    def do_DELETE(self) -> None:
        """Handle DELETE requests."""
        route = self._route()
        if route is None or len(route) != 1:
            self._not_found()
            return
        log.info("Received request to delete SWIFT code", swift_code=route[0])
        self._respond(self.service.delete(route[0]))

    def _read_json(self) -> Any | None:
        """Parsed request body, or None when absent or not valid JSON."""
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            return None
        if length <= 0:
            return None
        body = self.rfile.read(length)
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None

    def _respond(self, outcome: Any, success: HTTPStatus = HTTPStatus.OK) -> None:
        """Send a view as JSON, or a failure with its mapped status."""
        if isinstance(outcome, Failure):
            self._send_json(outcome.kind.http_status, outcome.to_dict())
        else:
            self._send_json(success, outcome.to_dict())

    def _not_found(self) -> None:
        path = urlsplit(self.path).path
        log.warning("No handler found", method=self.command, path=path)
        self._send_json(
            HTTPStatus.NOT_FOUND,
            {"message": f"The requested resource path '{path}' could not be found on this server."},
        )

    def _send_json(self, status: HTTPStatus, body: dict[str, Any]) -> None:
        data = json.dumps(body).encode("utf-8")
        try:
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self.wfile.write(data)
        except (ConnectionAbortedError, ConnectionResetError, BrokenPipeError):
            # Client already disconnected
            pass

    def log_message(self, format: str, *args: Any) -> None:
        """Override to use our logger."""
        _ = format, args
        log.debug("HTTP request", method=self.command, path=self.path)


def _swift_code_of(payload: Any) -> Any:
    return payload.get("swiftCode") if isinstance(payload, dict) else None


def create_server(
    service: SwiftCodeService, host: str = "127.0.0.1", port: int = 8080
) -> RegistryHTTPServer:
    """
    Bind the HTTP server without starting it.

    Args:
        service: Registry service to expose.
        host: Interface to bind.
        port: TCP port; 0 picks a free one.

    Returns:
        Bound server; call serve_forever() to start handling requests.
    """
    return RegistryHTTPServer((host, port), service)


def start_server(service: SwiftCodeService, host: str = "127.0.0.1", port: int = 8080) -> None:
    """
    Serve the registry API until interrupted.

    Args:
        service: Registry service to expose.
        host: Interface to bind.
        port: TCP port.
    """
    server = create_server(service, host, port)
    log.info("Starting registry server", url=f"http://{host}:{server.server_port}{API_PREFIX}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("Shutting down registry server")
    finally:
        server.server_close()
