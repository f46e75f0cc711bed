"""
=============================================================================
HTTP/1.1 REQUEST PROCESSOR
=============================================================================

One request cycle, bytes in and bytes out. The transport that owns the
socket reads a complete request, calls `process()`, and writes the result:

    raw bytes
        │
        ▼
    ┌───────────────────────────────────────────────────────────────────┐
    │ 1. RequestParser.parse ───── HTTPParseError → 400/405/413/505     │
    │ 2. fresh HttpResponse                                             │
    │ 3. RequestMapping.dispatch ─ unexpected exception → 500           │
    │ 4. HttpResponse.to_bytes ─── missing resource → 404 /404.html     │
    │ 5. access log line                                                │
    └───────────────────────────────────────────────────────────────────┘
        │
        ▼
    response bytes

Refused logins never reach step 3's error path: the controllers turn them
into 401 responses themselves.

The processor keeps no per-request state and may be called from many
worker threads at once. The only shared mutable state is the session
registry and the account store, which lock internally.

=============================================================================
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple
import json
import logging
import time
import uuid

from .accounts import AccountRepository
from .config import AppConfig
from .controller import NOT_FOUND_PAGE, RequestMapping, create_request_mapping
from .http.request import HTTPParseError, HttpRequest, RequestParser
from .http.resources import ResourceLoader, ResourceNotFoundError
from .http.response import HttpResponse
from .http.status_codes import HTTPStatus
from .service import AuthService
from .session import SessionManager


logger = logging.getLogger(__name__)
access_logger = logging.getLogger("jwp.access")

PLAIN_TEXT = "text/plain; charset=utf-8"


@dataclass
class RequestLog:
    """One access log entry."""

    request_id: str
    method: str
    path: str
    client_ip: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "method": self.method,
            "path": self.path,
            "client_ip": self.client_ip,
            "status_code": self.status_code,
            "content_length": self.content_length,
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }

    def to_text(self) -> str:
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class Http11Processor:
    """
    Runs one request through parsing, dispatch and serialization.

    Args:
        mapping: Controller lookup.
        loader: Static resource loader. Defaults to config.static_dir.
        config: Application configuration.
    """

    def __init__(
        self,
        mapping: RequestMapping,
        loader: Optional[ResourceLoader] = None,
        config: Optional[AppConfig] = None,
    ):
        self.config = config or AppConfig()
        self.mapping = mapping
        self.loader = loader or ResourceLoader(self.config.static_dir)
        self._parser = RequestParser(max_request_size=self.config.max_request_size)

    def process(self, raw: bytes, client_address: Tuple[str, int] = ("", 0)) -> bytes:
        """Handle one complete raw request and return the raw response."""
        start = time.perf_counter()
        request_id = uuid.uuid4().hex[:8]

        try:
            request = self._parser.parse(raw, client_address)
        except HTTPParseError as e:
            logger.warning(f"[{request_id}] Bad request: {e}")
            response = self._error_response(HTTPStatus(e.status_code), str(e))
            sent, data = self._render(response)
            self._log_access(request_id, None, client_address, sent, data, start)
            return data

        response = HttpResponse()
        try:
            self.mapping.dispatch(request, response)
        except Exception as e:
            logger.exception(f"[{request_id}] Controller error: {e}")
            response = self._error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Internal Server Error"
            )

        sent, data = self._render(response)
        self._log_access(request_id, request, client_address, sent, data, start)
        return data

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def _render(self, response: HttpResponse) -> Tuple[HttpResponse, bytes]:
        """
        Serialize, replacing a response whose resource is missing by a 404.

        Returns the response that was actually serialized, and its bytes.
        """
        try:
            return response, response.to_bytes(self.loader, self.config.server_name)
        except ResourceNotFoundError as e:
            logger.info(f"{e}; answering 404")

        not_found = HttpResponse()
        not_found.set_response_resource(HTTPStatus.NOT_FOUND, NOT_FOUND_PAGE)
        try:
            return not_found, not_found.to_bytes(self.loader, self.config.server_name)
        except ResourceNotFoundError:
            plain = self._error_response(HTTPStatus.NOT_FOUND, "Not Found")
            return plain, plain.to_bytes(self.loader, self.config.server_name)

    def _error_response(self, status: HTTPStatus, message: str) -> HttpResponse:
        response = HttpResponse()
        response.set_response_body(status, message, PLAIN_TEXT)
        response.set_response_header("Connection", "close")
        return response

    # =========================================================================
    # ACCESS LOG
    # =========================================================================

    def _log_access(
        self,
        request_id: str,
        request: Optional[HttpRequest],
        client_address: Tuple[str, int],
        response: HttpResponse,
        data: bytes,
        start: float,
    ) -> None:
        body_length = len(data) - (data.find(b"\r\n\r\n") + 4)
        entry = RequestLog(
            request_id=request_id,
            method=str(request.method) if request else "-",
            path=request.path if request else "-",
            client_ip=client_address[0],
            status_code=int(response.status),
            content_length=body_length,
            duration_ms=(time.perf_counter() - start) * 1000,
            timestamp=datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        message = json.dumps(entry.to_dict()) if self.config.log_format == "json" else entry.to_text()
        if response.status.is_server_error:
            access_logger.error(message)
        elif response.status.is_client_error:
            access_logger.warning(message)
        else:
            access_logger.info(message)


def create_app(config: Optional[AppConfig] = None) -> Http11Processor:
    """
    Wire the whole engine together.

        SessionManager ─┐
        AccountRepository ─► AuthService ─► RequestMapping ─► Http11Processor
                                                       ResourceLoader ─┘
    """
    config = config or AppConfig()
    config.validate()

    accounts = AccountRepository.with_defaults() if config.seed_default_account else AccountRepository()
    auth = AuthService(SessionManager(), accounts)
    mapping = create_request_mapping(
        auth,
        index_page=config.index_page,
    )
    return Http11Processor(mapping, ResourceLoader(config.static_dir), config)
