"""
pytest configuration and fixtures.
"""

from unittest.mock import MagicMock
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jwp import AppConfig, create_app
from jwp.accounts import AccountRepository
from jwp.http import HttpMethod, HttpRequest, HttpResponse
from jwp.service import AuthService
from jwp.session import SessionManager


def form_request(path: str, body: str, cookie: str = None) -> bytes:
    """Raw urlencoded POST request."""
    encoded = body.encode()
    head = (
        f"POST {path} HTTP/1.1\r\n"
        "Host: localhost:8080\r\n"
        "Content-Type: application/x-www-form-urlencoded\r\n"
        f"Content-Length: {len(encoded)}\r\n"
    )
    if cookie:
        head += f"Cookie: {cookie}\r\n"
    return (head + "\r\n").encode() + encoded


def get_request(target: str, cookie: str = None) -> bytes:
    """Raw GET request."""
    head = f"GET {target} HTTP/1.1\r\nHost: localhost:8080\r\n"
    if cookie:
        head += f"Cookie: {cookie}\r\n"
    return (head + "\r\n").encode()


@pytest.fixture
def sample_get_request() -> bytes:
    """GET /login with a query string and a session cookie."""
    return (
        b"GET /login?account=gugu&password=password HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Cookie: JSESSIONID=abc-123; theme=dark\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """POST /login with an urlencoded form body."""
    return form_request("/login", "account=gugu&password=password")


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def accounts() -> AccountRepository:
    """Account store seeded with gugu / password."""
    return AccountRepository.with_defaults()


@pytest.fixture
def auth_service(session_manager: SessionManager, accounts: AccountRepository) -> AuthService:
    return AuthService(session_manager, accounts)


@pytest.fixture
def app():
    """Fully wired processor on the bundled pages."""
    return create_app(AppConfig())


@pytest.fixture
def mock_auth():
    """AuthService double; no call succeeds unless configured."""
    return MagicMock(spec=AuthService)


@pytest.fixture
def mock_response():
    return MagicMock(spec=HttpResponse)


def make_mock_request(
    method: str,
    path: str,
    query_string: bool = False,
    session_id: str = None,
    form: dict = None,
    query: dict = None,
):
    """
    HttpRequest double that answers like a parsed request would.

    Every predicate must be configured; an unconfigured mock method returns
    a truthy MagicMock.
    """
    request = MagicMock(spec=HttpRequest)
    form = form or {}
    query = query or {}

    request.method = HttpMethod(method)
    request.path = path
    request.consists_of.side_effect = lambda m, p: (m, p) == (HttpMethod(method), path)
    request.has_query_string.return_value = query_string
    request.has_session_id.return_value = session_id is not None
    request.session_id.return_value = session_id
    request.form_parameter.side_effect = form.get
    request.query_parameter.side_effect = query.get
    return request


@pytest.fixture
def mock_request():
    """Factory for configured HttpRequest mocks (see make_mock_request)."""
    return make_mock_request


@pytest.fixture
def raw_get():
    """Factory for raw GET request bytes."""
    return get_request


@pytest.fixture
def raw_form():
    """Factory for raw urlencoded POST request bytes."""
    return form_request
