"""
=============================================================================
CONTROLLER CONTRACT
=============================================================================

A controller is bound to one path and turns a request into mutations of a
response. It returns nothing; everything it decides is recorded on the
HttpResponse.

    RequestMapping                 Controller
    ──────────────                 ──────────
    for c in controllers:
        if c.can_handle(request) ─► True
            c.service(request, response)
                                   ├─► auth.try_login(...)
                                   └─► response.set_response_redirect(...)

Controllers depend on the Authenticator protocol, not on AuthService, so a
test can hand in a fake or a mock.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Optional, Protocol

from ..http.cookies import session_cookie
from ..http.request import HttpRequest
from ..http.response import SET_COOKIE, HttpResponse
from ..http.status_codes import HTTPStatus
from ..service.auth import AuthResult


# Pages the login flows point browsers at
INDEX_PAGE = "/index.html"
LOGIN_PAGE = "/login.html"
REGISTER_PAGE = "/register.html"
UNAUTHORIZED_PAGE = "/401.html"
NOT_FOUND_PAGE = "/404.html"


class Authenticator(Protocol):
    """What the controllers need from the auth layer."""

    def try_login(self, account: Optional[str], password: Optional[str]) -> AuthResult:
        ...

    def try_register(
        self,
        account: Optional[str],
        password: Optional[str],
        email: Optional[str],
    ) -> AuthResult:
        ...

    def is_logged_in(self, session_id: Optional[str]) -> bool:
        ...

    def logout(self, session_id: Optional[str]) -> bool:
        ...


class Controller(ABC):
    """Base class for request controllers."""

    @abstractmethod
    def can_handle(self, request: HttpRequest) -> bool:
        """True if this controller is responsible for the request."""

    @abstractmethod
    def service(self, request: HttpRequest, response: HttpResponse) -> None:
        """Inspect the request and mutate the response."""


def apply_auth_result(
    result: AuthResult,
    response: HttpResponse,
    index_page: str = INDEX_PAGE,
) -> None:
    """
    Turn a login/registration outcome into a response.

        ok      → 302 Location: index_page, THEN Set-Cookie: JSESSIONID=<id>
        refused → 401 with the /401.html page

    The redirect must be recorded before the cookie header.
    """
    if result.ok:
        response.set_response_redirect(HTTPStatus.FOUND, index_page)
        response.set_response_header(SET_COOKIE, session_cookie(result.session_id))
    else:
        response.set_response_resource(HTTPStatus.UNAUTHORIZED, UNAUTHORIZED_PAGE)
