"""
=============================================================================
LOGIN CONTROLLER
=============================================================================

Handles GET and POST on /login. Stateless: every decision comes from the
request and the Authenticator.

=============================================================================
DISPATCH
=============================================================================

    POST /login
        form account/password ──► try_login
            ok      → 302 /index.html, then Set-Cookie: JSESSIONID=<id>
            refused → 401 /401.html

    GET /login
        ├── has "?" in the target
        │       query account/password ──► try_login (same outcomes as POST)
        │
        ├── JSESSIONID cookie that is logged in
        │       → 302 /index.html (no new cookie)
        │
        └── otherwise
                → 200 /login.html

A JSESSIONID that resolves to no session is treated as "not logged in".

=============================================================================
"""

from typing import Optional
import logging

from ..http.request import HttpMethod, HttpRequest
from ..http.response import HttpResponse
from ..http.status_codes import HTTPStatus
from .base import INDEX_PAGE, LOGIN_PAGE, Authenticator, Controller, apply_auth_result


logger = logging.getLogger(__name__)


class LoginController(Controller):

    PATH = "/login"

    def __init__(
        self,
        auth: Authenticator,
        index_page: str = INDEX_PAGE,
    ):
        self.auth = auth
        self.index_page = index_page

    def can_handle(self, request: HttpRequest) -> bool:
        return (
            request.consists_of(HttpMethod.GET, self.PATH)
            or request.consists_of(HttpMethod.POST, self.PATH)
        )

    def service(self, request: HttpRequest, response: HttpResponse) -> None:
        if request.consists_of(HttpMethod.POST, self.PATH):
            self._login(
                request.form_parameter("account"),
                request.form_parameter("password"),
                response,
            )
            return

        if request.consists_of(HttpMethod.GET, self.PATH):
            self._do_get(request, response)

    def _do_get(self, request: HttpRequest, response: HttpResponse) -> None:
        if request.has_query_string():
            self._login(
                request.query_parameter("account"),
                request.query_parameter("password"),
                response,
            )
            return

        if request.has_session_id() and self.auth.is_logged_in(request.session_id()):
            logger.debug("Already logged in, redirecting to index")
            response.set_response_redirect(HTTPStatus.FOUND, self.index_page)
            return

        response.set_response_resource(HTTPStatus.OK, LOGIN_PAGE)

    def _login(
        self,
        account: Optional[str],
        password: Optional[str],
        response: HttpResponse,
    ) -> None:
        result = self.auth.try_login(account, password)
        apply_auth_result(result, response, self.index_page)
