"""
Registration controller.

    GET  /register  → 200 /register.html
    POST /register  form account/password/email ──► try_register
                        ok      → 302 /index.html, then Set-Cookie
                        refused → 401 /401.html

A duplicate account is refused exactly like a failed login.
"""

from ..http.request import HttpMethod, HttpRequest
from ..http.response import HttpResponse
from ..http.status_codes import HTTPStatus
from .base import INDEX_PAGE, REGISTER_PAGE, Authenticator, Controller, apply_auth_result


class RegisterController(Controller):

    PATH = "/register"

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
            result = self.auth.try_register(
                request.form_parameter("account"),
                request.form_parameter("password"),
                request.form_parameter("email"),
            )
            apply_auth_result(result, response, self.index_page)
            return

        if request.consists_of(HttpMethod.GET, self.PATH):
            response.set_response_resource(HTTPStatus.OK, REGISTER_PAGE)
