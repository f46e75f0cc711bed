"""
Logout controller: GET /logout ends the session and sends the browser home.
"""

from ..http.cookies import SESSION_COOKIE
from ..http.request import HttpMethod, HttpRequest
from ..http.response import HttpResponse
from ..http.status_codes import HTTPStatus
from .base import INDEX_PAGE, Authenticator, Controller


class LogoutController(Controller):

    PATH = "/logout"

    def __init__(
        self,
        auth: Authenticator,
        index_page: str = INDEX_PAGE,
    ):
        self.auth = auth
        self.index_page = index_page

    def can_handle(self, request: HttpRequest) -> bool:
        return request.consists_of(HttpMethod.GET, self.PATH)

    def service(self, request: HttpRequest, response: HttpResponse) -> None:
        response.set_response_redirect(HTTPStatus.FOUND, self.index_page)
        if request.has_session_id():
            self.auth.logout(request.session_id())
            # Max-Age=0 tells the browser to drop the cookie
            response.add_cookie(SESSION_COOKIE, "", max_age=0)
