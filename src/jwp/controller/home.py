"""
Controllers that need no authentication: the home page and static files.
"""

from ..http.request import HttpMethod, HttpRequest
from ..http.response import HttpResponse
from ..http.status_codes import HTTPStatus
from .base import Controller


class HomeController(Controller):
    """GET / → inline "Hello world!"."""

    PATH = "/"
    GREETING = "Hello world!"

    def can_handle(self, request: HttpRequest) -> bool:
        return request.consists_of(HttpMethod.GET, self.PATH)

    def service(self, request: HttpRequest, response: HttpResponse) -> None:
        response.set_response_body(HTTPStatus.OK, self.GREETING)


class ResourceController(Controller):
    """
    GET of anything that looks like a file (/index.html, /css/styles.css).

    Only names the resource; whether it exists is found out when the
    response is serialized.
    """

    def can_handle(self, request: HttpRequest) -> bool:
        if request.method != HttpMethod.GET:
            return False
        last_segment = request.path.rsplit("/", 1)[-1]
        return "." in last_segment

    def service(self, request: HttpRequest, response: HttpResponse) -> None:
        response.set_response_resource(HTTPStatus.OK, request.path)
