"""
=============================================================================
REQUEST MAPPING
=============================================================================

Picks the controller for a request. First match wins, so register specific
controllers before general ones:

    GET  /login          → LoginController
    POST /register       → RegisterController
    GET  /logout         → LogoutController
    GET  /               → HomeController
    GET  /index.html     → ResourceController   (anything with an extension)
    POST /anything-else  → NotFoundController   (fallback)

=============================================================================
"""

from typing import Iterable, List, Optional
import logging

from ..http.request import HttpRequest
from ..http.response import HttpResponse
from ..http.status_codes import HTTPStatus
from .base import INDEX_PAGE, NOT_FOUND_PAGE, Authenticator, Controller
from .home import HomeController, ResourceController
from .login import LoginController
from .logout import LogoutController
from .register import RegisterController


logger = logging.getLogger(__name__)


class NotFoundController(Controller):
    """Fallback: 404 with the /404.html page."""

    def can_handle(self, request: HttpRequest) -> bool:
        return True

    def service(self, request: HttpRequest, response: HttpResponse) -> None:
        response.set_response_resource(HTTPStatus.NOT_FOUND, NOT_FOUND_PAGE)


class RequestMapping:
    """Ordered list of controllers plus a fallback."""

    def __init__(
        self,
        controllers: Iterable[Controller] = (),
        fallback: Optional[Controller] = None,
    ):
        self._controllers: List[Controller] = list(controllers)
        self.fallback = fallback or NotFoundController()

    def find(self, request: HttpRequest) -> Controller:
        for controller in self._controllers:
            if controller.can_handle(request):
                return controller
        logger.debug(f"No controller for {request.method} {request.path}")
        return self.fallback

    def dispatch(self, request: HttpRequest, response: HttpResponse) -> None:
        self.find(request).service(request, response)


def create_request_mapping(
    auth: Authenticator,
    index_page: str = INDEX_PAGE,
) -> RequestMapping:
    """Default wiring of the application's controllers."""
    return RequestMapping([
        LoginController(auth, index_page=index_page),
        RegisterController(auth, index_page=index_page),
        LogoutController(auth, index_page=index_page),
        HomeController(),
        ResourceController(),
    ])
