"""
=============================================================================
CONTROLLERS
=============================================================================

    base.py      Controller ABC, Authenticator protocol, page names
    login.py     GET/POST /login
    register.py  GET/POST /register
    logout.py    GET /logout
    home.py      GET / and static resources
    mapping.py   RequestMapping: request → controller

=============================================================================
"""

from .base import (
    INDEX_PAGE,
    LOGIN_PAGE,
    NOT_FOUND_PAGE,
    REGISTER_PAGE,
    UNAUTHORIZED_PAGE,
    Authenticator,
    Controller,
    apply_auth_result,
)
from .home import HomeController, ResourceController
from .login import LoginController
from .logout import LogoutController
from .mapping import NotFoundController, RequestMapping, create_request_mapping
from .register import RegisterController

__all__ = [
    "Controller",
    "Authenticator",
    "apply_auth_result",
    "LoginController",
    "RegisterController",
    "LogoutController",
    "HomeController",
    "ResourceController",
    "NotFoundController",
    "RequestMapping",
    "create_request_mapping",
    "INDEX_PAGE",
    "LOGIN_PAGE",
    "REGISTER_PAGE",
    "UNAUTHORIZED_PAGE",
    "NOT_FOUND_PAGE",
]
