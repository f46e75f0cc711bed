"""
End-to-end tests: raw request bytes through Http11Processor.
"""

import json
import logging
from unittest.mock import MagicMock

import pytest

from jwp import AppConfig, create_app
from jwp.controller import RequestMapping
from jwp.processor import Http11Processor


def parse_response(data: bytes):
    """Return (status code, ordered header list, body)."""
    head, _, body = data.partition(b"\r\n\r\n")
    lines = head.decode().split("\r\n")
    code = int(lines[0].split(" ")[1])
    headers = [tuple(line.split(": ", 1)) for line in lines[1:]]
    return code, headers, body


def header(headers, name):
    for key, value in headers:
        if key.lower() == name.lower():
            return value
    return None


def session_from(headers) -> str:
    cookie = header(headers, "Set-Cookie")
    assert cookie is not None and cookie.startswith("JSESSIONID=")
    return cookie.split("=", 1)[1]


class TestLoginFlow:
    """Login scenarios on the wire."""

    def test_post_login_success(self, app, raw_form):
        """Test that a good POST /login redirects and hands out a session."""
        code, headers, body = parse_response(
            app.process(raw_form("/login", "account=gugu&password=password"))
        )

        assert code == 302
        names = [name for name, _ in headers]
        assert names.index("Location") < names.index("Set-Cookie")
        assert header(headers, "Location") == "/index.html"
        assert session_from(headers)
        assert body == b""

    def test_post_login_wrong_password(self, app, raw_form):
        """Test that a bad password gets the 401 page and no cookie."""
        code, headers, body = parse_response(
            app.process(raw_form("/login", "account=gugu&password=wrong"))
        )

        assert code == 401
        assert header(headers, "Set-Cookie") is None
        assert b"401" in body

    def test_get_login_page(self, app, raw_get):
        """Test that GET /login shows the form."""
        code, headers, body = parse_response(app.process(raw_get("/login")))

        assert code == 200
        assert header(headers, "Content-Type") == "text/html; charset=utf-8"
        assert b'action="/login"' in body

    def test_get_login_with_query(self, app, raw_get):
        """Test login through the query string."""
        code, headers, _ = parse_response(
            app.process(raw_get("/login?account=gugu&password=password"))
        )

        assert code == 302
        assert session_from(headers)

    def test_get_login_with_empty_query(self, app, raw_get):
        """Test that a bare "?" is a login attempt without credentials."""
        code, _, _ = parse_response(app.process(raw_get("/login?")))

        assert code == 401

    def test_logged_in_session_skips_form(self, app, raw_form, raw_get):
        """Test that a live session cookie redirects without a new cookie."""
        _, headers, _ = parse_response(
            app.process(raw_form("/login", "account=gugu&password=password"))
        )
        session_id = session_from(headers)

        code, headers, _ = parse_response(
            app.process(raw_get("/login", cookie=f"JSESSIONID={session_id}"))
        )

        assert code == 302
        assert header(headers, "Location") == "/index.html"
        assert header(headers, "Set-Cookie") is None

    def test_session_in_second_cookie_header(self, app, raw_form):
        """Test that a session sent on its own Cookie line is still recognised."""
        _, headers, _ = parse_response(
            app.process(raw_form("/login", "account=gugu&password=password"))
        )
        session_id = session_from(headers)
        raw = (
            "GET /login HTTP/1.1\r\n"
            "Host: localhost:8080\r\n"
            "Cookie: theme=dark\r\n"
            f"Cookie: JSESSIONID={session_id}\r\n"
            "\r\n"
        ).encode()

        code, headers, _ = parse_response(app.process(raw))

        assert code == 302
        assert header(headers, "Location") == "/index.html"

    def test_negative_content_length_rejected(self, app):
        """Test that a negative Content-Length never reaches the login flow."""
        raw = (
            b"POST /login HTTP/1.1\r\n"
            b"Content-Type: application/x-www-form-urlencoded\r\n"
            b"Content-Length: -9\r\n"
            b"\r\n"
            b"account=gugu&password=password"
        )

        code, headers, _ = parse_response(app.process(raw))

        assert code == 400
        assert header(headers, "Set-Cookie") is None

    def test_unknown_session_shows_form(self, app, raw_get):
        """Test that a cookie for no session is treated as logged out."""
        code, _, _ = parse_response(app.process(raw_get("/login", cookie="JSESSIONID=forged")))

        assert code == 200

    def test_each_login_distinct_session(self, app, raw_form):
        """Test that logging in twice yields two session ids."""
        first = session_from(parse_response(
            app.process(raw_form("/login", "account=gugu&password=password")))[1])
        second = session_from(parse_response(
            app.process(raw_form("/login", "account=gugu&password=password")))[1])

        assert first != second


class TestRegisterAndLogout:
    """Registration and logout on the wire."""

    def test_register_then_login(self, app, raw_form):
        """Test that a registered account can log in."""
        code, headers, _ = parse_response(
            app.process(raw_form("/register", "account=newbie&password=pw&email=n%40x.com"))
        )
        assert code == 302
        assert session_from(headers)

        code, _, _ = parse_response(app.process(raw_form("/login", "account=newbie&password=pw")))
        assert code == 302

    def test_register_duplicate(self, app, raw_form):
        code, headers, _ = parse_response(
            app.process(raw_form("/register", "account=gugu&password=x&email=x"))
        )

        assert code == 401
        assert header(headers, "Set-Cookie") is None

    def test_register_page(self, app, raw_get):
        code, _, body = parse_response(app.process(raw_get("/register")))

        assert code == 200
        assert b'action="/register"' in body

    def test_logout_ends_session(self, app, raw_form, raw_get):
        """Test that after logout the cookie no longer counts."""
        session_id = session_from(parse_response(
            app.process(raw_form("/login", "account=gugu&password=password")))[1])
        cookie = f"JSESSIONID={session_id}"

        code, headers, _ = parse_response(app.process(raw_get("/logout", cookie=cookie)))
        assert code == 302
        assert header(headers, "Set-Cookie") == "JSESSIONID=; Max-Age=0"

        code, _, _ = parse_response(app.process(raw_get("/login", cookie=cookie)))
        assert code == 200


class TestOtherRoutes:
    """Home page, static resources and errors."""

    def test_home(self, app, raw_get):
        code, _, body = parse_response(app.process(raw_get("/")))

        assert code == 200
        assert body == b"Hello world!"

    def test_static_page(self, app, raw_get):
        code, _, body = parse_response(app.process(raw_get("/index.html")))

        assert code == 200
        assert b"<html" in body

    def test_missing_resource(self, app, raw_get):
        """Test that a missing file gets the 404 page."""
        code, _, body = parse_response(app.process(raw_get("/missing.css")))

        assert code == 404
        assert b"404" in body

    def test_unmapped_route(self, app, raw_form):
        code, _, _ = parse_response(app.process(raw_form("/nowhere", "a=b")))

        assert code == 404

    @pytest.mark.parametrize("raw, expected", [
        (b"GARBAGE\r\n\r\n", 400),
        (b"BREW /pot HTTP/1.1\r\n\r\n", 405),
        (b"GET / HTTP/3.0\r\n\r\n", 505),
        (b"GET /../etc/passwd HTTP/1.1\r\n\r\n", 400),
    ])
    def test_parse_errors(self, app, raw, expected):
        """Test that unparseable requests get a plain error and close."""
        code, headers, _ = parse_response(app.process(raw))

        assert code == expected
        assert header(headers, "Connection") == "close"

    def test_request_too_large(self, raw_form):
        app = create_app(AppConfig(max_request_size=1024))

        code, _, _ = parse_response(app.process(raw_form("/login", "x=" + "a" * 2000)))

        assert code == 413

    def test_controller_crash(self, raw_get):
        """Test that an unexpected exception becomes a 500."""
        mapping = MagicMock(spec=RequestMapping)
        mapping.dispatch.side_effect = RuntimeError("boom")
        app = Http11Processor(mapping)

        code, headers, body = parse_response(app.process(raw_get("/")))

        assert code == 500
        assert body == b"Internal Server Error"
        assert header(headers, "Connection") == "close"

    def test_missing_404_page_falls_back_to_text(self, tmp_path, raw_get):
        """Test a static directory without 404.html."""
        app = create_app(AppConfig(static_dir=str(tmp_path)))

        code, headers, body = parse_response(app.process(raw_get("/missing.html")))

        assert code == 404
        assert body == b"Not Found"
        assert header(headers, "Content-Type") == "text/plain; charset=utf-8"


class TestAccessLog:
    """Tests for the jwp.access logger."""

    def test_text_line(self, app, raw_get, caplog):
        with caplog.at_level(logging.INFO, logger="jwp.access"):
            app.process(raw_get("/"), ("10.0.0.1", 5000))

        records = [r for r in caplog.records if r.name == "jwp.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert '10.0.0.1 - - [' in records[0].getMessage()
        assert '"GET /" 200 12' in records[0].getMessage()

    def test_json_line(self, raw_form, caplog):
        app = create_app(AppConfig(log_format="json"))

        with caplog.at_level(logging.INFO, logger="jwp.access"):
            app.process(raw_form("/login", "account=gugu&password=wrong"), ("10.0.0.2", 5000))

        record = [r for r in caplog.records if r.name == "jwp.access"][0]
        entry = json.loads(record.getMessage())
        assert record.levelno == logging.WARNING
        assert entry["method"] == "POST"
        assert entry["path"] == "/login"
        assert entry["status_code"] == 401
        assert entry["client_ip"] == "10.0.0.2"

    def test_parse_error_logged(self, app, caplog):
        with caplog.at_level(logging.INFO, logger="jwp.access"):
            app.process(b"GARBAGE\r\n\r\n")

        record = [r for r in caplog.records if r.name == "jwp.access"][0]
        assert '"- -" 400' in record.getMessage()
