"""
Unit tests for LoginController with a mocked auth layer.
"""

from unittest.mock import call

from jwp.controller import LoginController
from jwp.exceptions import AuthenticationError
from jwp.http.status_codes import HTTPStatus
from jwp.service import AuthResult


SESSION_ID = "sessionId"


class TestLoginControllerRouting:
    """Tests for can_handle."""

    def test_handles_get_and_post(self, mock_auth, mock_request):
        controller = LoginController(mock_auth)

        assert controller.can_handle(mock_request("GET", "/login"))
        assert controller.can_handle(mock_request("POST", "/login"))

    def test_ignores_other_paths(self, mock_auth, mock_request):
        controller = LoginController(mock_auth)

        assert not controller.can_handle(mock_request("GET", "/register"))
        assert not controller.can_handle(mock_request("DELETE", "/login"))


class TestLoginControllerPost:
    """Tests for POST /login."""

    def test_success_redirects_then_sets_cookie(self, mock_auth, mock_request, mock_response):
        """Test that the redirect is recorded before the cookie."""
        mock_auth.try_login.return_value = AuthResult.success(SESSION_ID)
        request = mock_request(
            "POST", "/login", form={"account": "gugu", "password": "password"}
        )

        LoginController(mock_auth).service(request, mock_response)

        mock_auth.try_login.assert_called_once_with("gugu", "password")
        assert mock_response.mock_calls == [
            call.set_response_redirect(HTTPStatus.FOUND, "/index.html"),
            call.set_response_header("Set-Cookie", "JSESSIONID=sessionId"),
        ]

    def test_failure_answers_401(self, mock_auth, mock_request, mock_response):
        """Test that refused credentials produce the 401 page and no cookie."""
        mock_auth.try_login.return_value = AuthResult.failure(AuthenticationError())
        request = mock_request(
            "POST", "/login", form={"account": "gugu", "password": "wrong"}
        )

        LoginController(mock_auth).service(request, mock_response)

        assert mock_response.mock_calls == [
            call.set_response_resource(HTTPStatus.UNAUTHORIZED, "/401.html"),
        ]

    def test_missing_field_passed_as_none(self, mock_auth, mock_request, mock_response):
        """Test that an absent password reaches the auth layer as None."""
        mock_auth.try_login.return_value = AuthResult.failure(AuthenticationError())
        request = mock_request("POST", "/login", form={"account": "gugu"})

        LoginController(mock_auth).service(request, mock_response)

        mock_auth.try_login.assert_called_once_with("gugu", None)
        assert mock_response.mock_calls == [
            call.set_response_resource(HTTPStatus.UNAUTHORIZED, "/401.html"),
        ]

    def test_post_ignores_query_and_cookie(self, mock_auth, mock_request, mock_response):
        """Test that POST always authenticates from the form."""
        mock_auth.try_login.return_value = AuthResult.success(SESSION_ID)
        request = mock_request(
            "POST", "/login",
            query_string=True,
            session_id="existing",
            form={"account": "gugu", "password": "password"},
            query={"account": "other", "password": "other"},
        )

        LoginController(mock_auth).service(request, mock_response)

        mock_auth.try_login.assert_called_once_with("gugu", "password")
        mock_auth.is_logged_in.assert_not_called()


class TestLoginControllerGet:
    """Tests for GET /login."""

    def test_query_string_logs_in(self, mock_auth, mock_request, mock_response):
        """Test login with credentials in the query string."""
        mock_auth.try_login.return_value = AuthResult.success(SESSION_ID)
        request = mock_request(
            "GET", "/login",
            query_string=True,
            query={"account": "gugu", "password": "password"},
        )

        LoginController(mock_auth).service(request, mock_response)

        mock_auth.try_login.assert_called_once_with("gugu", "password")
        assert mock_response.mock_calls == [
            call.set_response_redirect(HTTPStatus.FOUND, "/index.html"),
            call.set_response_header("Set-Cookie", "JSESSIONID=sessionId"),
        ]

    def test_query_string_wins_over_session(self, mock_auth, mock_request, mock_response):
        """Test that a query string is checked before the session cookie."""
        mock_auth.try_login.return_value = AuthResult.failure(AuthenticationError())
        request = mock_request(
            "GET", "/login",
            query_string=True,
            session_id=SESSION_ID,
            query={"account": "gugu", "password": "wrong"},
        )

        LoginController(mock_auth).service(request, mock_response)

        mock_auth.is_logged_in.assert_not_called()
        assert mock_response.mock_calls == [
            call.set_response_resource(HTTPStatus.UNAUTHORIZED, "/401.html"),
        ]

    def test_logged_in_session_redirects(self, mock_auth, mock_request, mock_response):
        """Test that a live session is sent to the index without a new cookie."""
        mock_auth.is_logged_in.return_value = True
        request = mock_request("GET", "/login", session_id=SESSION_ID)

        LoginController(mock_auth).service(request, mock_response)

        mock_auth.is_logged_in.assert_called_once_with(SESSION_ID)
        mock_auth.try_login.assert_not_called()
        assert mock_response.mock_calls == [
            call.set_response_redirect(HTTPStatus.FOUND, "/index.html"),
        ]

    def test_stale_session_shows_login_page(self, mock_auth, mock_request, mock_response):
        """Test that an unknown session id gets the login page."""
        mock_auth.is_logged_in.return_value = False
        request = mock_request("GET", "/login", session_id="stale")

        LoginController(mock_auth).service(request, mock_response)

        assert mock_response.mock_calls == [
            call.set_response_resource(HTTPStatus.OK, "/login.html"),
        ]

    def test_plain_get_shows_login_page(self, mock_auth, mock_request, mock_response):
        """Test GET /login with neither query string nor cookie."""
        request = mock_request("GET", "/login")

        LoginController(mock_auth).service(request, mock_response)

        mock_auth.is_logged_in.assert_not_called()
        mock_auth.try_login.assert_not_called()
        assert mock_response.mock_calls == [
            call.set_response_resource(HTTPStatus.OK, "/login.html"),
        ]

    def test_custom_index_page(self, mock_auth, mock_request, mock_response):
        """Test that the redirect target is configurable."""
        mock_auth.is_logged_in.return_value = True
        request = mock_request("GET", "/login", session_id=SESSION_ID)

        LoginController(mock_auth, index_page="/home.html").service(request, mock_response)

        mock_response.set_response_redirect.assert_called_once_with(HTTPStatus.FOUND, "/home.html")
