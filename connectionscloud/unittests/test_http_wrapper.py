#  This file is part of ConnectionsCloud.
#  ConnectionsCloud is free software: you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation, either version 3 of the License, or
#  (at your option) any later version.
#  ConnectionsCloud is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#  You should have received a copy of the GNU General Public License
#  along with ConnectionsCloud.  If not, see <http://www.gnu.org/licenses/>.

"""Unit tests for HTTP client wrapper."""

import pytest
from unittest.mock import Mock
import requests as requests_lib

import connectionscloud
from connectionscloud.clients.http_wrapper import (
    HTTPClientWrapper, HTTPClientError, TransportError, HTTPTimeoutError,
    HTTPConnectionError, HTTPResponseError, AuthError
)


@pytest.fixture
def setup_http_config():
    """Silence request tracing for tests."""
    original_loglevel = connectionscloud.LOGLEVEL
    connectionscloud.LOGLEVEL = 0
    yield
    connectionscloud.LOGLEVEL = original_loglevel


@pytest.fixture
def mock_session():
    session = Mock()
    session.cookies = requests_lib.cookies.RequestsCookieJar()
    return session


class TestHTTPClientWrapper:
    """Tests for HTTPClientWrapper class."""

    def test_initialization(self, setup_http_config, mock_session):
        """Should initialize with client name and timeout."""
        wrapper = HTTPClientWrapper('TestClient', session=mock_session, timeout=10)
        assert wrapper.client_name == 'TestClient'
        assert wrapper.timeout == 10
        assert wrapper.verify_ssl is True
        assert wrapper.session is mock_session

    def test_initialization_defaults(self, setup_http_config):
        """Should create its own session and wait indefinitely by default."""
        wrapper = HTTPClientWrapper('TestClient')
        assert isinstance(wrapper.session, requests_lib.Session)
        assert wrapper.timeout is None
        assert wrapper.cookies is wrapper.session.cookies

    def test_zero_timeout_means_none(self, setup_http_config, mock_session):
        wrapper = HTTPClientWrapper('TestClient', session=mock_session, timeout=0)
        assert wrapper.timeout is None

    def test_get_success(self, setup_http_config, mock_session):
        """GET request should return response."""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_session.request.return_value = mock_response

        wrapper = HTTPClientWrapper('TestClient', session=mock_session, timeout=10)
        response = wrapper.get('http://localhost/api')

        assert response == mock_response
        mock_session.request.assert_called_once()
        args, kwargs = mock_session.request.call_args
        assert args == ('GET', 'http://localhost/api')
        assert kwargs['timeout'] == 10
        assert kwargs['verify'] is True

    def test_post_sends_form_data(self, setup_http_config, mock_session):
        """POST request should pass the form data through."""
        mock_response = Mock()
        mock_response.status_code = 302
        mock_session.request.return_value = mock_response

        wrapper = HTTPClientWrapper('TestClient', session=mock_session)
        response = wrapper.post('http://localhost/login', data={'key': 'value'}, allow_redirects=False)

        assert response == mock_response
        args, kwargs = mock_session.request.call_args
        assert args[0] == 'POST'
        assert kwargs['data'] == {'key': 'value'}
        assert kwargs['allow_redirects'] is False

    def test_get_timeout_raises_error(self, setup_http_config, mock_session):
        """GET timeout should raise HTTPTimeoutError."""
        mock_session.request.side_effect = requests_lib.exceptions.Timeout()

        wrapper = HTTPClientWrapper('TestClient', session=mock_session, timeout=10)
        with pytest.raises(HTTPTimeoutError) as exc_info:
            wrapper.get('http://localhost/api')

        assert 'Timeout' in str(exc_info.value)
        assert 'TestClient' in str(exc_info.value)
        assert isinstance(exc_info.value, TransportError)

    def test_get_connection_error_raises_error(self, setup_http_config, mock_session):
        """GET connection error should raise HTTPConnectionError."""
        cause = requests_lib.exceptions.ConnectionError('Connection refused')
        mock_session.request.side_effect = cause

        wrapper = HTTPClientWrapper('TestClient', session=mock_session, timeout=10)
        with pytest.raises(HTTPConnectionError) as exc_info:
            wrapper.get('http://localhost/api')

        assert 'Unable to connect' in str(exc_info.value)
        assert 'Connection refused' in str(exc_info.value)
        assert exc_info.value.cause is cause
        assert exc_info.value.items == []
        assert exc_info.value.status_code is None

    def test_other_request_errors_raise_transport_error(self, setup_http_config, mock_session):
        failed = Mock()
        failed.status_code = 502
        mock_session.request.side_effect = requests_lib.exceptions.TooManyRedirects('loop', response=failed)

        wrapper = HTTPClientWrapper('TestClient', session=mock_session)
        with pytest.raises(TransportError) as exc_info:
            wrapper.get('http://localhost/api')

        assert exc_info.value.status_code == 502

    def test_close_closes_session(self, setup_http_config, mock_session):
        wrapper = HTTPClientWrapper('TestClient', session=mock_session)
        wrapper.close()
        mock_session.close.assert_called_once()

    def test_check_response_ok_success(self, setup_http_config, mock_session):
        """check_response_ok should return True for 200."""
        wrapper = HTTPClientWrapper('TestClient', session=mock_session)
        mock_response = Mock()
        mock_response.status_code = 200

        assert wrapper.check_response_ok(mock_response) is True

    def test_check_response_ok_failure(self, setup_http_config, mock_session):
        """check_response_ok should raise HTTPResponseError for unexpected codes."""
        wrapper = HTTPClientWrapper('TestClient', session=mock_session)
        mock_response = Mock()
        mock_response.status_code = 401
        mock_response.reason = 'Unauthorized'
        mock_response.text = 'Auth failed'

        with pytest.raises(HTTPResponseError) as exc_info:
            wrapper.check_response_ok(mock_response)

        assert exc_info.value.status_code == 401
        assert exc_info.value.response_body == 'Auth failed'

    def test_check_response_ok_custom_codes_and_error(self, setup_http_config, mock_session):
        """check_response_ok should accept custom codes and error class."""
        wrapper = HTTPClientWrapper('TestClient', session=mock_session)
        mock_response = Mock()
        mock_response.status_code = 302

        assert wrapper.check_response_ok(mock_response, expected_codes=[200, 302]) is True

        mock_response.status_code = 500
        mock_response.reason = 'Server Error'
        mock_response.text = ''
        with pytest.raises(AuthError):
            wrapper.check_response_ok(mock_response, expected_codes=[200, 302], error_class=AuthError)


class TestErrorHierarchy:

    def test_transport_errors_share_base(self):
        assert issubclass(HTTPTimeoutError, TransportError)
        assert issubclass(HTTPConnectionError, TransportError)
        assert issubclass(TransportError, HTTPClientError)
        assert issubclass(AuthError, HTTPClientError)

    def test_error_keeps_status_and_body(self):
        error = AuthError('rejected', 403, 'Forbidden body')
        assert error.status_code == 403
        assert error.response_body == 'Forbidden body'
        assert error.items == []


class TestExtractErrorMessage:
    """Tests for _extract_error_message static method."""

    def test_extracts_reason_attribute(self):
        """Should extract error from 'reason' attribute."""

        class ErrorWithReason:
            reason = "Connection refused"

        msg = HTTPClientWrapper._extract_error_message(ErrorWithReason())
        assert msg == "Connection refused"

    def test_extracts_strerror_attribute(self):
        """Should extract error from 'strerror' attribute."""

        class ErrorWithStrerror:
            strerror = "No such file"

        msg = HTTPClientWrapper._extract_error_message(ErrorWithStrerror())
        assert msg == "No such file"

    def test_falls_back_to_str(self):
        """Should fall back to str() if no specific attribute."""
        error = Exception("Generic error")
        msg = HTTPClientWrapper._extract_error_message(error)
        assert msg == "Generic error"
