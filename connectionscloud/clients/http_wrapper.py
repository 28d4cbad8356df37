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

"""
HTTP client wrapper for consistent request handling.

Wraps a single requests.Session, which doubles as the cookie store of an
authenticated Connections Cloud session, and turns transport failures into
the package's exception hierarchy.
"""

import requests

import connectionscloud
from connectionscloud import logger


class HTTPClientError(Exception):
    """
    Base exception for HTTP client errors.

    Carries the server status code and response body where one was received,
    and an empty item list so that failed calls have the same shape as
    unavailable resources.
    """

    def __init__(self, message, status_code=None, response_body=None, cause=None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.cause = cause
        self.items = []


class TransportError(HTTPClientError):
    """The request failed before a usable response was received."""
    pass


class HTTPTimeoutError(TransportError):
    """Request timed out."""
    pass


class HTTPConnectionError(TransportError):
    """Failed to connect to server."""
    pass


class HTTPResponseError(HTTPClientError):
    """Server returned an unexpected status."""
    pass


class AuthError(HTTPResponseError):
    """Server rejected the login."""
    pass


class HTTPClientWrapper:
    """
    Wrapper for HTTP requests with consistent error handling and logging.

    All requests go through one requests.Session so that cookies set by a
    login are replayed on every following request to the same server.
    """

    def __init__(self, client_name, session=None, timeout=None, verify_ssl=True):
        """
        Initialize the HTTP client wrapper.

        Args:
            client_name: Name of the client for logging
            session: Optional requests.Session to use (default: a new one)
            timeout: Request timeout in seconds, None or 0 to wait indefinitely
            verify_ssl: Whether to verify SSL certificates (default: True)
        """
        self.client_name = client_name
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout or None
        self.verify_ssl = verify_ssl

    @property
    def cookies(self):
        """The cookie jar shared by every request of this wrapper."""
        return self.session.cookies

    def get(self, url, params=None, headers=None, auth=None, **kwargs):
        """
        Perform a GET request.

        Args:
            url: The URL to request
            params: Optional query parameters dict
            headers: Optional headers dict
            auth: Optional authentication tuple or requests auth object
            **kwargs: Additional arguments passed to requests

        Returns:
            requests.Response object

        Raises:
            HTTPTimeoutError: If the request times out
            HTTPConnectionError: If connection fails
            TransportError: For any other transport failure
        """
        return self._request('GET', url, params=params, headers=headers, auth=auth, **kwargs)

    def post(self, url, data=None, headers=None, auth=None, **kwargs):
        """
        Perform a POST request.

        Args:
            url: The URL to request
            data: Optional form data dict or string
            headers: Optional headers dict
            auth: Optional authentication tuple or requests auth object
            **kwargs: Additional arguments passed to requests

        Returns:
            requests.Response object

        Raises:
            HTTPTimeoutError: If the request times out
            HTTPConnectionError: If connection fails
            TransportError: For any other transport failure
        """
        return self._request('POST', url, data=data, headers=headers, auth=auth, **kwargs)

    def _request(self, method, url, **kwargs):
        """
        Internal method to perform HTTP requests with error handling.

        Args:
            method: HTTP method ('GET', 'POST', etc.)
            url: The URL to request
            **kwargs: Arguments passed to requests

        Returns:
            requests.Response object
        """
        kwargs.setdefault('timeout', self.timeout)
        kwargs.setdefault('verify', self.verify_ssl)

        if connectionscloud.LOGLEVEL & connectionscloud.log_requests:
            logger.debug('Request %s %s for %s' % (method, url, self.client_name))

        try:
            response = self.session.request(method, url, **kwargs)

            if connectionscloud.LOGLEVEL & connectionscloud.log_requests:
                logger.debug('%s response status: %s' % (self.client_name, response.status_code))

            return response

        except requests.exceptions.Timeout as e:
            msg = "Timeout connecting to %s with URL: %s" % (self.client_name, url)
            logger.error(msg)
            raise HTTPTimeoutError(msg, self._extract_status(e), cause=e)

        except requests.exceptions.ConnectionError as e:
            msg = "Unable to connect to %s: %s" % (self.client_name, self._extract_error_message(e))
            logger.error(msg)
            raise HTTPConnectionError(msg, self._extract_status(e), cause=e)

        except requests.exceptions.RequestException as e:
            msg = "Error communicating with %s: %s" % (self.client_name, self._extract_error_message(e))
            logger.error(msg)
            raise TransportError(msg, self._extract_status(e), cause=e)

    def close(self):
        """Release pooled connections."""
        self.session.close()

    @staticmethod
    def _extract_status(exception):
        response = getattr(exception, 'response', None)
        return getattr(response, 'status_code', None)

    @staticmethod
    def _extract_error_message(exception):
        """
        Extract a readable error message from an exception.

        Handles various exception types that may have different attributes
        for storing the error message.

        Args:
            exception: The exception to extract message from

        Returns:
            String error message
        """
        if getattr(exception, 'reason', None):
            return str(exception.reason)
        elif getattr(exception, 'strerror', None):
            return str(exception.strerror)
        else:
            return str(exception)

    def check_response_ok(self, response, expected_codes=None, error_class=HTTPResponseError):
        """
        Check if a response indicates success.

        Args:
            response: requests.Response object
            expected_codes: Acceptable status codes (default: [200])
            error_class: HTTPResponseError subclass to raise

        Returns:
            True if response is successful

        Raises:
            HTTPResponseError: If response indicates an error
        """
        if expected_codes is None:
            expected_codes = [200]

        if response.status_code not in expected_codes:
            msg = "%s returned error %d: %s" % (
                self.client_name, response.status_code, response.reason
            )
            logger.error(msg)
            raise error_class(msg, response.status_code, response.text)

        return True
