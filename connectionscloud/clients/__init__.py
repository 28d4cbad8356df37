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
HTTP infrastructure for ConnectionsCloud.

This package provides the session and request handling:
- http_wrapper.py: Consistent HTTP request handling and exceptions
- session.py: Login handshake and periodic re-login
- executor.py: Request execution and response classification
- content.py: Wiki page content download
"""

from connectionscloud.clients.http_wrapper import (
    HTTPClientWrapper, HTTPClientError, TransportError, HTTPTimeoutError,
    HTTPConnectionError, HTTPResponseError, AuthError
)
from connectionscloud.clients.session import SessionManager

__all__ = ['HTTPClientWrapper', 'SessionManager', 'HTTPClientError', 'TransportError',
           'HTTPTimeoutError', 'HTTPConnectionError', 'HTTPResponseError', 'AuthError']
