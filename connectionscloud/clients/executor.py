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
Request execution and response classification.

Every resource read is a single GET on the authenticated session. Resources
the account cannot see (401) or that are not installed (404) come back as an
empty outcome carrying the status, not as an exception.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import connectionscloud
from connectionscloud import logger
from connectionscloud.atom import AtomFormatter, FormatError
from connectionscloud.formatter import makeUnicode, plural
from connectionscloud.utils.url_builder import URLBuilder

NOT_ACCESSIBLE_CODES = (401, 404)
COLLECTION_KEY = 'items'


@dataclass
class RequestOutcome:
    """Result of one request.

    Formatted requests fill items, raw requests fill raw. An inaccessible
    resource has no items, its status and the server's reason in error.
    """
    items: List[Any] = field(default_factory=list)
    status: Optional[int] = None
    error: Optional[str] = None
    raw: Optional[bytes] = None

    @classmethod
    def not_accessible(cls, status, reason):
        return cls(items=[], status=status, error=reason)

    @property
    def accessible(self) -> bool:
        return self.status not in NOT_ACCESSIBLE_CODES

    @property
    def first(self):
        return self.items[0] if self.items else None


class RequestExecutor:
    """Issues GET requests for a SessionManager and classifies the responses."""

    def __init__(self, session, formatter=None):
        """
        Args:
            session: Logged in SessionManager
            formatter: Object with format(content, key) returning a dict
                (default: AtomFormatter)
        """
        self.session = session
        self.formatter = formatter if formatter is not None else AtomFormatter()

    def execute(self, path, formatted=True):
        """
        GET base URL + path, following redirects.

        Args:
            path: Resource path including its query string
            formatted: False to return the body untouched in outcome.raw

        Returns:
            RequestOutcome

        Raises:
            TransportError: If no response was received
            FormatError: If a formatted response cannot be converted
        """
        url = URLBuilder.append_path(self.session.base_url, path)
        count = len(self.session.cookies)

        logger.info('executing %s' % url)
        logger.debug('sending %d cookie%s' % (count, plural(count)))

        response = self.session.http.get(url, allow_redirects=True)

        logger.debug('%s responded with %s %s' % (path, response.status_code, response.reason))
        if connectionscloud.LOGLEVEL & connectionscloud.log_requests:
            logger.debug('%s responded with content body %s' % (path, makeUnicode(response.content)))

        if response.status_code in NOT_ACCESSIBLE_CODES:
            logger.warn('%s is not accessible: %s %s' % (path, response.status_code, response.reason))
            return RequestOutcome.not_accessible(response.status_code, response.reason)

        if not formatted:
            return RequestOutcome(raw=response.content, status=response.status_code)

        try:
            data = self.formatter.format(response.content, COLLECTION_KEY)
        except FormatError as e:
            if e.status_code is None:
                e.status_code = response.status_code
            logger.error('%s responded with %s, unable to format: %s' % (path, response.status_code, str(e)))
            raise

        return RequestOutcome(items=data[COLLECTION_KEY], status=response.status_code)
