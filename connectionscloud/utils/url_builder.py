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
URL building and query string utilities.

Consolidates the URL construction used by the session and resource accessors.
"""

DEFAULT_LANG = 'en_us'


class URLBuilder:
    """Utility class for building and normalizing URLs."""

    @staticmethod
    def normalize_host(hostname, use_https=True):
        """
        Normalize hostname to proper URL format.

        Handles:
        - Adding https/http protocol if missing
        - Removing duplicate protocols
        - Stripping trailing slashes

        Args:
            hostname: The hostname or URL to normalize
            use_https: If True, use https:// protocol (default: True)

        Returns:
            Normalized URL string, or empty string if hostname is empty
        """
        if not hostname:
            return ''

        hostname = str(hostname).strip()

        # An explicit protocol always wins
        if hostname.startswith('https://'):
            use_https = True
            hostname = hostname[8:]
        elif hostname.startswith('http://'):
            use_https = False
            hostname = hostname[7:]

        hostname = hostname.rstrip('/')

        protocol = 'https' if use_https else 'http'
        return '%s://%s' % (protocol, hostname)

    @staticmethod
    def append_path(base_url, path):
        """
        Append a resource path, including any query string, to a base URL.

        Args:
            base_url: The base URL
            path: Path to append, with or without a leading slash

        Returns:
            Combined URL string
        """
        if not base_url:
            return ''
        if not path:
            return base_url

        return '%s/%s' % (base_url.rstrip('/'), path.lstrip('/'))


def _query_value(value):
    # the server expects lowercase booleans
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def build_query(options=None):
    """
    Serialize an options mapping into a query string.

    The server returns nothing unless a language is given, so 'lang' is
    always present, defaulting to en_us. Keys keep their insertion order and
    values are written as supplied. The caller's mapping is not modified.

    Args:
        options: Optional mapping of query option name to value

    Returns:
        Query string without a leading '?' or trailing '&'
    """
    if options is None:
        return 'lang=%s' % DEFAULT_LANG

    params = dict(options)
    if 'lang' not in params:
        params['lang'] = DEFAULT_LANG

    return '&'.join('%s=%s' % (key, _query_value(value)) for key, value in params.items())
