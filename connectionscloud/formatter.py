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

import datetime
import unicodedata

SECRET_MASK = '********'


def check_int(var, default, positive=True):
    """
    Return an int representation of var, or default if not an int.

    If positive is True, negative values are treated as invalid.
    """
    try:
        res = int(var)
        if positive and res < 0:
            return default
        return res
    except (ValueError, TypeError):
        return default


def plural(var):
    """
    Convenience function for log messages, if var = 1 return ''
    if var is anything else return 's'
    so book -> books, seeder -> seeders  etc
    """
    if check_int(var, 0) == 1:
        return ''
    return 's'


def now():
    dtnow = datetime.datetime.now()
    return dtnow.strftime("%Y-%m-%d %H:%M:%S")


def makeUnicode(data):
    """Decode bytes from the server, leave anything else as a string."""
    if data is None:
        return ''
    if isinstance(data, bytes):
        return data.decode('utf-8', errors='replace')
    return str(data)


def unaccented(str_or_unicode):
    if not str_or_unicode:
        return ''
    cleaned = unicodedata.normalize('NFKD', makeUnicode(str_or_unicode))
    return ''.join(c for c in cleaned if not unicodedata.combining(c))


def mask_secret(secret):
    """
    Return a fixed-length placeholder for a credential.

    The placeholder never depends on the secret, so its length is not leaked
    to the log either. An empty secret is reported as empty.
    """
    if not secret:
        return ''
    return SECRET_MASK
