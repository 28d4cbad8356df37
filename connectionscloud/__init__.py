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
ConnectionsCloud - authenticated client for Connections Cloud communities,
blogs, forums, wikis and profiles.

Process-wide settings used by the logger and the HTTP layer live here so
that they can be adjusted from the command line before any client is built.
"""

__version__ = '1.0.0'

# Transient globals NOT stored in config
LOGLEVEL = 1
CONFIG = {
    'LOGDIR': '',
    'LOGLIMIT': 500,
    'LOGFILES': 10,
    'LOGSIZE': 204800,
}

# Transients used by logger process
LOGLIST = []

# extended loglevel flags, combined with LOGLEVEL using bitwise and
log_requests = 16  # request and response tracing, including response bodies
