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
Configuration module for ConnectionsCloud.

This module provides type-safe configuration management.
"""

from connectionscloud.config.settings import (
    Configuration,
    ServerSettings,
    HttpSettings,
    GeneralSettings,
    ConfigError,
)
from connectionscloud.config.loader import ConfigLoader

__all__ = [
    'Configuration',
    'ServerSettings',
    'HttpSettings',
    'GeneralSettings',
    'ConfigLoader',
    'ConfigError',
]
