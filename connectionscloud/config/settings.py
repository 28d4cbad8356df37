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
Type-safe configuration settings for ConnectionsCloud.

This module provides dataclass-based configuration for the server account,
the HTTP layer and logging.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict


class ConfigError(Exception):
    """Exception raised for configuration errors."""
    pass


@dataclass
class ServerSettings:
    """Connections Cloud account settings."""
    server: str = ''
    user: str = ''
    password: str = ''

    # Application passwords log in through basic auth plus an app id header
    app_password: bool = False
    app_id: str = ''

    def validate(self) -> None:
        """Validate server settings."""
        if not self.server:
            raise ConfigError("A Connections Cloud server is required")
        if not self.user:
            raise ConfigError("A Connections Cloud user is required")
        if self.app_password and not self.app_id:
            raise ConfigError("An application id is required when using an application password")


@dataclass
class HttpSettings:
    """HTTP client settings."""
    # 0 means wait for the server indefinitely
    timeout: int = 0
    ssl_verify: bool = True
    relogin_hours: int = 12
    content_workers: int = 8

    def validate(self) -> None:
        """Validate HTTP settings."""
        if self.timeout < 0:
            raise ConfigError("HTTP timeout cannot be negative")
        if self.relogin_hours < 1:
            raise ConfigError("Re-login interval must be at least 1 hour")
        if self.content_workers < 1:
            raise ConfigError("At least one content download worker is required")


@dataclass
class GeneralSettings:
    """Logging settings."""
    log_dir: str = ''
    log_limit: int = 500
    log_files: int = 10
    log_size: int = 204800
    log_level: int = 1


@dataclass
class Configuration:
    """Main configuration container.

    This class aggregates all configuration sections and provides
    methods for validating and accessing configuration.
    """
    server: ServerSettings = field(default_factory=ServerSettings)
    http: HttpSettings = field(default_factory=HttpSettings)
    general: GeneralSettings = field(default_factory=GeneralSettings)

    def validate(self) -> None:
        """Validate all configuration settings.

        Raises:
            ConfigError: If any setting is invalid
        """
        self.server.validate()
        self.http.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a nested dictionary."""
        return asdict(self)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by its flat key name.

        Args:
            key: The configuration key (e.g., 'HTTP_TIMEOUT', 'LOGDIR')
            default: Default value if key not found

        Returns:
            The configuration value
        """
        key_mapping = self._get_key_mapping()
        if key.upper() in key_mapping:
            section, attr = key_mapping[key.upper()]
            section_obj = getattr(self, section, None)
            if section_obj:
                return getattr(section_obj, attr, default)
        return default

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by its flat key name.

        Raises:
            ConfigError: If key is not valid
        """
        key_mapping = self._get_key_mapping()
        if key.upper() in key_mapping:
            section, attr = key_mapping[key.upper()]
            setattr(getattr(self, section), attr, value)
        else:
            raise ConfigError("Unknown configuration key: %s" % key)

    def logging_dict(self) -> Dict[str, Any]:
        """Return the settings the logger reads from connectionscloud.CONFIG."""
        return {
            'LOGDIR': self.general.log_dir,
            'LOGLIMIT': self.general.log_limit,
            'LOGFILES': self.general.log_files,
            'LOGSIZE': self.general.log_size,
        }

    def _get_key_mapping(self) -> Dict[str, tuple]:
        """Get mapping from flat keys to (section, attribute)."""
        return {
            'SERVER': ('server', 'server'),
            'USER': ('server', 'user'),
            'PASSWORD': ('server', 'password'),
            'APP_PASSWORD': ('server', 'app_password'),
            'APP_ID': ('server', 'app_id'),

            'HTTP_TIMEOUT': ('http', 'timeout'),
            'SSL_VERIFY': ('http', 'ssl_verify'),
            'RELOGIN_HOURS': ('http', 'relogin_hours'),
            'CONTENT_WORKERS': ('http', 'content_workers'),

            'LOGDIR': ('general', 'log_dir'),
            'LOGLIMIT': ('general', 'log_limit'),
            'LOGFILES': ('general', 'log_files'),
            'LOGSIZE': ('general', 'log_size'),
            'LOGLEVEL': ('general', 'log_level'),
        }
