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
Configuration loader for ConnectionsCloud.

This module provides functionality to load and save configuration
from INI files, and to overlay account details from the environment.
"""

import configparser
import os
from typing import Any, Dict, Mapping, Optional

from connectionscloud.config.settings import Configuration, ConfigError


class ConfigLoader:
    """Loads and saves configuration from INI files.

    This class provides methods to:
    - Load configuration from a file into a Configuration object
    - Overlay values supplied through environment variables
    - Save configuration back to a file
    """

    SECTIONS = ['Connections', 'HTTP', 'General']

    # Environment variable -> flat configuration key
    ENVIRONMENT = {
        'CONNECTIONS_SERVER': 'SERVER',
        'CONNECTIONS_USER': 'USER',
        'CONNECTIONS_PASSWORD': 'PASSWORD',
        'CONNECTIONS_APP_PASSWORD': 'APP_PASSWORD',
        'APP_ID': 'APP_ID',
    }

    def __init__(self, config_file: Optional[str] = None):
        """Initialize the config loader.

        Args:
            config_file: Path to the configuration file
        """
        self.config_file = config_file
        self._parser = configparser.RawConfigParser()

    def load(self, config_file: Optional[str] = None) -> Configuration:
        """Load configuration from a file.

        A missing file is not an error, defaults are returned instead.

        Args:
            config_file: Path to config file (overrides constructor path)

        Returns:
            Configuration object with loaded values

        Raises:
            ConfigError: If no file was given or the file cannot be parsed
        """
        file_path = config_file or self.config_file
        if not file_path:
            raise ConfigError("No configuration file specified")

        config = Configuration()

        if os.path.isfile(file_path):
            try:
                self._parser.read(file_path)
            except configparser.Error as e:
                raise ConfigError("Failed to read config file: %s" % str(e))

            self._load_server_settings(config)
            self._load_http_settings(config)
            self._load_general_settings(config)

        return config

    def apply_environment(self, config: Configuration, environ: Optional[Mapping[str, str]] = None) -> Configuration:
        """Overlay account settings found in the environment.

        Args:
            config: Configuration to update in place
            environ: Mapping to read from (default: os.environ)

        Returns:
            The same Configuration object
        """
        if environ is None:
            environ = os.environ

        for variable, key in self.ENVIRONMENT.items():
            value = environ.get(variable)
            if not value:
                continue
            if key == 'APP_PASSWORD':
                config.set(key, self._get_bool({key: value}, key))
            else:
                config.set(key, value)
        return config

    def save(self, config: Configuration, config_file: Optional[str] = None) -> None:
        """Save configuration to a file.

        Args:
            config: Configuration object to save
            config_file: Path to config file (overrides constructor path)

        Raises:
            ConfigError: If file cannot be written
        """
        file_path = config_file or self.config_file
        if not file_path:
            raise ConfigError("No configuration file specified")

        for section in self.SECTIONS:
            self._ensure_section(section)

        self._save_server_settings(config)
        self._save_http_settings(config)
        self._save_general_settings(config)

        try:
            with open(file_path, 'w') as f:
                self._parser.write(f)
        except OSError as e:
            raise ConfigError("Failed to write config file: %s" % str(e))

    def _ensure_section(self, section: str) -> None:
        """Ensure a section exists in the parser."""
        if not self._parser.has_section(section):
            self._parser.add_section(section)

    def _get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Get a setting from the parser."""
        try:
            return self._parser.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default

    def _get_int(self, source: Dict, key: str, default: int = 0) -> int:
        """Get an integer value from a dictionary."""
        value = source.get(key, default)
        if isinstance(value, int):
            return value
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    def _get_bool(self, source: Dict, key: str, default: bool = False) -> bool:
        """Get a boolean value from a dictionary."""
        value = source.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes')
        return default

    def _section_dict(self, section: str) -> Dict[str, str]:
        if not self._parser.has_section(section):
            return {}
        return dict(self._parser.items(section))

    def _load_server_settings(self, config: Configuration) -> None:
        """Load account settings from parser."""
        values = self._section_dict('Connections')
        config.server.server = self._get_setting('Connections', 'server', '') or ''
        config.server.user = self._get_setting('Connections', 'user', '') or ''
        config.server.password = self._get_setting('Connections', 'password', '') or ''
        config.server.app_password = self._get_bool(values, 'app_password')
        config.server.app_id = self._get_setting('Connections', 'app_id', '') or ''

    def _load_http_settings(self, config: Configuration) -> None:
        """Load HTTP settings from parser."""
        values = self._section_dict('HTTP')
        config.http.timeout = self._get_int(values, 'timeout', 0)
        config.http.ssl_verify = self._get_bool(values, 'ssl_verify', True)
        config.http.relogin_hours = self._get_int(values, 'relogin_hours', 12)
        config.http.content_workers = self._get_int(values, 'content_workers', 8)

    def _load_general_settings(self, config: Configuration) -> None:
        """Load logging settings from parser."""
        values = self._section_dict('General')
        config.general.log_dir = self._get_setting('General', 'logdir', '') or ''
        config.general.log_level = self._get_int(values, 'loglevel', 1)
        config.general.log_limit = self._get_int(values, 'loglimit', 500)
        config.general.log_files = self._get_int(values, 'logfiles', 10)
        config.general.log_size = self._get_int(values, 'logsize', 204800)

    def _save_server_settings(self, config: Configuration) -> None:
        """Save account settings to parser."""
        self._parser.set('Connections', 'server', config.server.server)
        self._parser.set('Connections', 'user', config.server.user)
        self._parser.set('Connections', 'password', config.server.password)
        self._parser.set('Connections', 'app_password', '1' if config.server.app_password else '0')
        self._parser.set('Connections', 'app_id', config.server.app_id)

    def _save_http_settings(self, config: Configuration) -> None:
        """Save HTTP settings to parser."""
        self._parser.set('HTTP', 'timeout', str(config.http.timeout))
        self._parser.set('HTTP', 'ssl_verify', '1' if config.http.ssl_verify else '0')
        self._parser.set('HTTP', 'relogin_hours', str(config.http.relogin_hours))
        self._parser.set('HTTP', 'content_workers', str(config.http.content_workers))

    def _save_general_settings(self, config: Configuration) -> None:
        """Save logging settings to parser."""
        self._parser.set('General', 'logdir', config.general.log_dir)
        self._parser.set('General', 'loglevel', str(config.general.log_level))
        self._parser.set('General', 'loglimit', str(config.general.log_limit))
        self._parser.set('General', 'logfiles', str(config.general.log_files))
        self._parser.set('General', 'logsize', str(config.general.log_size))
