"""Configuration management for themesync."""

import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key

ENV_API_KEY = "THEMESYNC_API_KEY"
ENV_PASSWORD = "THEMESYNC_PASSWORD"
ENV_HOST = "THEMESYNC_HOST"
ENV_THEME_ID = "THEMESYNC_THEME_ID"


class Config:
    """Credentials and defaults, read from the environment and a config file.

    Environment variables take precedence over values stored in
    ``~/.config/themesync/config``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".config" / "themesync"
        self.config_file = self.config_dir / "config"
        self._file_values: dict[str, str] = self._load_file()

    def _load_file(self) -> dict[str, str]:
        """Read the dotenv-style config file if it exists."""
        if not self.config_file.exists():
            return {}
        return {
            key: value
            for key, value in dotenv_values(self.config_file).items()
            if value is not None
        }

    def _get(self, name: str) -> Optional[str]:
        return os.environ.get(name) or self._file_values.get(name) or None

    @property
    def api_key(self) -> Optional[str]:
        return self._get(ENV_API_KEY)

    @property
    def password(self) -> Optional[str]:
        return self._get(ENV_PASSWORD)

    @property
    def host(self) -> Optional[str]:
        return self._get(ENV_HOST)

    @property
    def theme_id(self) -> Optional[str]:
        return self._get(ENV_THEME_ID)

    def is_configured(self) -> bool:
        """Check whether credentials and host are all available."""
        return bool(self.api_key and self.password and self.host)

    def get_config_path(self) -> Path:
        return self.config_file

    def save_credentials(
        self,
        api_key: str,
        password: str,
        host: str,
        theme_id: Optional[str] = None,
    ) -> None:
        """Write credentials to the config file (mode 0600).

        Args:
            api_key: Private app API key
            password: Private app password
            host: Shop host name, e.g. ``example.myshopify.com``
            theme_id: Optional default theme id
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.touch(mode=0o600, exist_ok=True)

        values = {ENV_API_KEY: api_key, ENV_PASSWORD: password, ENV_HOST: host}
        if theme_id:
            values[ENV_THEME_ID] = theme_id

        for key, value in values.items():
            set_key(self.config_file, key, value)
        self.config_file.chmod(0o600)
        self._file_values = self._load_file()


config = Config()
