"""
Settings for the back office, read from the environment.

A .env file, when present, seeds the environment first. Missing store
credentials do not fail at import; the store raises ConfigurationError
when it is first used without them.
"""

import os
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from ..errors import ConfigurationError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SecureString:
    """
    A secret that renders as ******** in str(), repr() and f-strings.

    Holds the store access token and the stored login passwords.

    Examples:
        >>> token = SecureString("ghp_abc123")
        >>> f"{token}"
        '********'
        >>> token.get_value()
        'ghp_abc123'
    """

    def __init__(self, value: str):
        self._value = value

    def get_value(self) -> str:
        """Plain value, for an Authorization header or a password check only."""
        return self._value

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "SecureString(********)"

    def __eq__(self, other) -> bool:
        return isinstance(other, SecureString) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class Config:
    """
    Environment-backed settings.

    Variables:
        GITHUB_TOKEN: contents API token, exposed as a SecureString
        GITHUB_REPO: "owner/name" of the repository holding the documents
        GITHUB_BRANCH: branch to use; the repository default if unset
        GITHUB_API_URL: API base URL (default https://api.github.com)
        ACADEMY_DATA_DIR: document directory in the repository (default "data")
        REQUEST_TIMEOUT: HTTP timeout in seconds (default 30)
        OUTPUT_DIR: local directory for logs and exports (default "output")
        LOG_LEVEL: one of DEBUG, INFO, WARNING, ERROR, CRITICAL

    Examples:
        >>> settings = Config(env_file=".env")
        >>> settings.validate()
        True
        >>> settings.github_repo
        'sogon/academy-data'
    """

    DEFAULT_API_URL = "https://api.github.com"

    def __init__(self, env_file: Optional[str] = None):
        """
        Args:
            env_file: .env file to load; the nearest .env is used if omitted
        """
        load_dotenv(env_file)

        token = os.getenv("GITHUB_TOKEN")
        self._github_token = SecureString(token) if token else None
        self._github_repo = os.getenv("GITHUB_REPO") or None
        self._github_branch = os.getenv("GITHUB_BRANCH") or None

        api_url = os.getenv("GITHUB_API_URL", self.DEFAULT_API_URL)
        self._github_api_url = self._checked_url(api_url, "GITHUB_API_URL").rstrip('/')

        self._data_dir = os.getenv("ACADEMY_DATA_DIR", "data").strip('/')
        self._request_timeout = self._int_setting("REQUEST_TIMEOUT", "30")

        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def _checked_url(url: str, name: str) -> str:
        parsed = urlparse(url)

        if not parsed.scheme:
            raise ConfigurationError(f"{name} must include URL scheme (http/https)")
        if parsed.scheme not in ('http', 'https'):
            raise ConfigurationError(
                f"{name} must use http or https scheme, got: {parsed.scheme}"
            )
        if not parsed.netloc:
            raise ConfigurationError(f"{name} must have a valid domain")

        return url

    @staticmethod
    def _int_setting(name: str, default: str) -> int:
        raw = os.getenv(name, default)
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer, got: {raw!r}")

    @property
    def github_token(self) -> Optional[SecureString]:
        return self._github_token

    @property
    def github_repo(self) -> Optional[str]:
        return self._github_repo

    @property
    def github_branch(self) -> Optional[str]:
        return self._github_branch

    @property
    def github_api_url(self) -> str:
        return self._github_api_url

    @property
    def data_dir(self) -> str:
        return self._data_dir

    @property
    def request_timeout(self) -> int:
        return self._request_timeout

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def log_level(self) -> str:
        return self._log_level

    def validate(self) -> bool:
        """
        Check the settings needed to reach the remote store.

        Every problem is reported at once, one per line.

        Raises:
            ConfigurationError: If any setting is missing or malformed
        """
        problems = []

        if not self._github_token:
            problems.append("GITHUB_TOKEN is required")

        repo = self._github_repo
        if not repo:
            problems.append("GITHUB_REPO is required")
        elif repo.count("/") != 1 or repo.startswith("/") or repo.endswith("/"):
            problems.append("GITHUB_REPO must have the form owner/name")

        if self._request_timeout <= 0:
            problems.append("REQUEST_TIMEOUT must be positive")

        if self._log_level not in LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}")

        if problems:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(problems)
            )

        return True


# Module-level settings shared by the CLI
config = Config()
