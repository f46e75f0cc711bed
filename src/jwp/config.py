"""
=============================================================================
APPLICATION CONFIGURATION
=============================================================================

Everything tunable about the login engine lives in one dataclass.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION SOURCES                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. Code             AppConfig(static_dir="/srv/pages")            │
    │   2. Environment      JWP_STATIC_DIR=/srv/pages                     │
    │   3. Defaults         bundled pages, INFO logging, demo account    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Values are validated once, when the application is created, not at first
use.

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os


_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class AppConfig:
    """
    Configuration for the request processor and the login flows.

    =========================================================================
    GROUPS
    =========================================================================

    RESOURCES
    - static_dir: where /login.html etc. are loaded from

    SESSIONS
    - index_page, seed_default_account

    HTTP
    - max_request_size, server_name

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # RESOURCES
    # ─────────────────────────────────────────────────────────────────────

    static_dir: Optional[str] = None
    """
    Directory holding the static pages.
    None = the pages bundled with the package.
    """

    # ─────────────────────────────────────────────────────────────────────
    # SESSIONS
    # ─────────────────────────────────────────────────────────────────────

    index_page: str = "/index.html"
    """Where successful login, registration and logout redirect to."""

    seed_default_account: bool = True
    """Start the account store with the demo account gugu / password."""

    # ─────────────────────────────────────────────────────────────────────
    # HTTP
    # ─────────────────────────────────────────────────────────────────────

    max_request_size: int = 10 * 1024 * 1024  # 10 MB
    """Requests larger than this are refused with 413."""

    server_name: str = "jwp/1.0"
    """Value of the Server response header."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """DEBUG, INFO, WARNING, ERROR or CRITICAL."""

    log_format: str = "text"
    """
    Access log format: 'text' (one combined-log-like line) or 'json'.
    """

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Build a configuration from environment variables.

            JWP_STATIC_DIR        Static pages directory (default: bundled)
            JWP_MAX_REQUEST_SIZE  Request size limit in bytes (default: 10 MB)
            JWP_SEED_ACCOUNTS     Seed the demo account (default: true)
            JWP_LOG_LEVEL         Logging level (default: INFO)
            JWP_LOG_FORMAT        text | json (default: text)
        """
        return cls(
            static_dir=os.getenv("JWP_STATIC_DIR"),
            max_request_size=int(os.getenv("JWP_MAX_REQUEST_SIZE", str(10 * 1024 * 1024))),
            seed_default_account=os.getenv("JWP_SEED_ACCOUNTS", "true").lower() in _TRUE_VALUES,
            log_level=os.getenv("JWP_LOG_LEVEL", "INFO"),
            log_format=os.getenv("JWP_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """Raise ValueError on the first invalid setting."""
        if not self.index_page.startswith("/"):
            raise ValueError(f"index_page must start with '/': {self.index_page!r}")

        if self.max_request_size < 1024:
            raise ValueError("max_request_size must be >= 1024")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {self.log_level}")

        if self.log_format not in ("text", "json"):
            raise ValueError(f"log_format must be 'text' or 'json', got {self.log_format!r}")

        if self.static_dir is not None and not os.path.isdir(self.static_dir):
            raise ValueError(f"static_dir does not exist: {self.static_dir}")


def setup_logging(config: AppConfig) -> None:
    """Configure the root logger and the jwp loggers from `config`."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("jwp").setLevel(level)
