"""Runtime settings for stores, admin access and date handling."""

import hmac
import os
from dataclasses import dataclass, field
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401  (loads .env)

STORE_BACKENDS = ('sql', 'memory', 'http')
DEFAULT_STORE_TIMEOUT = 10.0
DEFAULT_TIMEZONE = 'Asia/Kolkata'


@dataclass
class StoreConfig:
    """Which persistence backend to use and how to reach it."""

    backend: str = ""
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    timeout: float = 0.0
    database_url: Optional[str] = None

    def __post_init__(self):
        """Fill unset values from the environment."""
        if not self.backend:
            self.backend = os.environ.get('STORE_BACKEND', 'sql').strip().lower()
        if self.api_url is None:
            self.api_url = os.environ.get('STORE_API_URL')
        if self.api_key is None:
            self.api_key = os.environ.get('STORE_API_KEY') or os.environ.get('ADMIN_API_KEY')
        if not self.timeout:
            self.timeout = float(os.environ.get('STORE_TIMEOUT', DEFAULT_STORE_TIMEOUT))
        if self.database_url is None:
            self.database_url = os.environ.get('DATABASE_URL')

    def validate(self) -> bool:
        """Validate the configuration."""
        if self.backend not in STORE_BACKENDS:
            raise ValueError(
                f"Invalid STORE_BACKEND '{self.backend}'. Must be one of: {', '.join(STORE_BACKENDS)}"
            )
        if self.backend == 'http' and not self.api_url:
            raise ValueError("STORE_API_URL environment variable is required for the http backend")
        if self.timeout <= 0:
            raise ValueError("STORE_TIMEOUT must be a positive number of seconds")
        return True


@dataclass
class AdminConfig:
    """Admin configuration settings."""

    api_key: str = ""

    def __post_init__(self):
        """Load API key from environment if not provided."""
        if not self.api_key:
            self.api_key = os.environ.get('ADMIN_API_KEY', '')

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.api_key:
            raise ValueError("ADMIN_API_KEY environment variable is required")
        return True

    def verify_auth(self, auth_header: Optional[str]) -> bool:
        """Verify admin authorization header. Accepts the raw key or 'Bearer <key>'."""
        if not auth_header or not self.api_key:
            return False
        token = auth_header
        if token.lower().startswith('bearer '):
            token = token[7:].strip()
        return hmac.compare_digest(token.encode(), self.api_key.encode())


@dataclass
class DateConfig:
    """Timezone used to decide what 'today' is for the club."""

    timezone: str = field(default_factory=lambda: os.environ.get('TIMEZONE', DEFAULT_TIMEZONE))

    def validate(self) -> bool:
        """Validate the configuration."""
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Invalid TIMEZONE '{self.timezone}'") from None
        return True
