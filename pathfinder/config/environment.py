"""Environment variable loading and validation.

Provider credentials are all optional: a provider without credentials is
soft-disabled. ``OPENAI_API_KEY`` is optional here too; building the match
scorer without it is what fails (see ``pathfinder.services``).
"""

import os
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./data/pathfinder.db"
DEFAULT_THEIRSTACK_API_URL = "https://api.theirstack.com/v1"
DEFAULT_RAPIDAPI_HOST = "jsearch.p.rapidapi.com"
DEFAULT_ADZUNA_COUNTRY = "us"
DEFAULT_PORT = 3001

_VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        theirstack_api_key: Optional[str] = None,
        theirstack_api_url: Optional[str] = None,
        rapidapi_key: Optional[str] = None,
        rapidapi_host: Optional[str] = None,
        adzuna_app_id: Optional[str] = None,
        adzuna_api_key: Optional[str] = None,
        adzuna_country: Optional[str] = None,
        openai_api_key: Optional[str] = None,
        database_url: Optional[str] = None,
        log_level: Optional[str] = None,
        port: Optional[int] = None,
    ):
        self.theirstack_api_key = theirstack_api_key or ""
        self.theirstack_api_url = theirstack_api_url or DEFAULT_THEIRSTACK_API_URL
        self.rapidapi_key = rapidapi_key or ""
        self.rapidapi_host = rapidapi_host or DEFAULT_RAPIDAPI_HOST
        self.adzuna_app_id = adzuna_app_id or ""
        self.adzuna_api_key = adzuna_api_key or ""
        self.adzuna_country = adzuna_country or DEFAULT_ADZUNA_COUNTRY
        self.openai_api_key = openai_api_key or ""
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.log_level = log_level
        self.port = port or DEFAULT_PORT

    @property
    def has_provider_credentials(self) -> bool:
        """True when at least one real job provider can be queried."""
        return bool(
            self.theirstack_api_key
            or self.rapidapi_key
            or (self.adzuna_app_id and self.adzuna_api_key)
        )


def load_environment_config() -> EnvironmentConfig:
    """Load and validate environment variables.

    Optional environment variables:
    - THEIRSTACK_API_KEY / THEIRSTACK_API_URL: TheirStack credentials
    - RAPIDAPI_KEY / RAPIDAPI_HOST: JSearch (RapidAPI) credentials
    - ADZUNA_APP_ID / ADZUNA_API_KEY / ADZUNA_COUNTRY: Adzuna credentials
    - OPENAI_API_KEY: completion key for the match scorer
    - DATABASE_URL: SQLAlchemy URL (default: sqlite:///./data/pathfinder.db)
    - LOG_LEVEL: Override log level
    - PORT: HTTP port for the API server

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable is set to an invalid value
    """
    errors = []

    adzuna_app_id = os.getenv("ADZUNA_APP_ID")
    adzuna_api_key = os.getenv("ADZUNA_API_KEY")
    log_level = os.getenv("LOG_LEVEL")
    port_str = os.getenv("PORT")

    if bool(adzuna_app_id) != bool(adzuna_api_key):
        errors.append(
            "ADZUNA_APP_ID and ADZUNA_API_KEY must be set together (or both left unset)."
        )

    if log_level and log_level.upper() not in _VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(_VALID_LOG_LEVELS)}"
        )

    port = None
    if port_str:
        try:
            port = int(port_str)
            if port < 1 or port > 65535:
                errors.append(f"Invalid PORT: {port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid PORT: '{port_str}'. Must be a valid integer.")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Leave provider credentials unset to disable that provider",
            ],
        )

    return EnvironmentConfig(
        theirstack_api_key=os.getenv("THEIRSTACK_API_KEY"),
        theirstack_api_url=os.getenv("THEIRSTACK_API_URL"),
        rapidapi_key=os.getenv("RAPIDAPI_KEY"),
        rapidapi_host=os.getenv("RAPIDAPI_HOST"),
        adzuna_app_id=adzuna_app_id,
        adzuna_api_key=adzuna_api_key,
        adzuna_country=os.getenv("ADZUNA_COUNTRY"),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        database_url=os.getenv("DATABASE_URL"),
        log_level=log_level.upper() if log_level else None,
        port=port,
    )
