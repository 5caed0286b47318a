"""Configuration loader for Pathfinder.

Settings come from two places: an optional YAML file (``AppConfig``) and the
process environment (``EnvironmentConfig``, credentials and deployment
values). Both are validated before anything else starts.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_LOCATIONS = (
    Path("config.yaml"),
    Path("config") / "config.yaml",
)

_SCHEMA_HINT = "See config.example.yaml for every supported setting"


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """Load the YAML configuration and the environment.

    Without ``config_path`` the first of ``config.yaml`` and
    ``config/config.yaml`` that exists is used, and the built-in defaults
    apply when neither does.

    Raises:
        ConfigurationError: If either source is invalid, or ``config_path``
            is given and missing
    """
    config_file = _find_config_file(config_path)
    app_config = load_app_config(config_file) if config_file else AppConfig()

    try:
        env_config = load_environment_config()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Could not read environment variables: {e}",
            suggestions=["Copy .env.example to .env and fill in your credentials"],
        ) from e

    if not env_config.has_provider_credentials:
        emit_warnings(
            ["No job provider credentials are set; searches will only return mock jobs"]
        )

    return app_config, env_config


def load_app_config(config_file: Path) -> AppConfig:
    """Read and validate one YAML file; an empty file yields the defaults.

    Raises:
        ConfigurationError: If the file cannot be read, parsed, or validated
    """
    raw = _read_yaml(config_file)

    warnings = check_for_warnings(raw)
    if warnings:
        emit_warnings(warnings)

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_file}",
            errors=_describe_errors(e),
            suggestions=[_SCHEMA_HINT],
        ) from e


def _read_yaml(config_file: Path) -> dict:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=["Copy config.example.yaml to config.yaml"],
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML in {config_file}: {e}",
            suggestions=["Check indentation (spaces only) and quoting"],
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{config_file} must contain a mapping at the top level",
            suggestions=[_SCHEMA_HINT],
        )
    return data


def _describe_errors(error: ValidationError) -> List[str]:
    """One readable line per pydantic error, e.g. ``pipeline -> persist_top: ...``."""
    lines = []
    for item in error.errors():
        path = " -> ".join(str(part) for part in item["loc"])
        if item["type"] == "missing":
            lines.append(f"{path}: field required")
        elif path:
            lines.append(f"{path}: {item['msg']}")
        else:
            lines.append(item["msg"])
    return lines


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                suggestions=["Omit --config to use config.yaml or the built-in defaults"],
            )
        return config_path

    return next((path for path in DEFAULT_CONFIG_LOCATIONS if path.exists()), None)
