"""Command line entry point for the Pathfinder service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from pydantic import ValidationError

from pathfinder.config.environment import EnvironmentConfig
from pathfinder.config.exceptions import ConfigurationError
from pathfinder.config.loader import load_config
from pathfinder.config.models import AppConfig
from pathfinder.domain.models import SkillProfile
from pathfinder.logging import get_logger
from pathfinder.logging.config import configure_logging
from pathfinder.services import Services, build_services

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def load_profile(profile_path: Path) -> SkillProfile:
    """Read a skill profile from a JSON or YAML file.

    Raises:
        ConfigurationError: If the file is missing or not a valid profile
    """
    if not profile_path.exists():
        raise ConfigurationError(f"Profile file not found: {profile_path}")

    try:
        with open(profile_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse profile file {profile_path}: {e}") from e

    try:
        return SkillProfile.model_validate(data or {})
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid profile file: {profile_path}",
            errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
            suggestions=["A profile needs topLanguages, topSkills and activityScore fields"],
        ) from e


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _parse_remote_flag(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.lower() in ("true", "yes", "1")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathfinder",
        description="Pathfinder - job search aggregation and skill-based job matching",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: PORT or 3001)")

    search = subparsers.add_parser("search", help="Search all providers and print jobs as JSON")
    search.add_argument("query", help="Job title or keywords")
    search.add_argument("--location", default=None)
    search.add_argument("--remote", default=None, metavar="true|false")
    search.add_argument("--limit", type=int, default=50)

    match = subparsers.add_parser("match", help="Run the match pipeline once and print matches")
    match.add_argument("--profile", type=Path, required=True, help="Skill profile JSON/YAML file")
    match.add_argument("--role", required=True, help="Target role")
    match.add_argument("--location", default=None)
    match.add_argument("--remote", default=None, metavar="true|false")

    saved = subparsers.add_parser("saved", help="List stored jobs")
    saved.add_argument("--limit", type=int, default=50)

    return parser


def run_command(args: argparse.Namespace, services: Services, env_config: EnvironmentConfig) -> int:
    """Execute the selected subcommand with built services."""
    if args.command == "serve":
        import uvicorn

        from pathfinder.api.app import create_app

        port = args.port or env_config.port
        logger.info(
            f"Starting HTTP API on {args.host}:{port}",
            extra={"event": "service.http.starting", "host": args.host, "port": port},
        )
        uvicorn.run(create_app(services), host=args.host, port=port, log_config=None)
        return EXIT_OK

    if args.command == "search":
        jobs = services.search.search_jobs(
            args.query,
            location=args.location,
            remote=_parse_remote_flag(args.remote),
            limit=args.limit,
        )
        _print_json({"jobs": [job.to_api() for job in jobs], "count": len(jobs)})
        return EXIT_OK

    if args.command == "match":
        profile = load_profile(args.profile)
        matches = services.pipeline.find_matching_jobs(
            profile,
            args.role,
            location=args.location,
            remote=_parse_remote_flag(args.remote),
        )
        _print_json({"matches": [match.to_api() for match in matches]})
        return EXIT_OK

    jobs = services.job_store.list_recent(args.limit)
    _print_json({"jobs": [job.to_api() for job in jobs]})
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 on success, 1 on configuration errors, 2 on runtime errors
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)
    services = None

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        environment = os.environ.get("ENVIRONMENT", "local")
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=environment,
        )

        logger.info(
            "Pathfinder starting",
            extra={
                "event": "service.starting",
                "command": args.command,
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
            },
        )

        # Only serving and matching need the scorer
        services = build_services(
            app_config,
            env_config,
            require_scorer=args.command in ("serve", "match"),
        )
        return run_command(args, services, env_config)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return EXIT_CONFIG_ERROR
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return EXIT_OK
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Command failed",
            extra={
                "event": "service.command.failed",
                "command": args.command,
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return EXIT_RUNTIME_ERROR
    finally:
        if services is not None:
            services.close()
        logger.info(
            "Pathfinder stopped",
            extra={"event": "service.stopping", "uptime_seconds": round(time.time() - start_time, 2)},
        )


if __name__ == "__main__":
    sys.exit(main())
