"""Python-standard logging configuration for goimpl.

This module provides centralized logging setup using logging.config.dictConfig()
with YAML configuration files shipped in the goimpl/config/ package directory.
All log output goes to stderr so that stdout carries only the JSON result.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Any, cast

import yaml
from rich.console import Console
from rich.logging import RichHandler

CONFIG_DIR = Path(__file__).parent / "config"
DEFAULT_LEVEL = "ERROR"
ENVIRONMENT_VARIABLE = "GOIMPL_ENV"

_ENVIRONMENT_ALIASES = {
    "dev": "dev",
    "development": "dev",
    "test": "test",
    "prod": "prod",
    "production": "prod",
}


class LoggingError(Exception):
    """Exception raised for logging configuration errors."""

    pass


def stderr_rich_handler(**kwargs: Any) -> RichHandler:  # noqa: ANN401
    """Create a RichHandler writing to stderr.

    Referenced from the YAML configuration through the dictConfig "()" key.
    """
    return RichHandler(console=Console(stderr=True), **kwargs)


def get_config_path(
    config_name: str | None = None,
    environment: str | None = None,
    config_dir: Path | None = None,
) -> Path:
    """Get the path to a logging configuration file.

    Args:
        config_name: Name of config file (without extension)
        environment: Environment (dev, test, prod) for environment-specific configs
        config_dir: Directory holding the configs (default: the packaged config dir)

    Returns:
        Path to the logging configuration file

    Raises:
        LoggingError: If no suitable configuration file is found

    """
    config_dir = config_dir or CONFIG_DIR

    if config_name:
        config_file = f"{config_name}.yaml"
    else:
        env = environment or os.getenv(ENVIRONMENT_VARIABLE, "")
        env = _ENVIRONMENT_ALIASES.get(env.lower(), "")
        config_file = f"logging-{env}.yaml" if env else "logging.yaml"

    config_path = config_dir / config_file

    # Fallback to default if specific config doesn't exist
    if not config_path.exists() and config_file != "logging.yaml":
        config_path = config_dir / "logging.yaml"

    if not config_path.exists():
        raise LoggingError(
            f"No logging configuration found. Expected at: {config_path}"
        )

    return config_path


def load_config(config_path: Path) -> dict[str, Any]:
    """Load logging configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Logging configuration dictionary

    Raises:
        LoggingError: If configuration cannot be loaded or parsed

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise LoggingError(f"Invalid configuration format in {config_path}")

        return cast(dict[str, Any], config)

    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e


def _apply_level(config: dict[str, Any], level: str) -> None:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise LoggingError(f"Invalid log level: {level}")
    level = level.upper()

    for logger_config in config.get("loggers", {}).values():
        logger_config["level"] = level
    if "root" in config:
        config["root"]["level"] = level

    # Only lower handler levels; a handler may deliberately filter more
    for handler_config in config.get("handlers", {}).values():
        if isinstance(handler_config, dict) and "level" in handler_config:
            handler_level = getattr(logging, str(handler_config["level"]), logging.INFO)
            if numeric_level < handler_level:
                handler_config["level"] = level


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    environment: str | None = None,
    force_basic: bool = False,
) -> None:
    """Configure logging using Python standard dictConfig.

    Args:
        config_path: Path to logging configuration file
        level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment for config selection (dev, test, prod)
        force_basic: Force basic stderr logging (fallback mode)

    """
    if force_basic:
        _setup_basic_logging(level or DEFAULT_LEVEL)
        return

    try:
        if isinstance(config_path, str):
            config_path = Path(config_path)
        elif config_path is None:
            config_path = get_config_path(environment=environment)

        config = load_config(config_path)
        if level:
            _apply_level(config, level)

        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        logger.debug("Logging configured from: %s", config_path)

    except (LoggingError, ImportError, KeyError, TypeError, ValueError) as e:
        fallback_level = level or DEFAULT_LEVEL
        _setup_basic_logging(fallback_level)

        fallback_logger = logging.getLogger(__name__)
        fallback_logger.warning(
            "Failed to configure logging from file (%s), using basic stderr logging at %s level",
            e,
            fallback_level,
        )


def _setup_basic_logging(level: str) -> None:
    """Set up basic stderr logging as fallback.

    Args:
        level: Logging level string

    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Override existing configuration
    )
