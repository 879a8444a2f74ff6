"""Configuration management for ID3 Tagger."""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

SUPPORTED_ID3_VERSIONS = (3, 4)
DEFAULT_ID3_VERSION = 3
DEFAULT_LOG_LEVEL = "WARNING"

LOGGER_NAME = "id3_tagger"


def eprint(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)


def _parse_version(value: Optional[str]):
    """Return the version as int, or the raw string if it isn't one."""
    if value is None or not value.strip():
        return DEFAULT_ID3_VERSION
    value = value.strip()
    # Accept "2.3" / "2.4" as well as "3" / "4"
    if value.startswith("2."):
        value = value[2:]
    try:
        return int(value)
    except ValueError:
        return value


def load_config(env_file: Optional[str] = None, quiet: bool = False) -> dict:
    """
    Load configuration from .env file.

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.
        quiet: Don't report where configuration came from.

    Returns:
        Dictionary of configuration values.
    """
    if env_file is None:
        env_file = ".env"

    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        if not quiet:
            eprint(f"Loaded environment from {env_path.resolve()}")

    return {
        "id3_version": _parse_version(os.getenv("ID3_TAGGER_VERSION")),
        "log_level": (os.getenv("ID3_TAGGER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    }


def validate_config(config: dict) -> List[str]:
    """
    Validate configuration and return list of problems.

    Args:
        config: Configuration dictionary from load_config()

    Returns:
        List of problem descriptions (empty if configuration is usable).
    """
    problems = []

    if config.get("id3_version") not in SUPPORTED_ID3_VERSIONS:
        problems.append(
            f"ID3_TAGGER_VERSION must be 3 or 4, got {config.get('id3_version')!r}"
        )

    level = config.get("log_level")
    if not isinstance(logging.getLevelName(level), int):
        problems.append(f"ID3_TAGGER_LOG_LEVEL is not a logging level: {level!r}")

    return problems


def setup_logging(level: str = DEFAULT_LOG_LEVEL, verbose: bool = False) -> logging.Logger:
    """Configure the package logger with a console handler."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)
    logger.propagate = False

    return logger
