"""Configuration loading utilities."""

import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..models.config import ExporterConfig

logger = logging.getLogger(__name__)


def load_env_file(path: Optional[Path] = None) -> bool:
    """Load a ``.env`` file into the environment without overriding it."""
    env_file = path or Path.cwd() / ".env"
    if not env_file.exists():
        return False
    loaded = load_dotenv(env_file, override=False)
    logger.debug(f"Loaded environment from {env_file}")
    return loaded


def build_config(**values: Any) -> ExporterConfig:
    """Validate option values into an ExporterConfig.

    Raises:
        ConfigurationError: if any value is invalid
    """
    try:
        return ExporterConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}", cause=None) from e
