"""Configuration management for weekflow."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError, InvalidDateError

logger = logging.getLogger(__name__)

INVALID_INPUT_POLICIES = ("raise", "fallback")
SUPPORTED_VERSIONS = ("1.0",)


@dataclass
class WeekflowConfig:
    """How the week calculator treats input it cannot parse.

    ``raise`` propagates :class:`~weekflow.errors.InvalidDateError` to the
    caller. ``fallback`` logs a warning and computes the answer for
    ``fallback_date`` instead, or for the current UTC date when unset.
    """

    on_invalid: str = "raise"
    fallback_date: Optional[str] = None

    def validate(self) -> None:
        """Check the policy name and that the fallback date is itself a valid date."""
        if self.on_invalid not in INVALID_INPUT_POLICIES:
            raise ConfigurationError(
                f"Unknown invalid-input policy '{self.on_invalid}'. "
                f"Expected one of: {', '.join(INVALID_INPUT_POLICIES)}"
            )

        if self.fallback_date is not None:
            from .calculator import normalize_date

            try:
                normalize_date(self.fallback_date)
            except InvalidDateError as e:
                raise ConfigurationError(f"Invalid fallback_date: {e}") from e


class ConfigLoader:
    """Load and validate configuration from YAML files or the environment."""

    @classmethod
    def load(cls, config_path: Path) -> WeekflowConfig:
        """Load configuration from a YAML file.

        A ``.env`` file next to the configuration is loaded first so that
        ``${VAR}`` references can be resolved from it.
        """
        config_path = Path(config_path)
        env_file = config_path.parent / ".env"
        if env_file.exists():
            load_dotenv(env_file, override=True)
            logger.debug("Loaded environment variables from %s", env_file)

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML configuration error in {config_path.name}: {e}") from e
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {config_path}") from e
        except PermissionError as e:
            raise ConfigurationError(
                f"Permission denied reading configuration file: {config_path}"
            ) from e

        if data is None:
            raise ConfigurationError(
                f"Configuration file is empty or contains only null values: {config_path.name}"
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a YAML mapping: {config_path.name} "
                f"(got {type(data).__name__})"
            )

        version = str(data.get("version", "1.0"))
        if version not in SUPPORTED_VERSIONS:
            raise ConfigurationError(f"Unsupported config version: {version}")

        section = data.get("invalid_input") or {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"'invalid_input' must be a mapping in {config_path.name}"
            )

        config = cls._build(section.get("policy"), section.get("fallback_date"))
        logger.debug("Loaded configuration from %s: %s", config_path, config)
        return config

    @classmethod
    def from_env(cls) -> WeekflowConfig:
        """Build configuration from ``WEEKFLOW_ON_INVALID`` and ``WEEKFLOW_FALLBACK_DATE``."""
        return cls._build(
            os.environ.get("WEEKFLOW_ON_INVALID"), os.environ.get("WEEKFLOW_FALLBACK_DATE")
        )

    @classmethod
    def _build(cls, policy: Any, fallback_date: Any) -> WeekflowConfig:
        resolved_policy = cls._resolve_env_var(policy)
        resolved_date = cls._resolve_env_var(fallback_date)

        config = WeekflowConfig(
            on_invalid=(resolved_policy or "raise").lower(),
            fallback_date=resolved_date,
        )
        config.validate()
        return config

    @staticmethod
    def _resolve_env_var(value: Any) -> Optional[str]:
        """Resolve ``${VAR}`` environment variable references."""
        if value is None or value == "":
            return None

        value = str(value)
        if value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            resolved = os.environ.get(env_var)
            if not resolved:
                raise ConfigurationError(f"Environment variable {env_var} not set")
            return resolved

        return value
