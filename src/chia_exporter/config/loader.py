"""Configuration loader: YAML file, environment substitution and CLI overrides."""

import argparse
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import ExporterConfig

# Keys that may be set from the YAML file or the command line
CONFIG_KEYS = (
    "listen", "cert", "key", "ca", "timeout",
    "full_node", "wallet", "farmer", "harvester",
)


class ConfigError(Exception):
    """Configuration is unusable; the exporter cannot start."""


class ConfigLoader:
    """Load and validate exporter configuration."""

    @staticmethod
    def load(args: Optional[argparse.Namespace] = None) -> ExporterConfig:
        """
        Build the configuration from an optional YAML file and CLI flags.

        Flags given on the command line take precedence over the file;
        anything set in neither place keeps its built-in default.

        Args:
            args: Parsed command line; ``args.config`` may name a YAML file

        Returns:
            ExporterConfig: Validated configuration

        Raises:
            ConfigError: If the file cannot be read or a value is invalid
        """
        raw: Dict[str, Any] = {}

        config_path = getattr(args, "config", None)
        if config_path:
            raw.update(ConfigLoader.load_from_file(config_path))

        if args is not None:
            for name in CONFIG_KEYS:
                value = getattr(args, name, None)
                if value is not None:
                    raw[name] = value

        try:
            return ExporterConfig(**raw)
        except ValidationError as e:
            raise ConfigError(ConfigLoader._describe(e)) from e

    @staticmethod
    def load_from_file(config_path: str) -> Dict[str, Any]:
        """
        Read a YAML configuration file with environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            dict: Recognised settings from the file

        Raises:
            ConfigError: If the file is missing, unparseable or not a mapping
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r') as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {config_path}: {e}") from e

        if not isinstance(raw_config, dict):
            raise ConfigError(f"{config_path}: top level must be a mapping")

        raw_config = ConfigLoader._substitute_env_vars(raw_config)

        # Legacy alias for the full node URL
        if "url" in raw_config and "full_node" not in raw_config:
            raw_config["full_node"] = raw_config["url"]

        return {k: v for k, v in raw_config.items() if k in CONFIG_KEYS}

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            pattern = r'\$\{(\w+)\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1), ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj

    @staticmethod
    def _describe(error: ValidationError) -> str:
        """Flatten a validation error into one line per offending key."""
        lines = []
        for item in error.errors():
            location = ".".join(str(part) for part in item["loc"]) or "config"
            lines.append(f"{location}: {item['msg']}")
        return "; ".join(lines)
