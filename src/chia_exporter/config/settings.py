"""Environment settings."""

import os
from typing import Optional


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            str: Environment variable value, or "" if unset without default
        """
        return os.getenv(key, default) or ""

    @staticmethod
    def log_level() -> str:
        return Settings.get("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def config_path() -> Optional[str]:
        """YAML config file named by CHIA_EXPORTER_CONFIG, if any."""
        return Settings.get("CHIA_EXPORTER_CONFIG") or None
