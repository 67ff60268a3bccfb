"""
Configuration management for services.
"""

import json
import os
from typing import Any

import yaml

from dotenv import load_dotenv

DEFAULT_MAX_UPLOAD_BYTES = 1024 * 1024

DEFAULT_LANGUAGES = {
    "en": "English",
    "ru": "Russian",
}


class ServiceConfig:
    """Configuration management for services using environment variables."""

    def __init__(self) -> None:
        """Initialize configuration by loading environment variables."""
        # .env lives next to app.py
        env_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.env"))
        load_dotenv(dotenv_path=env_path, override=False)
        self.config: dict[str, Any] = {}
        self.settings: dict[str, Any] = {}
        self.settings_path = os.getenv(
            "SUBTITLES_CONFIG_PATH",
            os.path.join(os.path.dirname(__file__), "../config/subtitles.yaml"),
        )
        self.load_from_env()
        self.load_settings()

    def load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.config = {
            "database_url": os.getenv("DATABASE_URL"),
            "db_host": os.getenv("DB_HOST"),
            "allowed_origins": json.loads(os.getenv("ALLOWED_ORIGINS", '["*"]')),
            "secret_key": os.getenv("SECRET_KEY", "supersecret"),
            "access_token_expire_minutes": int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")),
            "max_upload_bytes": int(os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)

    def load_settings(self) -> None:
        """Load subtitle settings from YAML file."""
        path = os.path.abspath(self.settings_path)
        try:
            with open(path, "r", encoding="utf-8") as stream:
                data = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            data = {}
        self.settings = data

    def get_setting(self, path: str, default: Any = None) -> Any:
        """Retrieve a subtitle setting via dotted path."""
        env_override_key = f"SUBTITLES_FLAG_{path.replace('.', '_').upper()}"
        env_value = os.getenv(env_override_key)
        if env_value is not None:
            return self._coerce_env_value(env_value, default)

        node: Any = self.settings
        for part in path.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node if node is not None else default

    def set_settings(self, settings: dict[str, Any]) -> None:
        """Override subtitle settings (useful for tests)."""
        self.settings = settings

    def languages(self) -> dict[str, str]:
        """Language codes offered for documents, mapped to display names."""
        languages = self.get_setting("languages", DEFAULT_LANGUAGES)
        if not isinstance(languages, dict) or not languages:
            return dict(DEFAULT_LANGUAGES)
        return {
            str(code): str(self.get_setting(f"languages.{code}", name))
            for code, name in languages.items()
        }

    @staticmethod
    def _coerce_env_value(raw: str, default: Any) -> Any:
        lowered = raw.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered.replace(".", "", 1).isdigit():
            try:
                return float(lowered) if "." in lowered else int(lowered)
            except ValueError:
                return raw
        return raw or default


# Global configuration instance
config = ServiceConfig()
