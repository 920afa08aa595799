"""File-based configuration loader with environment overrides.

Precedence, lowest first: built-in defaults, config/service.json, environment
variables (a .env file in the working directory is loaded first).
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from app.utils.helpers.exceptions import ConfigurationError

BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "service.json"
VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
TRUTHY = {"1", "true", "yes", "on"}

DEFAULTS: Dict[str, Any] = {
    "host": "0.0.0.0",
    "port": 8000,
    "log_level": "INFO",
    "event_log_enabled": True,
    "event_log_path": str(BASE_DIR / "artifacts" / "logs" / "receipts.log"),
}


class ConfigService:
    """Resolve service settings once and expose them as read-only properties."""

    def __init__(self, config_path: Optional[Path] = None, *, load_env: bool = True) -> None:
        self.config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
        self._logger = logging.getLogger(__name__)

        if load_env:
            load_dotenv(dotenv_path=Path.cwd() / ".env")

        settings = dict(DEFAULTS)
        settings.update(self._load_file())
        settings.update(self._load_env())
        self._settings = self._normalize(settings)

    # -----------------
    # Public accessors
    # -----------------
    @property
    def host(self) -> str:
        return self._settings["host"]

    @property
    def port(self) -> int:
        return self._settings["port"]

    @property
    def log_level(self) -> str:
        return self._settings["log_level"]

    @property
    def event_log_path(self) -> Optional[Path]:
        """Event log target, or None when the event log is disabled."""
        if not self._settings["event_log_enabled"]:
            return None
        return Path(self._settings["event_log_path"])

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._settings)

    # -----------------
    # Internal loaders
    # -----------------
    def _load_file(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {}
        try:
            with self.config_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in {self.config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_path} must contain a JSON object")
        self._logger.info("Service config loaded", extra={"path": str(self.config_path)})
        return {key: value for key, value in data.items() if key in DEFAULTS}

    def _load_env(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        if os.getenv("RECEIPTS_HOST"):
            overrides["host"] = os.environ["RECEIPTS_HOST"]
        if os.getenv("PORT"):
            overrides["port"] = os.environ["PORT"]
        if os.getenv("LOG_LEVEL"):
            overrides["log_level"] = os.environ["LOG_LEVEL"]
        if os.getenv("RECEIPTS_EVENT_LOG") is not None:
            overrides["event_log_enabled"] = os.environ["RECEIPTS_EVENT_LOG"].lower() in TRUTHY
        if os.getenv("RECEIPTS_EVENT_LOG_PATH"):
            overrides["event_log_path"] = os.environ["RECEIPTS_EVENT_LOG_PATH"]
        return overrides

    def _normalize(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        try:
            port = int(settings["port"])
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid port: {settings['port']!r}") from None
        if not 1 <= port <= 65535:
            raise ConfigurationError(f"Port out of range: {port}")

        level = str(settings["log_level"]).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {settings['log_level']!r}")

        enabled = settings["event_log_enabled"]
        if isinstance(enabled, str):
            enabled = enabled.lower() in TRUTHY

        return {
            "host": str(settings["host"]),
            "port": port,
            "log_level": level,
            "event_log_enabled": bool(enabled),
            "event_log_path": str(settings["event_log_path"]),
        }
