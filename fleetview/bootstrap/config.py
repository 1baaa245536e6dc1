"""
bootstrap/config.py - Application configuration v1.0

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

from fleetview.core.enums import DetailTab
from fleetview.errors import ConfigurationError

logger = logging.getLogger("bootstrap.config")


@dataclass
class ServiceConfig:
    """Backend connection configuration."""

    base_url: Optional[str] = None  # None = in-memory sample backend
    timeout_seconds: float = 30.0
    api_token: str = ""
    latency_seconds: float = 0.0  # in-memory backend only

    @property
    def use_memory(self) -> bool:
        return not self.base_url

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        return cls(
            base_url=os.getenv("FLEETVIEW_SERVICE_URL") or None,
            timeout_seconds=float(os.getenv("FLEETVIEW_SERVICE_TIMEOUT", "30")),
            api_token=os.getenv("FLEETVIEW_API_TOKEN", ""),
            latency_seconds=float(os.getenv("FLEETVIEW_MEMORY_LATENCY", "0")),
        )


@dataclass
class UIConfig:
    """View configuration."""

    default_tab: str = DetailTab.DETAILS.value
    selection_channel: str = "boat_selection"
    labels: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "UIConfig":
        return cls(
            default_tab=os.getenv("FLEETVIEW_DEFAULT_TAB", DetailTab.DETAILS.value),
            selection_channel=os.getenv("FLEETVIEW_SELECTION_CHANNEL", "boat_selection"),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("FLEETVIEW_LOG_LEVEL", "INFO"),
            format=os.getenv("FLEETVIEW_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("FLEETVIEW_LOG_FILE"),
            json_logs=os.getenv("FLEETVIEW_JSON_LOGS", "false").lower() == "true",
        )


@dataclass
class FleetViewConfig:
    """Root configuration."""

    environment: str = "development"
    debug: bool = False
    version: str = "1.0.0"

    service: ServiceConfig = field(default_factory=ServiceConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "FleetViewConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("FLEETVIEW_ENVIRONMENT", "development"),
            debug=os.getenv("FLEETVIEW_DEBUG", "false").lower() == "true",
            service=ServiceConfig.from_env(),
            ui=UIConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "FleetViewConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid config file {filepath}: {e}") from e

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "FleetViewConfig":
        """Create config from dictionary; file values override the environment."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]
        if "debug" in data:
            config.debug = data["debug"]

        for section in ("service", "ui", "logging"):
            target = getattr(config, section)
            for key, value in data.get(section, {}).items():
                if hasattr(target, key):
                    setattr(target, key, _coerce(f"{section}.{key}", getattr(target, key), value))
                else:
                    logger.warning(f"Ignoring unknown config key {section}.{key}")

        config.validate()
        return config

    def validate(self) -> None:
        """Reject values the views cannot work with."""
        try:
            DetailTab(self.ui.default_tab)
        except ValueError as e:
            raise ConfigurationError(f"Unknown default tab: {self.ui.default_tab}") from e
        if self.service.timeout_seconds <= 0:
            raise ConfigurationError("service.timeout_seconds must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "version": self.version,
            "service": {
                "base_url": self.service.base_url,
                "timeout_seconds": self.service.timeout_seconds,
            },
            "ui": {
                "default_tab": self.ui.default_tab,
                "selection_channel": self.ui.selection_channel,
                "labels": dict(self.ui.labels),
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


def _coerce(name: str, current: Any, value: Any) -> Any:
    """Convert a file value to the type of the field it replaces."""
    try:
        if isinstance(current, bool):
            if isinstance(value, str):
                return value.strip().lower() == "true"
            return bool(value)
        if isinstance(current, float):
            return float(value)
        if isinstance(current, dict) and not isinstance(value, dict):
            raise TypeError(f"expected an object, got {type(value).__name__}")
        if isinstance(current, str) and value is not None:
            return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value for {name}: {value!r} ({e})") from e
    return value


# Global config instance
_config: Optional[FleetViewConfig] = None


def load_config(filepath: str = None) -> FleetViewConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        FleetViewConfig instance
    """
    global _config

    if filepath:
        _config = FleetViewConfig.from_file(filepath)
    else:
        default_paths = [
            "./fleetview.json",
            "./config/fleetview.json",
            os.path.expanduser("~/.fleetview/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = FleetViewConfig.from_file(path)
                return _config

        _config = FleetViewConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> FleetViewConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
