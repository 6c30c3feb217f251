"""
bootstrap/config.py - Engine configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path
import os
import json
import logging

from seatlayout.core.constants import (
    DEFAULT_RECLINEMENT_ANGLE,
    DEFAULT_SEAT_TYPE,
    GENERATED_RECLINEMENT_ANGLE,
)
from seatlayout.core.enums import OmissionPolicy, SeatType, ValidationMode

logger = logging.getLogger("bootstrap.config")

ENV_PREFIX = "SEATLAYOUT_"


def _env(name: str, default: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool) -> bool:
    return _env(name, "true" if default else "false").lower() == "true"


@dataclass
class LayoutConfig:
    """Defaults applied to generated and newly created seats."""

    default_seat_type: SeatType = DEFAULT_SEAT_TYPE
    default_reclinement_angle: int = DEFAULT_RECLINEMENT_ANGLE
    generated_reclinement_angle: int = GENERATED_RECLINEMENT_ANGLE
    default_amenities: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.default_seat_type = SeatType(self.default_seat_type)

    @classmethod
    def from_env(cls) -> "LayoutConfig":
        amenities = _env("DEFAULT_AMENITIES", "")
        return cls(
            default_seat_type=SeatType(_env("DEFAULT_SEAT_TYPE", DEFAULT_SEAT_TYPE.value)),
            default_reclinement_angle=int(_env("DEFAULT_RECLINEMENT_ANGLE", str(DEFAULT_RECLINEMENT_ANGLE))),
            generated_reclinement_angle=int(
                _env("GENERATED_RECLINEMENT_ANGLE", str(GENERATED_RECLINEMENT_ANGLE))
            ),
            default_amenities=[a.strip() for a in amenities.split(",") if a.strip()],
        )


@dataclass
class ValidationConfig:
    """Configuration validator behaviour."""

    mode: ValidationMode = ValidationMode.FAIL_FAST

    def __post_init__(self):
        self.mode = ValidationMode(self.mode)

    @property
    def collect_all(self) -> bool:
        return self.mode is ValidationMode.COLLECT

    @classmethod
    def from_env(cls) -> "ValidationConfig":
        return cls(mode=ValidationMode(_env("VALIDATION_MODE", ValidationMode.FAIL_FAST.value)))


@dataclass
class ReconciliationConfig:
    """Reconciliation engine behaviour."""

    omission_policy: OmissionPolicy = OmissionPolicy.IGNORE
    validate_incoming: bool = True

    def __post_init__(self):
        self.omission_policy = OmissionPolicy(self.omission_policy)

    @classmethod
    def from_env(cls) -> "ReconciliationConfig":
        return cls(
            omission_policy=OmissionPolicy(_env("OMISSION_POLICY", OmissionPolicy.IGNORE.value)),
            validate_incoming=_env_bool("VALIDATE_INCOMING", True),
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
            level=_env("LOG_LEVEL", "INFO"),
            format=_env("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv(f"{ENV_PREFIX}LOG_FILE"),
            json_logs=_env_bool("JSON_LOGS", False),
        )


@dataclass
class EngineConfig:
    """Root configuration for the layout engine."""

    environment: str = "development"
    debug: bool = False

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    reconciliation: ReconciliationConfig = field(default_factory=ReconciliationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Additional settings
    settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=_env("ENVIRONMENT", "development"),
            debug=_env_bool("DEBUG", False),
            layout=LayoutConfig.from_env(),
            validation=ValidationConfig.from_env(),
            reconciliation=ReconciliationConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "EngineConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Create config from dictionary, environment values as the base."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]
        if "debug" in data:
            config.debug = data["debug"]

        for section in ("layout", "validation", "reconciliation", "logging"):
            if section not in data:
                continue
            target = getattr(config, section)
            for key, value in data[section].items():
                if hasattr(target, key):
                    setattr(target, key, value)
            # Re-run enum coercion on the overlaid values
            if hasattr(target, "__post_init__"):
                target.__post_init__()

        if "settings" in data:
            config.settings.update(data["settings"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "layout": {
                "default_seat_type": self.layout.default_seat_type.value,
                "default_reclinement_angle": self.layout.default_reclinement_angle,
                "generated_reclinement_angle": self.layout.generated_reclinement_angle,
                "default_amenities": list(self.layout.default_amenities),
            },
            "validation": {
                "mode": self.validation.mode.value,
            },
            "reconciliation": {
                "omission_policy": self.reconciliation.omission_policy.value,
                "validate_incoming": self.reconciliation.validate_incoming,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[EngineConfig] = None


def load_config(filepath: str = None) -> EngineConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        EngineConfig instance
    """
    global _config

    if filepath:
        _config = EngineConfig.from_file(filepath)
    else:
        default_paths = [
            "./seatlayout.json",
            "./config/seatlayout.json",
            os.path.expanduser("~/.seatlayout/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = EngineConfig.from_file(path)
                return _config

        # Fall back to environment
        _config = EngineConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> EngineConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
