"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from adcpcfg.core.config.models import AppConfig, InstrumentConfig
from adcpcfg.core.configuration.store import AdcpConfiguration
from adcpcfg.core.utils.json import read_json
from adcpcfg.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

# Default app config path (can be overridden)
_DEFAULT_APP_CONFIG_PATH = Path("config.json")


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("adcp.json")
        'json'
        >>> detect_format("adcp.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Format is auto-detected from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected mapping in {path}, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to config.json

    Returns:
        Validated AppConfig, all defaults if the file does not exist

    Raises:
        ValidationError: If config is invalid
    """
    if path is None:
        path = _DEFAULT_APP_CONFIG_PATH

    if Path(path).exists():
        return AppConfig.model_validate(load_config(path))

    logger.debug("App config %s not found, using defaults", path)
    return AppConfig()


def load_instrument_config(path: str | Path) -> InstrumentConfig:
    """Load and validate an instrument configuration.

    Example:
        >>> cfg = load_instrument_config("adcp.yaml")
        >>> adcp = build_configuration(cfg)
    """
    return InstrumentConfig.model_validate(load_config(path))


def build_configuration(config: InstrumentConfig) -> AdcpConfiguration:
    """Create a configuration store for the instrument and apply its CEPO.

    Raises:
        ValueError: If the CEPO is not valid for the serial number
    """
    serial = config.serial
    if not AdcpConfiguration.validate_cepo(config.cepo, serial):
        raise ValueError(
            f"CEPO {config.cepo!r} is not valid for serial number {serial} "
            f"(subsystems: {serial.subsystem_codes or 'none'})"
        )

    adcp = AdcpConfiguration(serial)
    adcp.set_cepo(config.cepo, serial)
    return adcp


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )
