"""Configuration management for adcpcfg."""

from adcpcfg.core.config.loader import (
    build_configuration,
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
    load_instrument_config,
)
from adcpcfg.core.config.models import AppConfig, InstrumentConfig, LoggingConfig

__all__ = [
    # Loaders
    "load_config",
    "load_app_config",
    "load_instrument_config",
    "build_configuration",
    "configure_logging",
    "detect_format",
    # Models
    "AppConfig",
    "InstrumentConfig",
    "LoggingConfig",
]
