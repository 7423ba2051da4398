"""ADCP subsystem configuration derived from the CEPO command."""

from adcpcfg.core.configuration.models import (
    AdcpSubsystemConfig,
    ConfigKey,
    DuplicateConfigError,
    config_key,
)
from adcpcfg.core.configuration.store import AdcpConfiguration

__all__ = [
    "AdcpConfiguration",
    "AdcpSubsystemConfig",
    "ConfigKey",
    "DuplicateConfigError",
    "config_key",
]
