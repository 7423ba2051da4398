"""Subsystem configuration records."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from adcpcfg.core.instrument.subsystem import Subsystem


class ConfigKey(NamedTuple):
    """Unique key of a subsystem configuration."""

    code: str
    local_index: int


class DuplicateConfigError(KeyError):
    """Raised when a configuration key is inserted twice."""


def config_key(subsystem: Subsystem, local_index: int) -> ConfigKey:
    """Derive the key for a subsystem and its configuration index."""
    return ConfigKey(subsystem.code, local_index)


class AdcpSubsystemConfig(BaseModel):
    """One independent configuration of a subsystem.

    Attributes:
        subsystem: Subsystem the configuration runs on
        local_index: Index of this configuration among configurations of the
            same subsystem (0 for the first, 1 for the second, ...)
        firing_index: Position of the configuration in the CEPO command,
            which is its place in the ping order

    Example:
        >>> cfg = AdcpSubsystemConfig(subsystem=Subsystem(code="2"), local_index=1, firing_index=2)
        >>> cfg.key
        ConfigKey(code='2', local_index=1)
        >>> str(cfg)
        '2-1'
    """

    model_config = ConfigDict(validate_assignment=True)

    subsystem: Subsystem = Field(..., description="Subsystem for the configuration")
    local_index: int = Field(default=0, ge=0, description="Index within the subsystem")
    firing_index: int = Field(default=0, ge=0, description="Position in the CEPO command")

    @property
    def key(self) -> ConfigKey:
        return config_key(self.subsystem, self.local_index)

    def __str__(self) -> str:
        return f"{self.subsystem.code}-{self.local_index}"


__all__ = [
    "AdcpSubsystemConfig",
    "ConfigKey",
    "DuplicateConfigError",
    "config_key",
]
