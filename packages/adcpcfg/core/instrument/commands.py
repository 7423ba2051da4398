"""ADCP command set."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CEPO = "2"
"""Default ping order: a single configuration of the 1.2 MHz subsystem."""


class AdcpCommands(BaseModel):
    """Commands sent to the ADCP.

    Only the CEPO (Ensemble Ping Order) command is tracked here. The
    configuration store keeps it in sync with its own CEPO.
    """

    model_config = ConfigDict(validate_assignment=True)

    cepo: str = Field(default=DEFAULT_CEPO, description="CEPO command value")


__all__ = [
    "DEFAULT_CEPO",
    "AdcpCommands",
]
