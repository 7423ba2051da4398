"""Configuration models for adcpcfg."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adcpcfg.core.instrument.commands import DEFAULT_CEPO
from adcpcfg.core.instrument.serial_number import EMPTY_SERIAL_NUMBER, NUM_DIGITS, SerialNumber


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit structured JSON log lines")
    filename: str | None = Field(default=None, description="Log file path (stdout if None)")


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class InstrumentConfig(BaseModel):
    """An ADCP described by its serial number and CEPO command.

    Example:
        >>> cfg = InstrumentConfig(
        ...     serial_number="01230000000000000000000000000001",
        ...     cepo="232",
        ... )
        >>> cfg.serial.subsystem_codes
        '23'
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Optional instrument name")
    serial_number: str = Field(
        default=EMPTY_SERIAL_NUMBER, description="32 character ADCP serial number"
    )
    cepo: str = Field(default=DEFAULT_CEPO, min_length=1, description="CEPO command value")

    @field_validator("serial_number")
    @classmethod
    def validate_serial_number(cls, v: str) -> str:
        v = v.strip()
        if len(v) != NUM_DIGITS:
            raise ValueError(f"Serial number must be {NUM_DIGITS} characters, got {len(v)}")
        return v

    @field_validator("cepo")
    @classmethod
    def strip_cepo(cls, v: str) -> str:
        return v.strip()

    @property
    def serial(self) -> SerialNumber:
        return SerialNumber(serial_number_str=self.serial_number)
