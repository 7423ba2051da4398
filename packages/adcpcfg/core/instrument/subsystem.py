"""Subsystem descriptor.

A subsystem is one physical transducer/frequency combination on the ADCP.
It is identified by a single printable character, its code. The same code
is used in the serial number, in the CEPO command and in the firmware
version bytes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMPTY_CODE = "0"
"""Code of the empty subsystem (unused serial number slot / failed lookup)."""

SUBSYSTEM_DESCRIPTIONS: dict[str, str] = {
    "1": "2 MHz 4-Beam 20 Degree Piston",
    "2": "1.2 MHz 4-Beam 20 Degree Piston",
    "3": "600 kHz 4-Beam 20 Degree Piston",
    "4": "300 kHz 4-Beam 20 Degree Piston",
    "5": "2 MHz 4-Beam 20 Degree Piston, 45 Degree Offset",
    "6": "1.2 MHz 4-Beam 20 Degree Piston, 45 Degree Offset",
    "7": "600 kHz 4-Beam 20 Degree Piston, 45 Degree Offset",
    "8": "300 kHz 4-Beam 20 Degree Piston, 45 Degree Offset",
    "9": "2 MHz Vertical Piston",
    "A": "1.2 MHz Vertical Piston",
    "B": "600 kHz Vertical Piston",
    "C": "300 kHz Vertical Piston",
}


class Subsystem(BaseModel):
    """A single subsystem on the ADCP.

    Immutable once created. Equality compares both the code and the slot
    index, so two subsystems with the same code in different serial number
    slots are distinct descriptors.

    Example:
        >>> ss = Subsystem(code="2", index=0)
        >>> ss.description
        '1.2 MHz 4-Beam 20 Degree Piston'
        >>> Subsystem.empty().is_empty()
        True
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(default=EMPTY_CODE, description="Single character subsystem code")
    index: int = Field(default=0, ge=0, le=14, description="Slot index in the serial number")

    @field_validator("code", mode="before")
    @classmethod
    def coerce_code(cls, v: object) -> object:
        """Accept a byte value in place of the code character."""
        if isinstance(v, int):
            if not 0 <= v <= 0xFF:
                raise ValueError(f"Subsystem code byte out of range: {v}")
            return chr(v)
        return v

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if len(v) != 1 or not v.isprintable():
            raise ValueError(f"Subsystem code must be one printable character, got {v!r}")
        return v

    @classmethod
    def empty(cls) -> Subsystem:
        """Sentinel returned when a subsystem cannot be found."""
        return cls(code=EMPTY_CODE, index=0)

    def is_empty(self) -> bool:
        return self.code == EMPTY_CODE

    @property
    def code_byte(self) -> int:
        """Code as its single byte value."""
        return ord(self.code)

    @property
    def description(self) -> str:
        if self.is_empty():
            return "Empty"
        return SUBSYSTEM_DESCRIPTIONS.get(self.code, "Unknown")

    def __str__(self) -> str:
        return self.code


__all__ = [
    "EMPTY_CODE",
    "SUBSYSTEM_DESCRIPTIONS",
    "Subsystem",
]
