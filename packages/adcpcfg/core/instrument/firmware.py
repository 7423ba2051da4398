"""Firmware version codec.

The firmware version is reported as 4 bytes, least significant first:

- ``[0]`` revision
- ``[1]`` minor version
- ``[2]`` major version
- ``[3]`` hardware subsystem code
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adcpcfg.core.instrument.subsystem import EMPTY_CODE

NUM_BYTES = 4

REVISION_START = 0
MINOR_START = 1
MAJOR_START = 2
SUBSYSTEM_START = 3


class Firmware(BaseModel):
    """Firmware version of a subsystem.

    Example:
        >>> fw = Firmware.decode(bytes([3, 2, 1, ord("2")]))
        >>> str(fw)
        '1.2.3 - 2'
        >>> fw.encode() == bytes([3, 2, 1, ord("2")])
        True
    """

    model_config = ConfigDict(frozen=True)

    subsystem_code: str = Field(default=EMPTY_CODE, description="Subsystem code character")
    major: int = Field(default=0, ge=0, le=255, description="Major firmware version")
    minor: int = Field(default=0, ge=0, le=255, description="Minor firmware version")
    revision: int = Field(default=0, ge=0, le=255, description="Firmware revision")

    @field_validator("subsystem_code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if len(v) != 1 or ord(v) > 255:
            raise ValueError(f"Subsystem code must be a single byte character, got {v!r}")
        return v

    @classmethod
    def decode(cls, data: bytes | bytearray) -> Firmware:
        """Decode the firmware from its 4 byte representation.

        Raises:
            ValueError: If data is not exactly 4 bytes
        """
        if len(data) != NUM_BYTES:
            raise ValueError(f"Firmware must be {NUM_BYTES} bytes, got {len(data)}")

        return cls(
            subsystem_code=chr(data[SUBSYSTEM_START]),
            major=data[MAJOR_START],
            minor=data[MINOR_START],
            revision=data[REVISION_START],
        )

    def encode(self) -> bytes:
        result = bytearray(NUM_BYTES)
        result[MAJOR_START] = self.major
        result[MINOR_START] = self.minor
        result[REVISION_START] = self.revision
        result[SUBSYSTEM_START] = ord(self.subsystem_code)
        return bytes(result)

    @property
    def version(self) -> str:
        return f"{self.major}.{self.minor}.{self.revision}"

    def __str__(self) -> str:
        return f"{self.version} - {self.subsystem_code}"


def firmware_version_list() -> list[int]:
    """All selectable major, minor and revision values."""
    return list(range(255))


__all__ = [
    "NUM_BYTES",
    "Firmware",
    "firmware_version_list",
]
