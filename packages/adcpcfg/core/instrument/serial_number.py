"""ADCP serial number and its subsystem catalog.

The serial number is a fixed 32 character string:

- ``[0:2]``   base hardware type
- ``[2:17]``  subsystem slots, one code per slot, ``EMPTY_CODE`` when unused
- ``[17:24]`` spare
- ``[24:32]`` system serial number
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adcpcfg.core.instrument.subsystem import EMPTY_CODE, Subsystem

NUM_DIGITS = 32

BASE_START = 0
BASE_LEN = 2
SUBSYSTEM_START = 2
SUBSYSTEM_LEN = 15
SPARE_START = 17
SPARE_LEN = 7
SERIAL_START = 24
SERIAL_LEN = 8

EMPTY_SERIAL_NUMBER = "0" * NUM_DIGITS


class SerialNumber(BaseModel):
    """Serial number of an ADCP.

    Resolves subsystem codes to :class:`Subsystem` descriptors. Lookups are
    pure and always return the same result for the same serial number.

    Example:
        >>> serial = SerialNumber.from_subsystems("23", system_serial=1)
        >>> serial.subsystem_codes
        '23'
        >>> serial.subsystem_for_code("3").index
        1
        >>> serial.subsystem_for_code("9").is_empty()
        True
    """

    model_config = ConfigDict(frozen=True)

    serial_number_str: str = Field(
        default=EMPTY_SERIAL_NUMBER, description="Full 32 character serial number"
    )

    @field_validator("serial_number_str")
    @classmethod
    def validate_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) != NUM_DIGITS:
            raise ValueError(f"Serial number must be {NUM_DIGITS} characters, got {len(v)}")
        return v

    @classmethod
    def from_subsystems(
        cls, codes: str, system_serial: int = 0, base: str = "01"
    ) -> SerialNumber:
        """Build a serial number from a string of subsystem codes.

        Args:
            codes: Subsystem codes, one per slot (at most 15)
            system_serial: System serial number (0-99999999)
            base: Two character base hardware type

        Returns:
            SerialNumber with the given subsystems

        Raises:
            ValueError: If there are too many codes or the fields do not fit
        """
        if len(codes) > SUBSYSTEM_LEN:
            raise ValueError(f"At most {SUBSYSTEM_LEN} subsystems allowed, got {len(codes)}")
        if len(base) != BASE_LEN:
            raise ValueError(f"Base hardware must be {BASE_LEN} characters, got {base!r}")
        if not 0 <= system_serial < 10**SERIAL_LEN:
            raise ValueError(f"System serial number out of range: {system_serial}")

        slots = codes.ljust(SUBSYSTEM_LEN, EMPTY_CODE)
        spare = "0" * SPARE_LEN
        return cls(serial_number_str=f"{base}{slots}{spare}{system_serial:0{SERIAL_LEN}d}")

    @property
    def base_hardware(self) -> str:
        return self.serial_number_str[BASE_START : BASE_START + BASE_LEN]

    @property
    def spare(self) -> str:
        return self.serial_number_str[SPARE_START : SPARE_START + SPARE_LEN]

    @property
    def system_serial_number(self) -> int:
        """Numeric system serial number, 0 if the digits are not numeric."""
        digits = self.serial_number_str[SERIAL_START : SERIAL_START + SERIAL_LEN]
        return int(digits) if digits.isdigit() else 0

    @property
    def subsystems(self) -> list[Subsystem]:
        """All subsystems in the serial number, in slot order."""
        slots = self.serial_number_str[SUBSYSTEM_START : SUBSYSTEM_START + SUBSYSTEM_LEN]
        return [
            Subsystem(code=code, index=index)
            for index, code in enumerate(slots)
            if code != EMPTY_CODE
        ]

    @property
    def subsystem_codes(self) -> str:
        return "".join(ss.code for ss in self.subsystems)

    def subsystem_for_code(self, code: str | int) -> Subsystem:
        """Find the subsystem with the given code.

        Args:
            code: Subsystem code character or its byte value

        Returns:
            First matching Subsystem, or ``Subsystem.empty()`` if not found
        """
        if isinstance(code, int):
            if not 0 <= code <= 0xFF:
                return Subsystem.empty()
            code = chr(code)
        for ss in self.subsystems:
            if ss.code == code:
                return ss
        return Subsystem.empty()

    def has_subsystem(self, code: str | int) -> bool:
        return not self.subsystem_for_code(code).is_empty()

    def __str__(self) -> str:
        return self.serial_number_str


__all__ = [
    "EMPTY_SERIAL_NUMBER",
    "NUM_DIGITS",
    "SerialNumber",
]
