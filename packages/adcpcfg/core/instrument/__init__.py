"""Instrument descriptors: subsystems, serial number, firmware and commands."""

from adcpcfg.core.instrument.commands import DEFAULT_CEPO, AdcpCommands
from adcpcfg.core.instrument.firmware import Firmware, firmware_version_list
from adcpcfg.core.instrument.serial_number import EMPTY_SERIAL_NUMBER, SerialNumber
from adcpcfg.core.instrument.subsystem import EMPTY_CODE, SUBSYSTEM_DESCRIPTIONS, Subsystem

__all__ = [
    "DEFAULT_CEPO",
    "EMPTY_CODE",
    "EMPTY_SERIAL_NUMBER",
    "SUBSYSTEM_DESCRIPTIONS",
    "AdcpCommands",
    "Firmware",
    "SerialNumber",
    "Subsystem",
    "firmware_version_list",
]
