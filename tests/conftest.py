"""Shared pytest fixtures for adcpcfg tests."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path

import pytest

from adcpcfg.core.configuration import AdcpConfiguration
from adcpcfg.core.instrument import SerialNumber, Subsystem


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = [h for h in root.handlers if not _is_pytest_handler(h)]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers and not _is_pytest_handler(handler):
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def _is_pytest_handler(handler: logging.Handler) -> bool:
    # pytest attaches its own capture handlers around every test phase
    return type(handler).__module__.startswith("_pytest")


# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Get test fixtures directory."""
    return Path(__file__).parent / "fixtures"


# ============================================================================
# Instrument Fixtures
# ============================================================================


@pytest.fixture
def serial_23() -> SerialNumber:
    """Serial number with a 1.2 MHz ('2') and a 600 kHz ('3') subsystem."""
    return SerialNumber.from_subsystems("23", system_serial=1)


@pytest.fixture
def serial_4() -> SerialNumber:
    """Serial number with only a 300 kHz ('4') subsystem."""
    return SerialNumber.from_subsystems("4", system_serial=2)


@pytest.fixture
def ss2(serial_23: SerialNumber) -> Subsystem:
    return serial_23.subsystem_for_code("2")


@pytest.fixture
def ss3(serial_23: SerialNumber) -> Subsystem:
    return serial_23.subsystem_for_code("3")


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def adcp(serial_23: SerialNumber) -> AdcpConfiguration:
    """Store with CEPO 232 applied."""
    config = AdcpConfiguration(serial_23)
    config.set_cepo("232", serial_23)
    return config
