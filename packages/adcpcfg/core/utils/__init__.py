"""Shared utilities for adcpcfg."""

from adcpcfg.core.utils.json import read_json, write_json
from adcpcfg.core.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "read_json",
    "write_json",
]
