"""Tests for JSON utility functions."""

from __future__ import annotations

from pathlib import Path

import pytest

from adcpcfg.core.instrument import Subsystem
from adcpcfg.core.utils.json import read_json, write_json


@pytest.fixture
def temp_json_file(tmp_path):
    """Create a temporary JSON file path."""
    return tmp_path / "test.json"


def test_write_and_read_json(temp_json_file):
    data = {"cepo": "232", "count": 3, "nested": {"key": "value"}}

    write_json(temp_json_file, data)

    assert read_json(temp_json_file) == data


def test_write_json_creates_parent_dirs(tmp_path):
    nested_path = tmp_path / "subdir" / "nested" / "test.json"

    write_json(nested_path, {"test": "value"})

    assert nested_path.exists()


def test_write_json_special_types(temp_json_file):
    write_json(
        temp_json_file,
        {
            "path": Path("/tmp/adcp"),
            "subsystem": Subsystem(code="3", index=1),
            "firmware": b"\x01\x02\x00\x32",
        },
    )

    assert read_json(temp_json_file) == {
        "path": "/tmp/adcp",
        "subsystem": {"code": "3", "index": 1},
        "firmware": "01020032",
    }


def test_read_json_requires_object(temp_json_file):
    temp_json_file.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ValueError, match="Expected JSON object"):
        read_json(temp_json_file)
