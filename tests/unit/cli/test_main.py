"""Unit tests for the command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import pytest

from adcpcfg.cli.main import (
    _report,
    build_arg_parser,
    build_config_table,
    main,
    write_configuration,
)
from adcpcfg.core.configuration import AdcpConfiguration
from adcpcfg.core.instrument import SerialNumber

SERIAL_23 = "01230000000000000000000000000001"


def run_cli(argv: list[str], tmp_path: Path) -> int:
    """Run the CLI and return its exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--app-config", str(tmp_path / "missing.json"), *argv])
    return exc_info.value.code


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_arg_parser().parse_args([])


def test_config_table_rows(adcp: AdcpConfiguration) -> None:
    table = build_config_table(adcp)
    assert table.row_count == 3
    assert table.title == "CEPO 232"


class TestValidateCommand:
    def test_valid(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_cli(["validate", "--cepo", "232", "--serial", SERIAL_23], tmp_path)
        assert code == 0
        assert "VALID" in capsys.readouterr().out

    def test_invalid(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_cli(["validate", "--cepo", "29", "--serial", SERIAL_23], tmp_path)
        assert code == 1
        assert "INVALID" in capsys.readouterr().out

    def test_bad_serial(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_cli(["validate", "--cepo", "2", "--serial", "0123"], tmp_path)
        assert code == 1
        assert "Invalid serial number" in capsys.readouterr().out


class TestDecodeCommand:
    def test_decode(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_cli(["decode", "--cepo", "232", "--serial", SERIAL_23], tmp_path)
        out = capsys.readouterr().out
        assert code == 0
        assert "CEPO 232" in out
        assert "600 kHz" in out

    def test_decode_invalid(self, tmp_path: Path) -> None:
        assert run_cli(["decode", "--cepo", "4", "--serial", SERIAL_23], tmp_path) == 1

    def test_decode_output(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "adcp.json"
        argv = ["decode", "--cepo", "232", "--serial", SERIAL_23, "--output", str(output)]
        assert run_cli(argv, tmp_path) == 0

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["cepo"] == "232"
        assert data["serial_number"] == SERIAL_23
        assert [(c["subsystem"]["code"], c["local_index"]) for c in data["configs"]] == [
            ("2", 0),
            ("3", 0),
            ("2", 1),
        ]

    def test_decode_invalid_writes_nothing(self, tmp_path: Path) -> None:
        output = tmp_path / "adcp.json"
        argv = ["decode", "--cepo", "4", "--serial", SERIAL_23, "--output", str(output)]
        assert run_cli(argv, tmp_path) == 1
        assert not output.exists()


class TestShowCommand:
    def test_show(
        self, tmp_path: Path, fixtures_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run_cli(["show", "--config", str(fixtures_dir / "adcp_232.yaml")], tmp_path)
        out = capsys.readouterr().out
        assert code == 0
        assert "Dual Frequency ADCP" in out

    def test_show_output(self, tmp_path: Path, fixtures_dir: Path) -> None:
        output = tmp_path / "adcp.json"
        argv = ["show", "--config", str(fixtures_dir / "adcp_232.yaml"), "--output", str(output)]
        assert run_cli(argv, tmp_path) == 0
        assert json.loads(output.read_text(encoding="utf-8"))["cepo"] == "232"

    def test_show_missing_file(self, tmp_path: Path) -> None:
        assert run_cli(["show", "--config", str(tmp_path / "nope.yaml")], tmp_path) == 1

    def test_show_invalid_cepo(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_file = tmp_path / "adcp.json"
        config_file.write_text(
            f'{{"serial_number": "{SERIAL_23}", "cepo": "244"}}', encoding="utf-8"
        )
        assert run_cli(["show", "--config", str(config_file)], tmp_path) == 1
        assert "not valid" in capsys.readouterr().out


class TestFirmwareCommand:
    def test_firmware(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(["firmware", "03020132"], tmp_path) == 0
        assert "1.2.3 - 2" in capsys.readouterr().out

    def test_firmware_bad_hex(self, tmp_path: Path) -> None:
        assert run_cli(["firmware", "zz"], tmp_path) == 1
        assert run_cli(["firmware", "0102"], tmp_path) == 1


def test_decode_matches_store(serial_23: SerialNumber) -> None:
    """The table lists configurations in ping order."""
    adcp = AdcpConfiguration(serial_23)
    adcp.set_cepo("3223", serial_23)
    table = build_config_table(adcp)
    assert list(table.columns[1].cells) == ["3", "2", "2", "3"]


def test_write_configuration_firing_order(tmp_path: Path, serial_23: SerialNumber) -> None:
    adcp = AdcpConfiguration(serial_23)
    adcp.set_cepo("3223", serial_23)
    output = tmp_path / "adcp.json"

    write_configuration(output, adcp)

    data = json.loads(output.read_text(encoding="utf-8"))
    assert [c["firing_index"] for c in data["configs"]] == [0, 1, 2, 3]
    assert data["configs"][0]["subsystem"] == {"code": "3", "index": 1}


def test_report_logs_serial_number(
    adcp: AdcpConfiguration, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="adcpcfg.cli.main"):
        assert _report(argparse.Namespace(output=None), adcp) == 0

    record = next(r for r in caplog.records if "configurations" in r.getMessage())
    assert record.serial_number == str(adcp.serial_number)
