"""Command-line interface for adcpcfg."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adcpcfg.core.config.loader import (
    build_configuration,
    configure_logging,
    load_app_config,
    load_instrument_config,
)
from adcpcfg.core.configuration.store import AdcpConfiguration
from adcpcfg.core.instrument.firmware import NUM_BYTES, Firmware
from adcpcfg.core.instrument.serial_number import SerialNumber
from adcpcfg.core.utils.json import write_json
from adcpcfg.core.utils.logging import get_logger

console = Console()
logger = logging.getLogger(__name__)


def _parse_serial(value: str) -> SerialNumber | None:
    try:
        return SerialNumber(serial_number_str=value)
    except ValidationError as e:
        reason = escape(e.errors()[0]["msg"])
        console.print(f"[red]ERROR: Invalid serial number {escape(repr(value))}: {reason}[/red]")
        return None


def build_config_table(adcp: AdcpConfiguration) -> Table:
    """Build a table of the configurations in ping order."""
    table = Table(title=f"CEPO {adcp.cepo}", show_header=True)
    table.add_column("Ping", style="cyan", justify="right")
    table.add_column("Subsystem", style="yellow")
    table.add_column("Config", style="green", justify="right")
    table.add_column("Description", style="white")

    for config in adcp.configs_in_firing_order():
        table.add_row(
            str(config.firing_index),
            config.subsystem.code,
            str(config.local_index),
            config.subsystem.description,
        )

    return table


def write_configuration(path: str | Path, adcp: AdcpConfiguration) -> None:
    """Write the CEPO, serial number and configurations in ping order as JSON."""
    write_json(
        path,
        {
            "cepo": adcp.cepo,
            "serial_number": str(adcp.serial_number),
            "configs": adcp.configs_in_firing_order(),
        },
    )


def _report(args: argparse.Namespace, adcp: AdcpConfiguration) -> int:
    log = get_logger(__name__, serial_number=str(adcp.serial_number))
    log.info("CEPO %r has %d configurations", adcp.cepo, len(adcp))

    console.print(build_config_table(adcp))
    if args.output:
        write_configuration(args.output, adcp)
        log.info("Configurations written to %s", args.output)
        console.print(f"Written to {escape(str(args.output))}")
    return 0


def run_validate(args: argparse.Namespace) -> int:
    serial = _parse_serial(args.serial)
    if serial is None:
        return 1

    if AdcpConfiguration.validate_cepo(args.cepo, serial):
        console.print(f"[green]✅ CEPO {escape(repr(args.cepo))} is VALID[/green]")
        return 0

    console.print(
        f"[red]❌ CEPO {escape(repr(args.cepo))} is INVALID[/red] "
        f"(subsystems in serial number: {serial.subsystem_codes or 'none'})"
    )
    return 1


def run_decode(args: argparse.Namespace) -> int:
    serial = _parse_serial(args.serial)
    if serial is None:
        return 1

    if not AdcpConfiguration.validate_cepo(args.cepo, serial):
        console.print(
            f"[red]❌ CEPO {escape(repr(args.cepo))} is INVALID for serial number {serial}[/red]"
        )
        return 1

    adcp = AdcpConfiguration(serial)
    adcp.set_cepo(args.cepo, serial)
    return _report(args, adcp)


def run_show(args: argparse.Namespace) -> int:
    config_path = Path(args.config).resolve()
    try:
        instrument = load_instrument_config(config_path)
        adcp = build_configuration(instrument)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1

    if instrument.name:
        console.print(f"[bold]{instrument.name}[/bold] ({instrument.serial_number})")
    return _report(args, adcp)


def run_firmware(args: argparse.Namespace) -> int:
    try:
        data = bytes.fromhex(args.hex)
        firmware = Firmware.decode(data)
    except ValueError as e:
        console.print(
            f"[red]ERROR: Invalid firmware {escape(repr(args.hex))}: {escape(str(e))}[/red]"
        )
        return 1

    console.print(f"Firmware: [bold]{firmware}[/bold]")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="adcpcfg",
        description="adcpcfg - ADCP subsystem configuration from the CEPO command",
    )
    p.add_argument(
        "--app-config",
        default="config.json",
        help="Path to app config JSON/YAML (default: config.json)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    validate = sub.add_parser("validate", help="Validate a CEPO command against a serial number")
    validate.add_argument("--cepo", required=True, help="CEPO command value (e.g. 232)")
    validate.add_argument("--serial", required=True, help="32 character ADCP serial number")

    decode = sub.add_parser("decode", help="List the configurations of a CEPO command")
    decode.add_argument("--cepo", required=True, help="CEPO command value (e.g. 232)")
    decode.add_argument("--serial", required=True, help="32 character ADCP serial number")
    decode.add_argument("--output", help="Also write the configurations to this JSON file")

    show = sub.add_parser("show", help="List the configurations of an instrument config file")
    show.add_argument("--config", required=True, help="Path to instrument config JSON/YAML")
    show.add_argument("--output", help="Also write the configurations to this JSON file")

    firmware = sub.add_parser("firmware", help="Decode a firmware version")
    firmware.add_argument("hex", help=f"Firmware as {NUM_BYTES * 2} hex digits, revision first")

    return p


_COMMANDS = {
    "validate": run_validate,
    "decode": run_decode,
    "show": run_show,
    "firmware": run_firmware,
}


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    configure_logging(load_app_config(args.app_config))
    logger.debug("Running command %s", args.cmd)

    sys.exit(_COMMANDS[args.cmd](args))
