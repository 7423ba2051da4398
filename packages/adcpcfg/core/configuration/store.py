"""ADCP configuration store.

Keeps track of which subsystem configurations exist on the ADCP. Each ADCP
has N subsystems and M configurations per subsystem; at the very least it
has one subsystem with one configuration. The configuration is defined by
the CEPO (Ensemble Ping Order) command:

    CEPO 222  -> 1 subsystem, 3 configurations of subsystem 2
    CEPO 232  -> 2 subsystems, 2 configurations of subsystem 2 and
                 1 configuration of subsystem 3

The position of a code in the CEPO command is the configuration's place in
the ping order (its firing index). The n-th occurrence of a code is that
subsystem's n-th configuration (its local index).
"""

from __future__ import annotations

import logging

from adcpcfg.core.configuration.models import (
    AdcpSubsystemConfig,
    ConfigKey,
    DuplicateConfigError,
    config_key,
)
from adcpcfg.core.instrument.commands import DEFAULT_CEPO, AdcpCommands
from adcpcfg.core.instrument.serial_number import SerialNumber
from adcpcfg.core.instrument.subsystem import Subsystem

logger = logging.getLogger(__name__)


def _insert(configs: dict[ConfigKey, AdcpSubsystemConfig], config: AdcpSubsystemConfig) -> None:
    key = config.key
    if key in configs:
        raise DuplicateConfigError(f"Configuration {config} already exists")
    configs[key] = config


def _count_configs(configs: dict[ConfigKey, AdcpSubsystemConfig], code: str) -> int:
    """Number of configurations for the subsystem code."""
    return sum(1 for config in configs.values() if config.subsystem.code == code)


class AdcpConfiguration:
    """Subsystem configurations of an ADCP, derived from its CEPO command.

    The store owns the CEPO string, the serial number used to resolve
    subsystem codes, and the configuration records keyed by
    ``(subsystem code, local index)``. Every mutation builds the new CEPO and
    record mapping first and publishes both together.

    Not thread safe. Callers sharing a store between threads must lock.

    Example:
        >>> serial = SerialNumber.from_subsystems("23")
        >>> adcp = AdcpConfiguration(serial)
        >>> configs = adcp.set_cepo("232", serial)
        >>> [str(c) for c in adcp.configs_in_firing_order()]
        ['2-0', '3-0', '2-1']
        >>> adcp.remove_config(adcp.get_config(serial.subsystem_for_code("2"), 0))
        True
        >>> adcp.cepo
        '32'
    """

    def __init__(
        self,
        serial_number: SerialNumber | None = None,
        commands: AdcpCommands | None = None,
    ) -> None:
        self._configs: dict[ConfigKey, AdcpSubsystemConfig] = {}
        self._commands = commands if commands is not None else AdcpCommands()
        self._serial_number = serial_number if serial_number is not None else SerialNumber()
        self._cepo = DEFAULT_CEPO
        self._commands.cepo = DEFAULT_CEPO

    @property
    def cepo(self) -> str:
        """CEPO command defining the configuration."""
        return self._cepo

    @property
    def serial_number(self) -> SerialNumber:
        return self._serial_number

    @property
    def commands(self) -> AdcpCommands:
        return self._commands

    @property
    def subsystem_configs(self) -> dict[ConfigKey, AdcpSubsystemConfig]:
        """Copy of all configurations. Iteration order is not the ping order."""
        return dict(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def _publish(self, cepo: str, configs: dict[ConfigKey, AdcpSubsystemConfig]) -> None:
        self._cepo = cepo
        self._configs = configs
        self._commands.cepo = cepo

    # ------------------------------------------------------------------
    # CEPO
    # ------------------------------------------------------------------

    @staticmethod
    def validate_cepo(cepo: str | None, serial: SerialNumber | None) -> bool:
        """Check every code in the CEPO exists as a subsystem in the serial number.

        Args:
            cepo: CEPO command value
            serial: Serial number of the ADCP

        Returns:
            True if the CEPO is valid, False if it is empty or any code is
            not a subsystem in the serial number
        """
        if not cepo or serial is None:
            return False

        codes = {ss.code for ss in serial.subsystems}
        for position, code in enumerate(cepo):
            if code not in codes:
                logger.debug(
                    "CEPO %r invalid: '%s' at position %d not in serial number %s",
                    cepo,
                    code,
                    position,
                    serial,
                )
                return False

        return True

    def _decode(
        self, cepo: str, serial: SerialNumber
    ) -> tuple[str, dict[ConfigKey, AdcpSubsystemConfig]]:
        codes: list[str] = []
        configs: dict[ConfigKey, AdcpSubsystemConfig] = {}

        for position, code in enumerate(cepo):
            ss = serial.subsystem_for_code(code)
            if ss.is_empty():
                # Unresolved codes produce no configuration and no ping
                logger.warning(
                    "Subsystem '%s' at CEPO position %d not in serial number %s, skipped",
                    code,
                    position,
                    serial,
                )
                continue

            config = AdcpSubsystemConfig(
                subsystem=ss,
                local_index=_count_configs(configs, ss.code),
                firing_index=len(codes),
            )
            _insert(configs, config)
            codes.append(ss.code)

        return "".join(codes), configs

    def decode_cepo(
        self, cepo: str, serial: SerialNumber
    ) -> dict[ConfigKey, AdcpSubsystemConfig]:
        """Replace all configurations with the ones described by the CEPO.

        Unlike ``set_cepo`` the CEPO is not validated first. Codes not found
        in the serial number are skipped and dropped from the ping order, so
        the stored CEPO is the decoded codes only. The serial number, CEPO
        and configurations are published together.

        Args:
            cepo: CEPO command to decode
            serial: Serial number used to resolve the subsystem codes

        Returns:
            Copy of the new configurations
        """
        decoded, configs = self._decode(cepo, serial)
        self._serial_number = serial
        self._publish(decoded, configs)
        logger.debug("CEPO %r decoded as %r (%d configurations)", cepo, decoded, len(configs))

        return self.subsystem_configs

    def set_cepo(
        self, cepo: str, serial: SerialNumber
    ) -> dict[ConfigKey, AdcpSubsystemConfig]:
        """Validate and apply a CEPO command.

        On success the CEPO and serial number are adopted and the
        configurations decoded. Setting the serial number here does not
        reset the configuration. On failure nothing changes.

        Returns:
            Copy of the current configurations
        """
        if not self.validate_cepo(cepo, serial):
            logger.warning("CEPO %r rejected for serial number %s", cepo, serial)
            return self.subsystem_configs

        cepo, configs = self._decode(cepo, serial)
        self._serial_number = serial
        self._publish(cepo, configs)
        logger.debug("CEPO set to %r (%d configurations)", cepo, len(configs))

        return self.subsystem_configs

    def configs_in_firing_order(self) -> list[AdcpSubsystemConfig]:
        return sorted(self._configs.values(), key=lambda config: config.firing_index)

    def regenerate_cepo(self) -> str:
        """Build the CEPO command from the configurations' ping order."""
        return "".join(config.subsystem.code for config in self.configs_in_firing_order())

    # ------------------------------------------------------------------
    # Serial number
    # ------------------------------------------------------------------

    def apply_new_serial(self, serial: SerialNumber) -> bool:
        """Change the serial number.

        A different serial number invalidates the configuration: the CEPO is
        reset to the default and all configurations are dropped. The old CEPO
        is not revalidated against the new serial number.

        Returns:
            True if the configuration was reset, False if the serial number
            was unchanged
        """
        if serial == self._serial_number:
            return False

        logger.debug(
            "Serial number changed %s -> %s, configuration reset",
            self._serial_number,
            serial,
        )
        self._serial_number = serial
        self._publish(DEFAULT_CEPO, {})
        return True

    # ------------------------------------------------------------------
    # Configurations
    # ------------------------------------------------------------------

    def config_exists(self, subsystem: Subsystem | None, local_index: int | None) -> bool:
        if subsystem is None or local_index is None or subsystem.is_empty():
            return False
        return config_key(subsystem, local_index) in self._configs

    def get_config(
        self, subsystem: Subsystem | None, local_index: int | None
    ) -> AdcpSubsystemConfig | None:
        """Get a configuration by subsystem and local index.

        Returns:
            The configuration, or None if it does not exist
        """
        if subsystem is None or local_index is None or subsystem.is_empty():
            return None
        return self._configs.get(config_key(subsystem, local_index))

    def add_config(
        self, subsystem: Subsystem | None
    ) -> tuple[bool, AdcpSubsystemConfig | None]:
        """Add a new configuration for the subsystem at the end of the ping order.

        The subsystem code is appended to the CEPO and the result is
        revalidated against the current serial number. While the store holds
        no configurations its CEPO is only the default placeholder, so the
        new CEPO is the subsystem code alone.

        Args:
            subsystem: Subsystem to add a configuration for

        Returns:
            Tuple of (added, configuration). On failure the configuration is
            None and the store is unchanged.
        """
        if subsystem is None or subsystem.is_empty():
            return False, None

        base = self._cepo if self._configs else ""
        cepo = base + subsystem.code
        if not self.validate_cepo(cepo, self._serial_number):
            logger.warning(
                "Cannot add subsystem '%s': not in serial number %s",
                subsystem.code,
                self._serial_number,
            )
            return False, None

        ss = self._serial_number.subsystem_for_code(subsystem.code)
        local_index = _count_configs(self._configs, ss.code)
        if config_key(ss, local_index) in self._configs:
            # Left behind by a removal, local indexes are not renumbered
            logger.warning(
                "Cannot add subsystem '%s': configuration %s-%d already exists",
                ss.code,
                ss.code,
                local_index,
            )
            return False, None

        config = AdcpSubsystemConfig(
            subsystem=ss,
            local_index=local_index,
            firing_index=len(cepo) - 1,
        )
        configs = dict(self._configs)
        _insert(configs, config)
        self._publish(cepo, configs)
        logger.debug("Added configuration %s, CEPO now %r", config, cepo)

        return True, config

    def remove_config(self, config: AdcpSubsystemConfig | None) -> bool:
        """Remove a configuration and renumber the ping order.

        The remaining configurations are collected in ping order and copied
        with consecutive firing indexes while the CEPO is rebuilt. Local
        indexes are kept as they are, so a subsystem can be left with a gap
        in its local indexes.

        Records handed out before the removal are not updated. Look them up
        again with ``get_config`` to see the new firing index.

        Returns:
            True if removed, False if the configuration did not exist
        """
        if config is None:
            return False

        key = config.key
        if key not in self._configs:
            return False

        survivors = sorted(
            (c for k, c in self._configs.items() if k != key),
            key=lambda c: c.firing_index,
        )

        codes: list[str] = []
        configs: dict[ConfigKey, AdcpSubsystemConfig] = {}
        for firing_index, survivor in enumerate(survivors):
            codes.append(survivor.subsystem.code)
            _insert(configs, survivor.model_copy(update={"firing_index": firing_index}))

        cepo = "".join(codes)
        self._publish(cepo, configs)
        logger.debug("Removed configuration %s, CEPO now %r", config, cepo)

        return True


__all__ = [
    "AdcpConfiguration",
]
