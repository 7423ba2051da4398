"""Test suite for adcpcfg.

Test Structure:
- unit/: Unit tests for individual components
  - instrument/: Subsystem, serial number and firmware descriptors
  - configuration/: Configuration records and the CEPO configuration store
  - config/: Config file loading
  - utils/: Logging and JSON helpers
  - cli/: Command-line interface
- fixtures/: Test data files
- conftest.py: Shared fixtures
"""
