"""
Test Suite - Basic Sanity Tests

These tests verify that the package structure is correct
and that basic imports work.

Run with: pytest tests/test_sanity.py -v
"""

import pytest


class TestPackageStructure:
    """Test that all packages can be imported."""

    def test_import_cubby(self):
        """Test that main package can be imported."""
        import cubby
        assert hasattr(cubby, "__version__")
        assert cubby.__version__ == "0.1.0"

    def test_import_data_package(self):
        import cubby.data
        assert hasattr(cubby.data, "parse")

    def test_import_rules_package(self):
        import cubby.rules
        assert hasattr(cubby.rules, "classify_name")

    def test_import_index_package(self):
        import cubby.index
        assert hasattr(cubby.index, "BankIndex")

    def test_import_project_package(self):
        import cubby.project
        assert hasattr(cubby.project, "generate_rpp")

    def test_import_protocol_package(self):
        import cubby.protocol
        assert hasattr(cubby.protocol, "decode_message")

    def test_import_app_package(self):
        from cubby.app import cli
        assert callable(cli.main)


class TestErrors:
    """All package errors share one base class."""

    def test_hierarchy(self):
        from cubby.errors import ConfigError, CubbyError, ProtocolError, ReabankLoadError
        for error in (ConfigError, ProtocolError, ReabankLoadError):
            assert issubclass(error, CubbyError)

    def test_catchable_as_base(self):
        from cubby.errors import CubbyError, ReabankLoadError
        with pytest.raises(CubbyError):
            raise ReabankLoadError("missing")


class TestDefaultConfig:
    """The packaged defaults file ships with the package."""

    def test_default_config_exists(self):
        from cubby.app.config import DEFAULT_CFG_PATH
        assert DEFAULT_CFG_PATH.exists()
