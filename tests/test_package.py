"""Basic tests to validate package structure and imports."""

from importlib import import_module

import structmask


def test_package_imports():
    """Test that all package modules can be imported."""
    assert structmask.__version__ == "0.1.0"

    import_module("structmask.core")
    import_module("structmask.strategies")
    import_module("structmask.observability")
    import_module("structmask.engine")
    import_module("structmask.registry")
    import_module("structmask.config")


def test_public_names_are_exported():
    """Every name in __all__ resolves on the package."""
    for name in structmask.__all__:
        assert hasattr(structmask, name), name


def test_version_consistency():
    assert len(structmask.__version__.split(".")) == 3
