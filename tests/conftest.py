"""Shared fixtures for StructMask tests."""

from collections.abc import Generator

import pytest

from structmask import MaskingConfig, StrategyRegistry, StructMasker, reset_config
from tests.utils.records import ExampleRecord, WalletModel, build_example_record, build_wallet


@pytest.fixture
def config() -> MaskingConfig:
    """Default configuration, independent of the environment."""
    return MaskingConfig()


@pytest.fixture
def registry() -> StrategyRegistry:
    """Registry seeded with the built-in strategies."""
    return StrategyRegistry()


@pytest.fixture
def masker(registry: StrategyRegistry, config: MaskingConfig) -> StructMasker:
    """Engine with default settings."""
    return StructMasker(registry=registry, config=config)


@pytest.fixture
def example_record() -> ExampleRecord:
    """Fully populated record with nested and optional children."""
    return build_example_record()


@pytest.fixture
def wallet() -> WalletModel:
    """Pydantic record with an absent optional child."""
    return build_wallet()


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep the process default configuration and environment out of tests."""
    for key in (
        "STRUCTMASK_MASK_CHAR",
        "STRUCTMASK_LOG_LEVEL",
        "STRUCTMASK_LOG_FORMAT",
        "STRUCTMASK_LOG_TRACING",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()
