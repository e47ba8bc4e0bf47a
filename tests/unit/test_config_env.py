"""Tests for configuration defaults and environment overlays."""

from __future__ import annotations

import logging

import pytest

from config import DEFAULT_WRITE_PROFILES, EsArrowConfig, config_from_env
from test_support.document_generator import DEFAULT_LIST_PROBABILITY

_ENV_VARS = (
    "ESARROW_WRITE_PROFILE",
    "ESARROW_SAMPLE_SIZE",
    "ESARROW_LIST_PROBABILITY",
    "ESARROW_SEED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment() -> None:
    """Use built-in defaults when no variables are set."""
    config = config_from_env()
    assert config == EsArrowConfig()
    assert config.list_probability == DEFAULT_LIST_PROBABILITY
    assert config.resolved_write_options().compression == "snappy"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Overlay every supported variable."""
    monkeypatch.setenv("ESARROW_WRITE_PROFILE", " compact ")
    monkeypatch.setenv("ESARROW_SAMPLE_SIZE", "25")
    monkeypatch.setenv("ESARROW_LIST_PROBABILITY", "0.5")
    monkeypatch.setenv("ESARROW_SEED", "42")
    config = config_from_env()
    assert config.sample_size == 25
    assert config.list_probability == 0.5
    assert config.seed == 42
    assert config.resolved_write_options() == DEFAULT_WRITE_PROFILES["COMPACT"]


def test_invalid_values_fall_back_with_warning(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Keep the base value and log invalid numbers."""
    monkeypatch.setenv("ESARROW_SAMPLE_SIZE", "many")
    base = EsArrowConfig(sample_size=3)
    with caplog.at_level(logging.WARNING):
        config = config_from_env(base)
    assert config.sample_size == 3
    assert "Invalid int for ESARROW_SAMPLE_SIZE" in caplog.text


def test_unknown_profile_raises_key_error() -> None:
    """Refuse unknown write profiles."""
    with pytest.raises(KeyError, match="FAST"):
        EsArrowConfig(write_profile="FAST").resolved_write_options()


def test_none_profile_disables_compression() -> None:
    """Write uncompressed pages without dictionaries."""
    options = EsArrowConfig(write_profile="none").resolved_write_options()
    assert options.compression is None
    assert not options.use_dictionary
