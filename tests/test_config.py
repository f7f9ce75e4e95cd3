"""Tests for configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pagestamp.config import Settings, get_settings, set_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    monkeypatch.chdir(temp_dir)

    settings = Settings()

    assert settings.fallback_density == 72.0
    assert settings.preview_screen_fraction == 0.8
    assert settings.output_suffix == "_sig"
    assert settings.temp_dir is None
    assert settings.log_level == "WARNING"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("PAGESTAMP_FALLBACK_DENSITY", "96")
    monkeypatch.setenv("PAGESTAMP_OUTPUT_SUFFIX", "-signed")
    monkeypatch.setenv("PAGESTAMP_TEMP_DIR", str(temp_dir))

    settings = Settings()

    assert settings.fallback_density == 96.0
    assert settings.output_suffix == "-signed"
    assert settings.temp_dir == temp_dir


@pytest.mark.parametrize(
    "overrides",
    [
        {"fallback_density": 0},
        {"preview_screen_fraction": 1.5},
        {"preview_screen_fraction": 0},
        {"log_level": "LOUD"},
        {"output_suffix": ""},
    ],
)
def test_settings_rejects_invalid_values(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_default_output_path_uses_stem() -> None:
    settings = Settings(output_suffix="_sig")

    assert settings.default_output_path(Path("/docs/contract.pdf")) == Path("/docs/contract_sig.pdf")


def test_set_settings_replaces_global(override_settings: Settings) -> None:
    replacement = Settings(fallback_density=300.0)

    set_settings(replacement)

    assert get_settings() is replacement
