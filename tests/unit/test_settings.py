"""Tests for scical.toml settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from scical.core.errors import ConfigError
from scical.core.ir.expressions import AngleMode
from scical.core.settings import (
    EngineSettings,
    find_settings,
    load_settings,
    settings_from_dict,
)


class TestSettingsFromDict:
    def test_defaults(self) -> None:
        settings = settings_from_dict({})
        assert settings == EngineSettings()
        assert settings.max_depth == 100
        assert settings.angle_mode == AngleMode.RADIANS
        assert settings.strict_characters is False

    def test_all_keys(self) -> None:
        settings = settings_from_dict(
            {"max_depth": 10, "angle_mode": "Degrees", "strict_characters": True}
        )
        assert settings == EngineSettings(
            max_depth=10, angle_mode=AngleMode.DEGREES, strict_characters=True
        )

    def test_unknown_keys_ignored(self) -> None:
        assert settings_from_dict({"precision": 4}) == EngineSettings()

    @pytest.mark.parametrize("value", [0, -5, "10", 2.5, True])
    def test_bad_max_depth(self, value: object) -> None:
        with pytest.raises(ConfigError, match="max_depth"):
            settings_from_dict({"max_depth": value})

    def test_bad_angle_mode(self) -> None:
        with pytest.raises(ConfigError, match="angle_mode"):
            settings_from_dict({"angle_mode": "gradians"})

    def test_bad_strict_flag(self) -> None:
        with pytest.raises(ConfigError, match="strict_characters"):
            settings_from_dict({"strict_characters": "yes"})


class TestLoadSettings:
    def test_engine_table(self, settings_file) -> None:
        path = settings_file('[engine]\nmax_depth = 25\nangle_mode = "degrees"\n')
        settings = load_settings(path)
        assert settings.max_depth == 25
        assert settings.angle_mode == AngleMode.DEGREES

    def test_missing_engine_table(self, settings_file) -> None:
        path = settings_file('[other]\nkey = "value"\n')
        assert load_settings(path) == EngineSettings()

    def test_invalid_toml(self, settings_file) -> None:
        path = settings_file("[engine\nmax_depth = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_settings(tmp_path / "absent.toml")


class TestFindSettings:
    def test_no_file_gives_defaults(self, tmp_path: Path) -> None:
        assert find_settings(tmp_path) == EngineSettings()

    def test_reads_file_in_directory(self, tmp_path: Path, settings_file) -> None:
        settings_file("[engine]\nstrict_characters = true\n")
        assert find_settings(tmp_path).strict_characters is True

    def test_defaults_to_working_directory(
        self, tmp_path: Path, settings_file, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        settings_file("[engine]\nmax_depth = 7\n")
        monkeypatch.chdir(tmp_path)
        assert find_settings().max_depth == 7
