"""Tests for potbook.config."""

import os
from pathlib import Path

import pytest

from potbook.config import create_default_config, get_config_path, load_config, load_settings, settings_from_dict
from potbook.domain.models import POT_A, POT_B, Pot
from potbook.errors import ConfigError


class TestConfigFile:
    """Tests for config file handling."""

    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "potbook" / "config.toml"

    def test_create_default_config(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"

        create_default_config(path)

        assert oct(os.stat(path).st_mode & 0o777) == "0o600"
        assert load_config(path)["storage_key"] == "budget-helper-monthly-v1"

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "absent.toml")

        assert settings.currency_symbol == "€"
        assert settings.pots[POT_A] == Pot("Topf A", 300.0)

    def test_invalid_toml_raises_config_error(self, tmp_path: Path) -> None:
        """Should report a broken file as ConfigError instead of a parser traceback."""
        path = tmp_path / "config.toml"
        path.write_text("storage_key = \n")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_bad_value_in_file_raises_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[pots.potA]\nstarting_budget = "lots"\n')

        with pytest.raises(ConfigError):
            load_settings(path)


class TestSettings:
    """Tests for settings_from_dict."""

    def test_partial_config(self) -> None:
        settings = settings_from_dict({"pots": {"potB": {"name": "Fun"}}})

        assert settings.pots[POT_B] == Pot("Fun", 200.0)
        assert settings.pots[POT_A] == Pot("Topf A", 300.0)

    def test_clean_install_zeroes_bootstrap_budgets(self) -> None:
        settings = settings_from_dict({"clean_install": True})

        pots = settings.bootstrap_pots()

        assert pots == {POT_A: Pot("Topf A", 0.0), POT_B: Pot("Topf B", 0.0)}

    def test_non_numeric_budget_rejected(self) -> None:
        """Should raise ConfigError naming the offending key."""
        with pytest.raises(ConfigError, match="pots.potA.starting_budget"):
            settings_from_dict({"pots": {"potA": {"starting_budget": "lots"}}})

    @pytest.mark.parametrize("pots", [{"potA": "Food"}, ["potA"]])
    def test_pots_must_be_tables(self, pots: object) -> None:
        with pytest.raises(ConfigError):
            settings_from_dict({"pots": pots})
