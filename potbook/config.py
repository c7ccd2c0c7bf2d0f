"""Configuration file management for potbook."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from potbook.domain.models import DEFAULT_POT_LABELS, POT_A, POT_B, POT_IDS, Pot, PotId
from potbook.errors import ConfigError

DEFAULT_STORAGE_KEY = "budget-helper-monthly-v1"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "potbook" / "config.toml"


def default_config() -> dict[str, Any]:
    """Return the default configuration dictionary."""
    return {
        "storage_key": DEFAULT_STORAGE_KEY,
        "clean_install": False,
        "currency_symbol": "€",
        "pots": {
            POT_A: {"name": DEFAULT_POT_LABELS[POT_A], "starting_budget": 300.0},
            POT_B: {"name": DEFAULT_POT_LABELS[POT_B], "starting_budget": 200.0},
        },
    }


@dataclass(frozen=True)
class Settings:
    """Resolved configuration."""

    storage_key: str = DEFAULT_STORAGE_KEY
    clean_install: bool = False
    currency_symbol: str = "€"
    pots: dict[PotId, Pot] = field(default_factory=dict)

    def bootstrap_pots(self) -> dict[PotId, Pot]:
        """Pots of the first month of a fresh ledger.

        A clean install keeps the names but starts every budget at zero.
        """
        pots = self.pots or settings_from_dict(default_config()).pots
        return {
            pot_id: Pot(name=pot.name, starting_budget=0.0 if self.clean_install else pot.starting_budget)
            for pot_id, pot in pots.items()
        }


def settings_from_dict(config: dict[str, Any]) -> Settings:
    """Build Settings from a configuration dictionary, filling in defaults.

    Args:
        config: Parsed configuration (may be partial).

    Returns:
        Resolved settings.

    Raises:
        ConfigError: If a present key holds a value of the wrong type.
    """
    defaults = default_config()
    raw_pots = config.get("pots", {})
    if not isinstance(raw_pots, dict):
        raise ConfigError("[pots] must be a table")

    pots: dict[PotId, Pot] = {}
    for pot_id in POT_IDS:
        default_pot = defaults["pots"][pot_id]
        raw_pot = raw_pots.get(pot_id, {})
        if not isinstance(raw_pot, dict):
            raise ConfigError(f"[pots.{pot_id}] must be a table")
        raw_budget = raw_pot.get("starting_budget", default_pot["starting_budget"])
        try:
            starting_budget = float(raw_budget)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"pots.{pot_id}.starting_budget must be a number, got {raw_budget!r}") from e
        pots[pot_id] = Pot(name=str(raw_pot.get("name", default_pot["name"])), starting_budget=starting_budget)

    return Settings(
        storage_key=str(config.get("storage_key", defaults["storage_key"])),
        clean_install=bool(config.get("clean_install", defaults["clean_install"])),
        currency_symbol=str(config.get("currency_symbol", defaults["currency_symbol"])),
        pots=pots,
    )


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when the config file is missing.

    Raises:
        ConfigError: If the file is not valid TOML or holds an unusable value.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path or get_config_path()}: {e}") from e
    return settings_from_dict(config)
