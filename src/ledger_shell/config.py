# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Filesystem discovery and configuration loading for LedgerShell.

Handles:
- Data root resolution (LEDGER_DATA_HOME, ~/.local/share)
- Ledger file and crash log paths
- Packaged YAML defaults loading (ledger_shell.defaults/*.yaml)
- ANSI coloring constants
"""

from __future__ import annotations

import os
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml

# -----------------------
# UI constants
# -----------------------

ANSI_COLORS: dict[str, str] = {
    "cyan": "\033[38;5;69;1m",
    "pink": "\033[38;5;169;1m",
    "magenta": "\033[38;5;126;1m",
    "yellow": "\033[38;5;226;1m",
    "node_green": "\033[38;5;40;1m",
    "reset": "\033[0m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "red": "\033[31m",
}

APP_DIR_NAME = "ledger_shell"
DEFAULT_LEDGER_FILENAME = "ledger.db"


# -----------------------
# Config model wrapper
# -----------------------


class YAMLConfig:
    """Simple config wrapper that implements ConfigModel protocol."""

    def __init__(self, config_dict: dict[str, Any]):
        self._config = config_dict

    @property
    def system(self) -> dict[str, Any]:
        return self._config.get("system", {})

    def get_path(self, path: str, default: Any = None) -> Any:
        """
        Nested lookup using dot-separated path.
        Example: get_path("history.max_length", 100)
        """
        if not path:
            return default

        cur: Any = self._config
        for part in path.split("."):
            if not isinstance(cur, dict):
                return default
            if part not in cur:
                return default
            cur = cur[part]
        return cur


def prompt_string(cfg: YAMLConfig) -> str:
    """Build the colored prompt (with trailing space) from config."""
    text = str(cfg.get_path("prompt.text", ">"))
    color = ANSI_COLORS.get(
        str(cfg.get_path("prompt.color", "reset")), ANSI_COLORS["reset"]
    )
    return f"{color}{text}{ANSI_COLORS['reset']} "


# -----------------------
# Data root + file helpers
# -----------------------


def get_data_root() -> Path:
    """Get the data root directory for LedgerShell.

    Resolution order:
    1. LEDGER_DATA_HOME environment variable (if set)
    2. ~/.local/share (default, XDG_DATA_HOME is ignored)
    """
    ledger_data_home = os.getenv("LEDGER_DATA_HOME")
    if ledger_data_home:
        root = Path(ledger_data_home)
    else:
        root = Path.home() / ".local" / "share"

    root.mkdir(parents=True, exist_ok=True)
    return root


def ledger_db_path(
    data_root: Path, filename: str = DEFAULT_LEDGER_FILENAME
) -> Path:
    """<data_root>/ledger_shell/<filename>"""
    return data_root / APP_DIR_NAME / filename


def logs_dir(data_root: Path) -> Path:
    """<data_root>/ledger_shell/logs"""
    return data_root / APP_DIR_NAME / "logs"


# -----------------------
# Packaged defaults loading
# -----------------------


def _defaults_dir() -> Path:
    """Return the installed path to the packaged defaults directory."""
    return Path(
        importlib_resources.files("ledger_shell.defaults")
    )  # type: ignore[arg-type]


def load_defaults_yaml(filename: str) -> dict[str, Any]:
    """
    Load a YAML file from ledger_shell/defaults/.
    """
    defaults_dir = _defaults_dir()
    path = defaults_dir / filename
    if not path.exists():
        raise FileNotFoundError(
            f"Missing defaults YAML: {filename} "
            f"(looked in {defaults_dir})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Defaults YAML {filename} must load to a mapping/dict."
        )
    return data


def load_system_config() -> YAMLConfig:
    """
    Load system.yaml from packaged defaults and return a YAMLConfig wrapper.
    """
    return YAMLConfig(load_defaults_yaml("system.yaml"))
