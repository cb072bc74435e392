# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Reargs parameter rules."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator

from reargs.logger import logger
from reargs.options import ReargsOptions
from reargs.reargs import Reargs


class ReargsConfig(BaseModel):
    """Reargs configuration model."""

    options: ReargsOptions = Field(default_factory=ReargsOptions)
    rules: dict[str, dict[str, Any]] = Field(default_factory=dict)
    help: dict[str, Any] = Field(default_factory=dict)

    @field_validator("rules")
    @classmethod
    def validate_rule_ids(cls, value: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
        for rule_id in value:
            if not rule_id.strip():
                raise ValueError("Rule ids cannot be empty.")
        return value

    def to_reargs(self) -> Reargs:
        return Reargs(self.rules, self.options, context=self.help)


def loader(file_path: Path | str) -> Reargs:
    """
    Load Reargs parameter rules from a YAML or TOML file.

    The file should contain a mapping with a `rules` mapping, and optionally
    `options` and `help` mappings:

        options:
          long_short_delimiter: ", "
        help:
          name: cat
          version: 1.0.0
        rules:
          show_ends:
            short: "-E"
            long: "--show-ends"
            help: "display $ at end of each line"

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        Reargs: An instance configured with the loaded rules.

    Raises:
        TypeError: If `file_path` is not a string or a Path.
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or does not hold a mapping.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a mapping with a mapping of rules.\n"
            "Example:\n"
            "rules:\n"
            "  show_ends:\n"
            "    short: '-E'\n"
            "    long: '--show-ends'"
        )

    logger.debug("Loaded %d rule(s) from %s", len(raw_config.get("rules") or {}), path)
    return ReargsConfig(
        options=raw_config.get("options") or {},
        rules=raw_config.get("rules") or {},
        help=raw_config.get("help") or {},
    ).to_reargs()
