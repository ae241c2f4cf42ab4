#!/usr/bin/env python3
"""
Skill Builder - Settings.

Resolves runtime settings from, lowest to highest precedence:

1. Built-in defaults
2. The ``settings:`` block of the skill's own ``.skill.yml``
3. Environment variables (SKB_FORMAT, SKB_VERBOSE, SKB_LANGUAGE, SKB_POLYGLOT)

Command-line flags are applied last by the CLI itself.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from skb_validation_common import OUTPUT_FORMATS, OutputFormat

SKILL_CONFIG_FILE = ".skill.yml"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class Settings:
    """Resolved settings for one command invocation."""

    output_format: OutputFormat = "text"
    verbose: bool = False
    language: str = ""
    polyglot_path: Path | None = None


def read_skill_config(skill_path: Path) -> dict[str, Any]:
    """Read ``.skill.yml`` from a skill directory.

    Returns an empty dict when the file is missing, unreadable, malformed or
    not a mapping. Problems other than absence are noted on stderr.
    """
    config_path = skill_path / SKILL_CONFIG_FILE
    if not config_path.is_file():
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        print(f"Warning: ignoring {config_path}: {e}", file=sys.stderr)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        print(f"Warning: ignoring {config_path}: top level must be a mapping", file=sys.stderr)
        return {}
    return data


def _parse_bool(value: Any, source: str) -> bool | None:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    print(f"Warning: {source} is not a boolean: {value!r}", file=sys.stderr)
    return None


def _parse_format(value: Any, source: str) -> OutputFormat | None:
    text = str(value).strip().lower()
    if text in OUTPUT_FORMATS:
        return text  # type: ignore[return-value]
    print(f"Warning: {source} must be one of {', '.join(OUTPUT_FORMATS)}, got {value!r}", file=sys.stderr)
    return None


def _apply(settings: Settings, values: dict[str, Any], source: str) -> None:
    """Apply known keys from ``values`` onto ``settings``; invalid values are skipped."""
    if values.get("output_format") is not None:
        fmt = _parse_format(values["output_format"], f"{source} output_format")
        if fmt:
            settings.output_format = fmt
    if values.get("verbose") is not None:
        verbose = _parse_bool(values["verbose"], f"{source} verbose")
        if verbose is not None:
            settings.verbose = verbose
    if values.get("language") is not None:
        language = str(values["language"]).strip()
        # "en" is the catalog default, stored under the empty-string locale
        settings.language = "" if language == "en" else language
    if values.get("polyglot"):
        settings.polyglot_path = Path(str(values["polyglot"])).expanduser()


def load_settings(skill_path: Path | None = None, environ: dict[str, str] | None = None) -> Settings:
    """Resolve settings for a skill directory (or just defaults + env when None)."""
    env = os.environ if environ is None else environ
    settings = Settings()

    if skill_path is not None and skill_path.is_dir():
        file_settings = read_skill_config(skill_path).get("settings")
        if isinstance(file_settings, dict):
            _apply(settings, file_settings, SKILL_CONFIG_FILE)

    env_values = {
        "output_format": env.get("SKB_FORMAT"),
        "verbose": env.get("SKB_VERBOSE"),
        "language": env.get("SKB_LANGUAGE"),
        "polyglot": env.get("SKB_POLYGLOT"),
    }
    _apply(settings, env_values, "environment")
    return settings
