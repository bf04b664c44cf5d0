"""Configuration loading and management."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from invocation_analyzer.errors import ConfigurationError

# Load .env files
load_dotenv()

# Config directory names
PROJECT_DIR = ".invocation-analyzer"
USER_DIR_NAME = ".invocation-analyzer"
CONFIG_FILE_NAMES = ("config.yaml", "config.yml", "config.json")

# Set by the build tool when the analyzer is launched through it.
BUILD_WORKING_DIRECTORY_ENV = "BUILD_WORKING_DIRECTORY"

OUTPUT_MODE_ALL_DATA = "all_data"
OUTPUT_MODE_USED_DATA = "used_data"
OUTPUT_MODES = (OUTPUT_MODE_ALL_DATA, OUTPUT_MODE_USED_DATA)

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(slots=True)
class AnalyzerConfig:
    """Merged configuration from all sources.

    Priority: CLI args > env vars > project config > user config > defaults
    """

    profile_path: str | None = None
    output_modes: set[str] = field(default_factory=lambda: {OUTPUT_MODE_ALL_DATA})
    # Datum class names to fetch explicitly, e.g. "TotalDuration".
    requested_data: list[str] = field(default_factory=list)

    # Output
    plaintext: bool = False
    verbose: bool = False
    debug: bool = False
    json_logs: bool = False

    working_directory: str = ""


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by looking for .invocation-analyzer/ or .git/."""
    current = start or Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / PROJECT_DIR).exists():
            return parent
        if (parent / ".git").exists():
            return parent
    return None


def get_user_config_dir() -> Path:
    """Get the user-level config directory (~/.invocation-analyzer/)."""
    return Path.home() / USER_DIR_NAME


def load_json_config(path: Path) -> dict[str, Any]:
    """Load a JSON config file, returning empty dict if not found."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load a YAML config file, returning empty dict if not found."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    except (yaml.YAMLError, OSError):
        return {}


def load_config_dir(directory: Path) -> dict[str, Any]:
    """Load the first config file found in *directory*."""
    for name in CONFIG_FILE_NAMES:
        path = directory / name
        if path.exists():
            if path.suffix == ".json":
                return load_json_config(path)
            return load_yaml_config(path)
    return {}


def parse_output_modes(value: Any) -> set[str]:
    """Parse output modes given as a comma separated string or a list.

    Raises:
        ConfigurationError: For an unknown mode.
    """
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]
    modes: set[str] = set()
    for item in items:
        for mode in str(item).split(","):
            mode = mode.strip().lower()
            if not mode:
                continue
            if mode not in OUTPUT_MODES:
                raise ConfigurationError(
                    f"Unknown output mode {mode!r}. Expected one of: {', '.join(OUTPUT_MODES)}."
                )
            modes.add(mode)
    return modes


def resolve_profile_path(path: str, working_dir: str | None = None) -> Path:
    """Resolve *path* the way the user who typed it expects.

    Relative paths are resolved against ``BUILD_WORKING_DIRECTORY`` when the
    analyzer runs through the build tool, otherwise against *working_dir*.
    """
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    base = os.environ.get(BUILD_WORKING_DIRECTORY_ENV) or working_dir or os.getcwd()
    return Path(base) / candidate


def load_config(
    *,
    cli_args: dict[str, Any] | None = None,
    working_dir: str | None = None,
) -> AnalyzerConfig:
    """Load configuration from all sources with proper priority.

    Priority: CLI args > env vars > project config > user config > defaults

    Raises:
        ConfigurationError: If any source names an unknown output mode.
    """
    config = AnalyzerConfig()
    cli_args = cli_args or {}

    config.working_directory = working_dir or os.getcwd()

    # 1. User-level config (~/.invocation-analyzer/config.yaml)
    _apply_dict(config, load_config_dir(get_user_config_dir()))

    # 2. Project-level config (.invocation-analyzer/config.yaml)
    project_root = find_project_root(Path(config.working_directory))
    if project_root:
        _apply_dict(config, load_config_dir(project_root / PROJECT_DIR))

    # 3. Environment variables
    if debug := os.environ.get("IA_DEBUG"):
        config.debug = debug.lower() in _TRUTHY
    if plaintext := os.environ.get("IA_PLAINTEXT"):
        config.plaintext = plaintext.lower() in _TRUTHY
    if os.environ.get("NO_COLOR"):
        config.plaintext = True
    if modes := os.environ.get("IA_OUTPUT_MODE"):
        config.output_modes = parse_output_modes(modes)

    # 4. CLI args (highest priority)
    _apply_dict(config, cli_args)

    return config


def _apply_dict(config: AnalyzerConfig, data: dict[str, Any]) -> None:
    """Apply dictionary values to config, only for known fields."""
    field_map = {
        "profile_path": "profile_path",
        "output_modes": "output_modes",
        "requested_data": "requested_data",
        "plaintext": "plaintext",
        "verbose": "verbose",
        "debug": "debug",
        "json_logs": "json_logs",
        "working_directory": "working_directory",
        # Aliases from config files
        "profile": "profile_path",
        "mode": "output_modes",
        "modes": "output_modes",
        "data": "requested_data",
        "jsonLogs": "json_logs",
    }
    for key, attr in field_map.items():
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if attr == "output_modes":
            value = parse_output_modes(value)
            if not value:
                continue
        elif attr == "requested_data":
            value = [value] if isinstance(value, str) else list(value)
        setattr(config, attr, value)
