# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for sgres.

This module defines dataclasses representing the configurable aspects of sgres:
environment variables, Slurm options, table presentation settings, date formats,
and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by sgres."""

    # Enables sgres debug mode.
    debug_mode: str = "SGRES_DEBUG"
    # Explicit path to the sgres config file.
    config_file: str = "SGRES_CONFIG"


@dataclass
class SlurmOptions:
    """Options associated with Slurm."""

    # Slurm control command queried for nodes and jobs.
    scontrol: str = "scontrol"
    # Name of the partition holding preempted jobs.
    preempted_partition: str = "preempted"


@dataclass
class NodesPresenterSettings:
    """Settings for NodesPresenter."""

    # Table style used if none is requested on the command line.
    default_style: str = "markdown"
    # Style used for table headers.
    headers_style: str = "bold"
    # Memory is reported by Slurm in MB; divide by this to display it in G.
    memory_divisor: int = 1000

    # Mark used for each GRES unit in use by a regular job.
    used_mark: str = "u"
    # Mark used for each GRES unit in use by a preempted job.
    preempted_mark: str = "p"
    # Mark used for each idle GRES unit.
    idle_mark: str = "i"

    # Style used for the used marks.
    used_style: str = "red"
    # Style used for the preempted marks.
    preempted_style: str = "yellow"
    # Style used for the idle marks.
    idle_style: str = "green"

    # Styles used for node state tags. Tags not listed here are printed unstyled.
    state_styles: dict[str, str] = field(
        default_factory=lambda: {
            "IDLE": "green",
            "MIXED": "blue",
            "ALLOCATED": "magenta",
            "DRAIN": "yellow",
            "DOWN": "red",
        }
    )


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by sgres.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failed queries and unparsable scheduler data.
    default: int = 1
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for sgres."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    slurm_options: SlurmOptions = field(default_factory=SlurmOptions)
    nodes_presenter: NodesPresenterSettings = field(
        default_factory=NodesPresenterSettings
    )
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read sgres config '{config_path}': {e}.")

        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config_file))
            else None,
            Path.cwd() / "sgres_config.toml",
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "sgres"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Nested tables become nested dataclasses; unknown keys are ignored.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        if field_info.name not in data:
            continue

        value = data[field_info.name]
        if is_dataclass(field_info.type) and isinstance(value, dict):
            value = _dict_to_dataclass(field_info.type, value)
        field_values[field_info.name] = value

    return cls(**field_values)


# Global configuration for sgres.
CFG = Config.load()
