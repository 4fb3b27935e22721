"""Profile configuration for the NHN Cloud CLI.

Settings come from the credentials file (``~/.nhncloud/credentials``)::

    [default]
    output = table

    [audit]
    output = json
    query = events[].eventId

Command line flags take precedence over environment variables, which take
precedence over the file.
"""

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .utils import debug_print

DEFAULT_PROFILE = "default"
DEFAULT_OUTPUT = "table"

CONFIG_FILE_ENV = "NHN_CLOUD_CONFIG_FILE"
PROFILE_ENV = "NHN_CLOUD_PROFILE"
OUTPUT_ENV = "NHN_CLOUD_OUTPUT"
QUERY_ENV = "NHN_CLOUD_QUERY"


@dataclass
class Config:
    profile: str = DEFAULT_PROFILE
    output: Optional[str] = None
    query: Optional[str] = None


def get_config_path() -> Path:
    """Path of the credentials file, overridable through NHN_CLOUD_CONFIG_FILE."""
    override = os.environ.get(CONFIG_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".nhncloud" / "credentials"


def resolve_profile(profile=None) -> str:
    if profile and profile.strip():
        return profile.strip()
    return os.environ.get(PROFILE_ENV) or DEFAULT_PROFILE


def load_config(profile=None, path=None) -> Config:
    """Load settings of one profile from the credentials file.

    A missing or unreadable file and a missing profile both yield an empty
    Config rather than an error.

    Args:
        profile: Profile name; falls back to NHN_CLOUD_PROFILE, then "default"
        path: Credentials file path; defaults to get_config_path()
    """
    profile = resolve_profile(profile)
    config = Config(profile=profile)
    path = Path(path) if path else get_config_path()

    parser = configparser.ConfigParser(interpolation=None)
    try:
        read_files = parser.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as e:
        debug_print(f"Could not parse config file {path}: {e}")  # pragma: no mutate
        return config

    if not read_files:
        debug_print(f"No config file at {path}")  # pragma: no mutate
        return config

    if not parser.has_section(profile):
        debug_print(f"Profile '{profile}' not found in {path}")  # pragma: no mutate
        return config

    section = parser[profile]
    config.output = section.get("output") or None
    config.query = section.get("query") or None
    debug_print(
        f"Loaded profile '{profile}' from {path}: output={config.output!r}, query={config.query!r}"
    )  # pragma: no mutate
    return config


def resolve_output_format(flag=None, config=None) -> str:
    """Render mode from flag, NHN_CLOUD_OUTPUT, config file, then "table"."""
    for source, value in (
        ("flag", flag),
        ("environment", os.environ.get(OUTPUT_ENV)),
        ("config", config.output if config else None),
    ):
        if value:
            debug_print(f"Using output format {value!r} from {source}")  # pragma: no mutate
            return value
    return DEFAULT_OUTPUT


def resolve_query(flag=None, config=None) -> Optional[str]:
    """Query from flag, NHN_CLOUD_QUERY, config file, then none."""
    for value in (flag, os.environ.get(QUERY_ENV), config.query if config else None):
        if value:
            return value
    return None
