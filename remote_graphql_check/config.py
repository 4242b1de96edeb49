"""Configuration management for remote-graphql-check."""

from dataclasses import dataclass
from typing import Optional

import yaml

from . import utils
from .introspection import DEFAULT_TIMEOUT


@dataclass
class Config:
    """Configuration for remote-graphql-check."""

    default_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    token: Optional[str] = None


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.remote-graphql-check/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return Config(
        default_url=data.get("default_url"),
        timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        token=data.get("token"),
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "default_url": "https://remote.example.com/graphql",
        "timeout": DEFAULT_TIMEOUT,
        "token": None,
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
