"""Configuration helpers."""

from .config_loader import DEFAULT_PROFILE, ENV_VAR, SECTIONS, ConfigLoader, get_config

__all__ = [
    "ConfigLoader",
    "DEFAULT_PROFILE",
    "ENV_VAR",
    "SECTIONS",
    "get_config",
]
