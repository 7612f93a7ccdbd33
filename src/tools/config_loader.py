"""
Map profile loading.

A profile is a YAML file under ``configs/`` with up to three top-level
sections: ``zoom_policy`` (distance bands), ``viewport`` (zoom-to-fit
padding and span floor) and ``session`` (recluster throttle and the region
shown on open). Which profile is used comes from the caller, then the
``MAP_PROFILE`` environment variable, then ``default``.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
ENV_VAR = "MAP_PROFILE"
SECTIONS = ("zoom_policy", "viewport", "session")


class ConfigLoader:
    """Find, read and sanity-check map profiles."""

    CONFIG_DIR = Path(__file__).parent.parent.parent / "configs"

    @classmethod
    def available_profiles(cls) -> List[str]:
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))

    @classmethod
    def resolve_profile_name(cls, name: Optional[str] = None) -> str:
        """Explicit name, else ``$MAP_PROFILE``, else ``default``."""
        return name or os.getenv(ENV_VAR) or DEFAULT_PROFILE

    @classmethod
    def profile_path(cls, name: str) -> Path:
        path = cls.CONFIG_DIR / f"{name}.yaml"
        if not path.exists():
            raise FileNotFoundError(
                f"Profile '{name}' not found. "
                f"Available profiles: {', '.join(cls.available_profiles())}"
            )
        return path

    @classmethod
    def load_profile(cls, name: Optional[str] = None) -> Dict[str, Any]:
        """
        Load a map profile.

        Args:
            name: Profile name (default, dense-city). If None, resolved from
                the environment

        Returns:
            The profile's sections; an empty file gives ``{}``

        Raises:
            FileNotFoundError: If the profile doesn't exist
            ValueError: If the file is not a mapping or has unknown sections
        """
        name = cls.resolve_profile_name(name)
        path = cls.profile_path(name)

        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError(
                f"Profile '{name}' must be a mapping of sections, got {type(config).__name__}"
            )

        unknown = sorted(str(key) for key in config if key not in SECTIONS)
        if unknown:
            raise ValueError(
                f"Profile '{name}' has unknown sections: {', '.join(unknown)}. "
                f"Expected some of: {', '.join(SECTIONS)}"
            )

        logger.debug("Loaded map profile '%s' from %s", name, path)
        return config


def get_config(profile: Optional[str] = None) -> Dict[str, Any]:
    """Load ``profile``, or the environment-selected one when None."""
    return ConfigLoader.load_profile(profile)
