"""YAML defaults for the chatwootctl command line."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from chatwootctl.errors import ManagerError

DEFAULT_CONFIG_NAME = ".chatwootctl.yml"


class ConfigLoader:
    """Reads an optional YAML mapping whose keys mirror the CLI options."""

    KEY_TYPES = {
        "install_dir": str,
        "preset": str,
        "verbose": bool,
        "log_file": str,
    }

    def resolve_path(self, config_path: Optional[str], cwd: Optional[str] = None) -> Optional[str]:
        if config_path:
            return config_path
        candidate = Path(cwd or os.getcwd()) / DEFAULT_CONFIG_NAME
        return str(candidate) if candidate.exists() else None

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise ManagerError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise ManagerError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ManagerError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed) - set(self.KEY_TYPES))
        if unknown:
            raise ManagerError(f"Unknown configuration keys: {', '.join(unknown)}")

        for key, value in parsed.items():
            expected = self.KEY_TYPES[key]
            if not isinstance(value, expected):
                raise ManagerError(
                    f"Configuration key '{key}' must be of type {expected.__name__}."
                )

        return parsed
