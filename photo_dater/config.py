"""
Configuration management for photo-dater.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from .constants import PROGRAM


class Config:
    """Manages the YAML configuration file holding user defaults."""

    def __init__(self, config_path: Optional[Path] = None):
        # Default config location: ~/.<PROGRAM>/config.yml
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / f".{PROGRAM}" / "config.yml"
        self.program_root = self.config_path.parent
        self.data = self._load_config()

    def _load_config(self) -> Dict:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logging.getLogger(PROGRAM).warning(f"Could not load config: {e}")
            return {}

        if not isinstance(data, dict):
            logging.getLogger(PROGRAM).warning(f"Ignoring malformed config: {self.config_path}")
            return {}
        return data

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            self.program_root.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                yaml.safe_dump(self.data, f, default_flow_style=False)
        except OSError as e:
            logging.getLogger(PROGRAM).error(f"Could not save config: {e}")

    def get_max_interval(self) -> int:
        """Default maximal interval in days for rename (default: 0)."""
        value = self.data.get('max_interval', 0)
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            logging.getLogger(PROGRAM).warning(f"Invalid max_interval in config: {value!r}")
            return 0

    def get_ignore_hidden(self) -> bool:
        """Whether hidden files are left out of scans (default: True)."""
        return bool(self.data.get('ignore_hidden', True))

    def update_max_interval(self, max_interval: int) -> None:
        """Update and save the default maximal interval."""
        self.data['max_interval'] = max_interval
        self.save_config()
