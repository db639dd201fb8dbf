# -*- coding: utf-8 -*-
"""
Configuration Module - Configurable defaults for serialproc.

Provides an AdminConfig dataclass with the backend location, request
timeout, worker count, polling interval and display time zone. Loads
from ~/.serialproc/config.json if it exists, otherwise uses defaults.

License
-------
MIT License
Copyright (c) 2026 serialproc contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".serialproc"
_CONFIG_FILE_NAME = "config.json"


def default_config_path() -> Path:
    return Path.home() / CONFIG_DIR_NAME / _CONFIG_FILE_NAME


@dataclass
class AdminConfig:
    """Global serialproc configuration with defaults.

    Attributes
    ----------
    service_url : Optional[str]
        Base URL of the REST backend. None selects the local store.
    api_token : Optional[str]
        Bearer token sent to the REST backend.
    db_path : Optional[str]
        Path of the local SQLite store.
    request_timeout : float
        HTTP timeout in seconds.
    max_workers : int
        Maximum worker threads for background round trips.
    poll_interval_ms : int
        How often widgets poll pending round trips, in milliseconds.
    display_timezone : Optional[str]
        IANA zone used to display and edit timestamps. None uses the
        machine's local zone.
    """

    service_url: Optional[str] = None
    api_token: Optional[str] = None
    db_path: Optional[str] = None
    request_timeout: float = 10.0
    max_workers: int = 2
    poll_interval_ms: int = 200
    display_timezone: Optional[str] = None

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file."""
        path = path or default_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)


def load_config(path: Optional[Path] = None) -> AdminConfig:
    """Load configuration from file, or return defaults.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to ~/.serialproc/config.json.

    Returns
    -------
    AdminConfig
        Loaded or default configuration.
    """
    path = path or default_config_path()
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return AdminConfig(**{
                k: v for k, v in data.items()
                if k in AdminConfig.__dataclass_fields__
            })
        except Exception as e:
            logger.warning("Failed to load config from %s: %s", path, e)

    return AdminConfig()
