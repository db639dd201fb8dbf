# -*- coding: utf-8 -*-
"""
Service Resolver - Locate and open the process backend.

Resolves which backend the widgets talk to using a priority chain:
1. SERIALPROC_SERVICE_URL environment variable (REST backend)
2. ``service_url`` in ~/.serialproc/config.json (REST backend)
3. Local SQLite store at SERIALPROC_DB_PATH, config ``db_path``, or
   ~/.serialproc/process.db

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
import logging
import os
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# serialproc internal
from serialproc.core.config import CONFIG_DIR_NAME, AdminConfig, load_config
from serialproc.service.base import ProcessService


_URL_ENV_VAR = "SERIALPROC_SERVICE_URL"
_DB_ENV_VAR = "SERIALPROC_DB_PATH"
_TOKEN_ENV_VAR = "SERIALPROC_API_TOKEN"
_DEFAULT_DB = "process.db"


def resolve_service_target(
    config: Optional[AdminConfig] = None,
) -> Tuple[str, str]:
    """Resolve the backend to use.

    Parameters
    ----------
    config : Optional[AdminConfig]
        Loaded configuration. Read from disk if omitted.

    Returns
    -------
    Tuple[str, str]
        ``('rest', base_url)`` or ``('local', db_path)``.
    """
    config = config or load_config()

    env_url = os.environ.get(_URL_ENV_VAR)
    if env_url:
        return 'rest', env_url
    if config.service_url:
        return 'rest', config.service_url

    env_db = os.environ.get(_DB_ENV_VAR)
    if env_db:
        return 'local', env_db
    if config.db_path:
        return 'local', config.db_path
    return 'local', str(Path.home() / CONFIG_DIR_NAME / _DEFAULT_DB)


def open_service(config: Optional[AdminConfig] = None) -> ProcessService:
    """Open the resolved backend.

    Returns
    -------
    ProcessService
        A RestProcessService or a LocalProcessStore.
    """
    config = config or load_config()
    kind, target = resolve_service_target(config)

    if kind == 'rest':
        from serialproc.service.http import RestProcessService

        token = os.environ.get(_TOKEN_ENV_VAR) or config.api_token
        logger.info("Using REST process backend at %s", target)
        return RestProcessService(
            target, token=token, timeout=config.request_timeout,
        )

    from serialproc.service.store import LocalProcessStore

    logger.info("Using local process store at %s", target)
    return LocalProcessStore(target)
