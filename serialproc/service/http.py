# -*- coding: utf-8 -*-
"""
REST Process Service - HTTP client for the hosted process backend.

Implements ProcessService over the backend's JSON endpoints using a
persistent requests session.

Dependencies
------------
requests

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
from typing import Any, Dict, List, Optional, Sequence, Type

# Third-party
import requests

logger = logging.getLogger(__name__)

# serialproc internal
from serialproc.core.records import ConfigRecord, ProcessVariables
from serialproc.service.base import (
    FetchError,
    ProcessService,
    SaveError,
    ServiceError,
)


_SETTINGS_PATH = "/process-settings"
_VARIABLES_PATH = "/process-variables"
_LABELS_PATH = "/process-variables/labels"

# Wire label key -> label override key
_LABEL_KEYS = {
    'serialEngineOn': 'engine_on',
    'serialEngineTimestamp': 'timestamp',
}


class RestProcessService(ProcessService):
    """ProcessService backed by HTTP JSON endpoints.

    Parameters
    ----------
    base_url : str
        Backend root, e.g. ``https://example.org/services/apexrest``.
    token : Optional[str]
        Bearer token added to every request.
    timeout : float
        HTTP request timeout in seconds. Default 10.0.
    session : Optional[requests.Session]
        Session to use. A new one is created if omitted.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({'Accept': 'application/json'})
        if token:
            self._session.headers['Authorization'] = f"Bearer {token}"

    def _request(
        self,
        method: str,
        path: str,
        error_type: Type[ServiceError],
        payload: Optional[Any] = None,
    ) -> Any:
        """Send a request and decode its JSON body.

        Returns
        -------
        Any
            Decoded body, or None for an empty response.

        Raises
        ------
        ServiceError
            ``error_type`` carrying the backend's message.
        """
        url = self._base_url + path
        try:
            resp = self._session.request(
                method, url, json=payload, timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise error_type(str(e)) from e

        if not resp.ok:
            message = _error_message(resp)
            logger.warning(
                "%s %s returned %s: %s", method, url, resp.status_code, message,
            )
            raise error_type(message)

        if not resp.content:
            return None
        try:
            return resp.json()
        except (ValueError, json.JSONDecodeError) as e:
            raise error_type(f"Invalid response from {url}: {e}") from e

    def fetch_config_records(self) -> List[ConfigRecord]:
        data = self._request('GET', _SETTINGS_PATH, FetchError)
        if data is None:
            return []
        if not isinstance(data, list):
            raise FetchError("Expected a list of process settings")
        return [ConfigRecord.from_wire(item) for item in data]

    def persist_config_records(self, records: Sequence[ConfigRecord]) -> None:
        payload = {'processSettings': [r.to_wire() for r in records]}
        self._request('PUT', _SETTINGS_PATH, SaveError, payload)

    def fetch_process_variables(self) -> ProcessVariables:
        data = self._request('GET', _VARIABLES_PATH, FetchError)
        return ProcessVariables.from_wire(data or {})

    def fetch_label_overrides(self) -> Dict[str, str]:
        data = self._request('GET', _LABELS_PATH, FetchError) or {}
        return {
            key: data[wire] for wire, key in _LABEL_KEYS.items()
            if data.get(wire)
        }

    def persist_process_variables(
        self,
        engine_on: bool,
        timestamp_iso: Optional[str],
    ) -> Optional[ProcessVariables]:
        payload = {
            'serialEngineOn': engine_on,
            'serialEngineTimestampIso': timestamp_iso,
        }
        data = self._request('POST', _VARIABLES_PATH, SaveError, payload)
        if not data:
            return None
        return ProcessVariables.from_wire(data)

    def close(self) -> None:
        self._session.close()


def _error_message(resp: requests.Response) -> str:
    """Extract the backend's error message from a failed response.

    Understands ``{"message": ...}`` and ``[{"message": ...}, ...]``.
    """
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"

    if isinstance(body, list) and body and isinstance(body[0], dict):
        body = body[0]
    if isinstance(body, dict) and body.get('message'):
        return str(body['message'])
    return f"HTTP {resp.status_code}"
