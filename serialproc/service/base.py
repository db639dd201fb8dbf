# -*- coding: utf-8 -*-
"""
Service Contract - Abstract backend consumed by the admin controllers.

Defines the ProcessService interface for fetching and persisting
process settings and process variables, and the error hierarchy every
implementation raises.

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
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

# serialproc internal
from serialproc.core.records import ConfigRecord, ProcessVariables


class ServiceError(Exception):
    """Base class for backend failures.

    Parameters
    ----------
    message : str
        Message suitable for display to the operator.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FetchError(ServiceError):
    """Reading from the backend failed."""


class SaveError(ServiceError):
    """Persisting to the backend failed."""


class ProcessService(ABC):
    """Backend holding process settings and process variables."""

    @abstractmethod
    def fetch_config_records(self) -> List[ConfigRecord]:
        """Return every process settings record, in no particular order.

        Raises
        ------
        FetchError
        """

    @abstractmethod
    def persist_config_records(self, records: Sequence[ConfigRecord]) -> None:
        """Upsert full record snapshots by identifier, as one batch.

        Raises
        ------
        SaveError
        """

    @abstractmethod
    def fetch_process_variables(self) -> ProcessVariables:
        """Raises FetchError."""

    @abstractmethod
    def fetch_label_overrides(self) -> Dict[str, str]:
        """Return display label overrides keyed by 'engine_on'/'timestamp'.

        Missing keys keep the default labels.

        Raises
        ------
        FetchError
        """

    @abstractmethod
    def persist_process_variables(
        self,
        engine_on: bool,
        timestamp_iso: Optional[str],
    ) -> Optional[ProcessVariables]:
        """Store both variables and return the saved values, if known.

        Raises
        ------
        SaveError
        """

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self) -> 'ProcessService':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
