# -*- coding: utf-8 -*-
"""
ServiceExecutorPool - Thread pool for backend round trips.

Runs fetches and saves in the background so widgets stay responsive.
Jobs only touch the service; widgets poll the returned futures and
apply results to their controllers on the UI thread.

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
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Sequence

logger = logging.getLogger(__name__)

# serialproc internal
from serialproc.core.records import ConfigRecord
from serialproc.core.staging import SettingsTableController


class ServiceExecutorPool:
    """Manages worker threads for backend operations.

    Parameters
    ----------
    max_workers : int
        Maximum number of concurrent threads. Default 2.
    """

    def __init__(self, max_workers: int = 2) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="serialproc",
        )

    def submit(self, fn, *args, **kwargs) -> Future:
        """Run ``fn(*args, **kwargs)`` in the background."""
        return self._executor.submit(fn, *args, **kwargs)

    def submit_fetch(self, controller: SettingsTableController) -> Future:
        """Fetch process settings.

        Returns
        -------
        Future
            Future resolving to List[ConfigRecord].
        """
        return self._executor.submit(controller.fetch_records)

    def submit_commit(
        self,
        controller: SettingsTableController,
        batch: Sequence[ConfigRecord],
    ) -> Future:
        """Persist a staged batch and re-fetch.

        Returns
        -------
        Future
            Future resolving to a CommitResult.
        """
        logger.debug("Submitting commit of %d records", len(batch))
        return self._executor.submit(controller.persist_batch, batch)

    def shutdown(self, wait: bool = True) -> None:
        """Shut down the thread pool.

        Parameters
        ----------
        wait : bool
            If True, wait for running tasks to complete.
        """
        self._executor.shutdown(wait=wait)
