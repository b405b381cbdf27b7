# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Download runtime archives to local storage, skipping verified files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Final

import requests

from ..errors import DownloadError
from ..models import PendingDownload
from .stages import Stage
from .verify import verify_or_delete

LOGGER = logging.getLogger(__name__)

_CHUNK_SIZE: Final[int] = 1024 * 1024

EventCallback = Callable[[str], None]


class Fetcher:
    """Ensure runtime archives are present and verified on local storage."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = 300.0,
        jobs: int = 4,
        on_event: EventCallback | None = None,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._jobs = jobs
        self._on_event = on_event

    def ensure(self, pending: PendingDownload) -> bool:
        """Make sure ``pending.destination`` holds the verified archive.

        Returns:
            bool: ``True`` when a download happened, ``False`` when the
            existing file already verified.

        Raises:
            DownloadError: If the transfer fails.
            DownloadIntegrityError: If the downloaded file does not verify.
        """

        destination = pending.destination
        if destination.exists() and verify_or_delete(destination, pending.expected_digest):
            LOGGER.debug("archive for %s already verified at %s", pending.version, destination)
            return False

        self._emit(f"Downloading {pending.version}")
        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self._session.get(pending.url, stream=True, timeout=self._timeout) as response:
                response.raise_for_status()
                with destination.open("wb") as stream:
                    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                        stream.write(chunk)
        except requests.RequestException as exc:
            destination.unlink(missing_ok=True)
            raise DownloadError(f"failed to download {pending.url}: {exc}") from exc

        verify_or_delete(destination, pending.expected_digest, raise_on_mismatch=True)
        self._emit(f"Downloaded {pending.version}")
        return True

    def ensure_all(self, pendings: Sequence[PendingDownload]) -> list[bool]:
        """Run :meth:`ensure` over ``pendings`` with bounded parallelism.

        Raises:
            InventoryBuildError: Listing every download that failed.
        """

        stage = Stage("download", self.ensure, label=lambda pending: str(pending.version), jobs=self._jobs)
        return stage.run(pendings)

    def _emit(self, message: str) -> None:
        if self._on_event is not None:
            self._on_event(message)


__all__ = ["EventCallback", "Fetcher"]
