# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Unpack runtime archives into one directory per runtime version."""

from __future__ import annotations

import logging
import shutil
import tarfile
import zipfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from packaging.version import Version

from ..config import is_windows_rid
from ..errors import ExtractionError
from .stages import Stage

LOGGER = logging.getLogger(__name__)

COMPLETION_MARKER: Final[str] = ".extracted"
ZIP_ARCHIVE: Final[str] = "zip"
TAR_GZ_ARCHIVE: Final[str] = "tar.gz"


@dataclass(frozen=True, slots=True)
class PendingExtraction:
    """Archive that should be unpacked into ``destination``."""

    version: Version
    archive: Path
    destination: Path


def is_extracted(destination: Path) -> bool:
    """Return ``True`` when ``destination`` holds a completed extraction."""

    return (destination / COMPLETION_MARKER).is_file()


class Extractor:
    """Extract runtime archives using the format published for a platform."""

    def __init__(
        self,
        rid: str,
        *,
        jobs: int = 4,
        on_event: Callable[[str], None] | None = None,
    ) -> None:
        self.archive_format = ZIP_ARCHIVE if is_windows_rid(rid) else TAR_GZ_ARCHIVE
        self._jobs = jobs
        self._on_event = on_event

    def extract(self, archive: Path, destination: Path) -> bool:
        """Unpack ``archive`` into ``destination`` unless already done.

        A completion marker is written after a successful extraction. A
        populated destination without the marker is an interrupted earlier
        run; it is cleared and extracted again.

        Returns:
            bool: ``True`` when the archive was extracted, ``False`` when skipped.

        Raises:
            ExtractionError: If the archive cannot be unpacked.
        """

        if is_extracted(destination):
            return False
        if destination.exists() and any(destination.iterdir()):
            LOGGER.debug("clearing incomplete extraction at %s", destination)
            shutil.rmtree(destination)
        destination.mkdir(parents=True, exist_ok=True)

        try:
            if self.archive_format == ZIP_ARCHIVE:
                with zipfile.ZipFile(archive) as bundle:
                    bundle.extractall(destination)
            else:
                with tarfile.open(archive, "r:gz") as bundle:
                    bundle.extractall(destination, filter="data")
        except (OSError, zipfile.BadZipFile, tarfile.TarError) as exc:
            raise ExtractionError(f"Failed to extract {archive}: {exc}") from exc

        (destination / COMPLETION_MARKER).touch()
        return True

    def extract_all(self, pendings: Sequence[PendingExtraction]) -> list[bool]:
        """Extract every pending archive with bounded parallelism.

        Raises:
            InventoryBuildError: Listing every extraction that failed.
        """

        stage = Stage("extract", self._extract_pending, label=lambda pending: str(pending.version), jobs=self._jobs)
        return stage.run(pendings)

    def _extract_pending(self, pending: PendingExtraction) -> bool:
        if is_extracted(pending.destination):
            return False
        self._emit(f"Extracting {pending.version}")
        extracted = self.extract(pending.archive, pending.destination)
        self._emit(f"Extracted {pending.version}")
        return extracted

    def _emit(self, message: str) -> None:
        if self._on_event is not None:
            self._on_event(message)


__all__ = ["COMPLETION_MARKER", "Extractor", "PendingExtraction", "is_extracted"]
