# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by runtime resolution and inventory operations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


class ResolutionError(RuntimeError):
    """Raised when live runtime signals cannot be resolved to a precise version."""


class UnknownBuildIdentifierError(ResolutionError):
    """Raised when the internal build identifier is absent from the build catalog."""


class UnknownDisambiguatorError(ResolutionError):
    """Raised when an ambiguous build record has no entry for the live commit token."""


class UnsupportedRuntimeError(ResolutionError):
    """Raised for runtime families that are recognised but not resolvable yet."""


class UnknownLegacyReleaseError(ResolutionError):
    """Raised when a legacy framework release code is below every known band."""


class MissingLegacyRegistrationError(ResolutionError):
    """Raised when the legacy framework installation key cannot be read."""


class MissingRuntimeVersionError(ResolutionError):
    """Raised when neither the environment nor the description reports a product version."""


class CatalogValidationError(RuntimeError):
    """Raised when a build catalog document fails schema or record validation."""


class CatalogIntegrityError(RuntimeError):
    """Raised when build catalog contents pass validation but fail semantic checks."""


class InventoryError(RuntimeError):
    """Base class for failures raised while building the runtime inventory."""


class DownloadError(InventoryError):
    """Raised when a runtime archive cannot be downloaded."""


class DownloadIntegrityError(InventoryError):
    """Raised when a freshly downloaded archive does not match its expected digest."""


class UnsupportedDigestError(InventoryError):
    """Raised when an expected digest has a length no supported algorithm produces."""


class MissingArtifactError(InventoryError):
    """Raised when a release publishes no archive for the target platform."""


class DigestConflictError(InventoryError):
    """Raised when one runtime version is published with two different archives."""


class ExtractionError(InventoryError):
    """Raised when a runtime archive cannot be unpacked."""


class ProbeError(InventoryError):
    """Raised when the probe program fails under an extracted runtime."""


@dataclass(frozen=True, slots=True)
class UnitFailure:
    """Failure attributed to a single unit of work within a pipeline stage."""

    stage: str
    unit: str
    error: BaseException

    def describe(self) -> str:
        """Return a one-line description of the failure.

        Returns:
            str: ``"<stage> <unit>: <error>"`` summary.
        """

        return f"{self.stage} {self.unit}: {self.error}"


class InventoryBuildError(InventoryError):
    """Raised once a stage finishes with one or more failed units."""

    def __init__(self, failures: Sequence[UnitFailure]) -> None:
        self.failures = tuple(failures)
        lines = "\n".join(f"  - {failure.describe()}" for failure in self.failures)
        super().__init__(f"{len(self.failures)} unit(s) failed:\n{lines}")


__all__ = [
    "CatalogIntegrityError",
    "CatalogValidationError",
    "DigestConflictError",
    "DownloadError",
    "DownloadIntegrityError",
    "ExtractionError",
    "InventoryBuildError",
    "InventoryError",
    "MissingArtifactError",
    "MissingLegacyRegistrationError",
    "MissingRuntimeVersionError",
    "ProbeError",
    "ResolutionError",
    "UnitFailure",
    "UnknownBuildIdentifierError",
    "UnknownDisambiguatorError",
    "UnknownLegacyReleaseError",
    "UnsupportedDigestError",
    "UnsupportedRuntimeError",
]
