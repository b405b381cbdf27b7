# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolution of modular runtime releases through the build catalog."""

from __future__ import annotations

from typing import Final

from packaging.version import Version

from ..catalog import BuildCatalog
from ..errors import UnknownBuildIdentifierError, UnknownDisambiguatorError
from ..models import LiveSignals, RuntimeFamily, RuntimeIdentity
from ..versions import last_token, try_parse_version

# From this major version on the runtime reports its own product version.
CUTOVER_MAJOR: Final[int] = 3
# Later releases belong to the unified line.
FINAL_MAJOR: Final[int] = 3

# Earlier releases report the legacy compatibility version (4.0.30319.x)
# instead of their own.
COMPATIBILITY_VERSION_PREFIX: Final[tuple[int, int]] = (4, 0)


def reports_product_version(environment_version: Version) -> bool:
    """Return ``True`` when ``environment_version`` is the real product version."""

    if environment_version.release[:2] == COMPATIBILITY_VERSION_PREFIX:
        return False
    return environment_version.major >= CUTOVER_MAJOR


def described_product_version(description: str | None) -> Version | None:
    """Return the product version named by a modular runtime description.

    Only releases from the cutover on name their product version; earlier
    ones describe themselves by build identifier (``4.6.x``).
    """

    version = try_parse_version(last_token(description or ""))
    if version is not None and CUTOVER_MAJOR <= version.major <= FINAL_MAJOR:
        return version
    return None


class ModularRuntimeResolver:
    """Resolve modular runtime releases that cannot report their own version."""

    def __init__(self, catalog: BuildCatalog) -> None:
        self._catalog = catalog

    def resolve(self, signals: LiveSignals) -> RuntimeIdentity:
        """Return the modular runtime identity for ``signals``.

        Raises:
            UnknownBuildIdentifierError: If the build id is missing from the catalog.
            UnknownDisambiguatorError: If the commit token is missing from an ambiguous record.
        """

        product_version = self._product_version(signals)
        if product_version is not None:
            return RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, product_version)

        build_id = signals.build_identifier
        record = self._catalog.get(build_id) if build_id is not None else None
        if record is None:
            raise UnknownBuildIdentifierError(f"Could not find build identifier {build_id} in the catalog")
        if record.version is not None:
            return RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, record.version)

        token = last_token(signals.informational_version or "")
        version = record.version_for_commit(token)
        if version is None:
            raise UnknownDisambiguatorError(f"Could not find build {build_id} commit {token!r} in the catalog")
        return RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, version)

    @staticmethod
    def _product_version(signals: LiveSignals) -> Version | None:
        if signals.environment_version is None:
            return described_product_version(signals.framework_description)
        if reports_product_version(signals.environment_version):
            return signals.environment_version
        return None


__all__ = [
    "CUTOVER_MAJOR",
    "FINAL_MAJOR",
    "ModularRuntimeResolver",
    "described_product_version",
    "reports_product_version",
]
