# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decision procedure turning live runtime signals into a runtime identity."""

from __future__ import annotations

from typing import Final, Protocol

from packaging.version import Version

from ..catalog import BuildCatalog, default_catalog
from ..errors import MissingRuntimeVersionError, UnsupportedRuntimeError
from ..models import LiveSignals, RuntimeFamily, RuntimeIdentity
from ..versions import first_token, try_parse_version
from .legacy import LegacyPlatformResolver, ReleaseCodeReader
from .modular import ModularRuntimeResolver
from .registry import read_installed_release_code

UNIFIED_PREFIX: Final[str] = ".NET "
LEGACY_FRAMEWORK_PREFIX: Final[str] = ".NET Framework"
MODULAR_PREFIX: Final[str] = ".NET Core"
EMBEDDED_PREFIX: Final[str] = ".NET Native"
ALTERNATIVE_PREFIX: Final[str] = "Mono "


class DetectionStrategy(Protocol):
    """Strategy resolving signals for one class of hosting environment."""

    def resolve(self, signals: LiveSignals) -> RuntimeIdentity:
        """Return the identity described by ``signals``."""
        raise NotImplementedError


class LegacyOnlyStrategy:
    """Strategy for hosts that expose no framework description string."""

    def __init__(self, legacy: LegacyPlatformResolver) -> None:
        self._legacy = legacy

    def resolve(self, signals: LiveSignals) -> RuntimeIdentity:
        return self._legacy.resolve(signals)


class DescriptionStrategy:
    """Strategy classifying hosts by their framework description prefix."""

    def __init__(self, legacy: LegacyPlatformResolver, modular: ModularRuntimeResolver) -> None:
        self._legacy = legacy
        self._modular = modular

    def resolve(self, signals: LiveSignals) -> RuntimeIdentity:
        """Return the identity for the description carried by ``signals``.

        Raises:
            UnsupportedRuntimeError: For the embedded-compatible runtime.
            MissingRuntimeVersionError: If a unified runtime reports no version.
        """

        description = signals.framework_description or ""
        if description.startswith(UNIFIED_PREFIX):
            remainder = description[len(UNIFIED_PREFIX) :]
            if remainder[:1].isdigit():
                return RuntimeIdentity(RuntimeFamily.UNIFIED_RUNTIME, _unified_version(signals, remainder))
            if description.startswith(LEGACY_FRAMEWORK_PREFIX):
                return self._legacy.resolve(signals)
            if description.startswith(MODULAR_PREFIX):
                return self._modular.resolve(signals)
            if description.startswith(EMBEDDED_PREFIX):
                raise UnsupportedRuntimeError(f"{description!r}: embedded-compatible runtimes are not supported yet")
            return RuntimeIdentity.unknown()
        if description.startswith(ALTERNATIVE_PREFIX):
            token = first_token(description[len(ALTERNATIVE_PREFIX) :])
            return RuntimeIdentity(RuntimeFamily.ALTERNATIVE_IMPLEMENTATION, try_parse_version(token))
        return RuntimeIdentity.unknown()


def _unified_version(signals: LiveSignals, described: str) -> Version:
    version = signals.environment_version or try_parse_version(first_token(described))
    if version is None:
        raise MissingRuntimeVersionError(
            f"{signals.framework_description!r}: no environment version reported and none in the description",
        )
    return version


class Resolver:
    """Resolve live runtime signals against a build catalog.

    The resolver holds no mutable state; repeated calls with the same signals
    return equal identities.
    """

    def __init__(
        self,
        catalog: BuildCatalog | None = None,
        *,
        read_release_code: ReleaseCodeReader = read_installed_release_code,
    ) -> None:
        self.catalog = catalog if catalog is not None else default_catalog()
        legacy = LegacyPlatformResolver(read_release_code)
        self._legacy_only = LegacyOnlyStrategy(legacy)
        self._described = DescriptionStrategy(legacy, ModularRuntimeResolver(self.catalog))

    def select_strategy(self, signals: LiveSignals) -> DetectionStrategy:
        """Return the strategy matching the capabilities of the reporting host."""

        if signals.framework_description is None:
            return self._legacy_only
        return self._described

    def resolve(self, signals: LiveSignals) -> RuntimeIdentity:
        """Return the runtime identity described by ``signals``."""

        return self.select_strategy(signals).resolve(signals)


__all__ = [
    "ALTERNATIVE_PREFIX",
    "EMBEDDED_PREFIX",
    "LEGACY_FRAMEWORK_PREFIX",
    "MODULAR_PREFIX",
    "UNIFIED_PREFIX",
    "DescriptionStrategy",
    "DetectionStrategy",
    "LegacyOnlyStrategy",
    "Resolver",
]
