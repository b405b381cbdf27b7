# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolution of legacy framework and alternative implementation hosts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from packaging.version import Version

from ..errors import MissingLegacyRegistrationError, UnknownLegacyReleaseError
from ..models import LiveSignals, RuntimeFamily, RuntimeIdentity
from ..versions import first_token, try_parse_version
from .registry import read_installed_release_code

ReleaseCodeReader = Callable[[], int | None]

# Minimum release code for each framework version, highest first.
RELEASE_BANDS: Final[tuple[tuple[int, Version], ...]] = (
    (533320, Version("4.8.1")),
    (528040, Version("4.8")),
    (461808, Version("4.7.2")),
    (461308, Version("4.7.1")),
    (460798, Version("4.7")),
    (394802, Version("4.6.2")),
    (394254, Version("4.6.1")),
    (393295, Version("4.6")),
    (379893, Version("4.5.2")),
    (378675, Version("4.5.1")),
    (378389, Version("4.5")),
)


def classify_release_code(release: int) -> Version:
    """Return the framework version installed for registry ``release``.

    Raises:
        UnknownLegacyReleaseError: If ``release`` is below every known band.
    """

    for minimum, version in RELEASE_BANDS:
        if release >= minimum:
            return version
    raise UnknownLegacyReleaseError(f"Unexpected legacy framework release code: {release}")


class LegacyPlatformResolver:
    """Resolve hosts that identify as the legacy framework or expose no description."""

    def __init__(self, read_release_code: ReleaseCodeReader = read_installed_release_code) -> None:
        self._read_release_code = read_release_code

    def resolve(self, signals: LiveSignals) -> RuntimeIdentity:
        """Return the identity for a legacy-platform host.

        The alternative implementation is checked first since it also runs
        legacy framework assemblies without a description string.

        Raises:
            MissingLegacyRegistrationError: If the installation key is absent.
            UnknownLegacyReleaseError: If the release code is too old.
        """

        if signals.alternative_marker_present:
            version = None
            if signals.alternative_display_name:
                version = try_parse_version(first_token(signals.alternative_display_name))
            return RuntimeIdentity(RuntimeFamily.ALTERNATIVE_IMPLEMENTATION, version)

        release = self._read_release_code()
        if release is None:
            raise MissingLegacyRegistrationError("Missing registry key for the legacy framework installation.")
        return RuntimeIdentity(RuntimeFamily.LEGACY_FRAMEWORK, classify_release_code(release))


__all__ = ["RELEASE_BANDS", "LegacyPlatformResolver", "ReleaseCodeReader", "classify_release_code"]
