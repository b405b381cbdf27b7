# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for legacy framework release classification."""

from __future__ import annotations

import pytest
from packaging.version import Version

from dotnet_detect.errors import MissingLegacyRegistrationError, UnknownLegacyReleaseError
from dotnet_detect.models import LiveSignals, RuntimeFamily, RuntimeIdentity
from dotnet_detect.resolver import LegacyPlatformResolver, classify_release_code
from dotnet_detect.resolver.registry import read_installed_release_code


@pytest.mark.parametrize(
    ("release", "expected"),
    [
        (533320, "4.8.1"),
        (533325, "4.8.1"),
        (533319, "4.8"),
        (528040, "4.8"),
        (461808, "4.7.2"),
        (461308, "4.7.1"),
        (460798, "4.7"),
        (394802, "4.6.2"),
        (394254, "4.6.1"),
        (393295, "4.6"),
        (379893, "4.5.2"),
        (378675, "4.5.1"),
        (378389, "4.5"),
    ],
)
def test_release_code_bands(release: int, expected: str) -> None:
    assert classify_release_code(release) == Version(expected)


def test_release_code_below_every_band_is_rejected() -> None:
    with pytest.raises(UnknownLegacyReleaseError):
        classify_release_code(378388)


def test_missing_registration_raises() -> None:
    resolver = LegacyPlatformResolver(lambda: None)

    with pytest.raises(MissingLegacyRegistrationError):
        resolver.resolve(LiveSignals())


def test_alternative_marker_wins_over_registry() -> None:
    def _fail() -> int | None:
        raise AssertionError("registry must not be read")

    resolver = LegacyPlatformResolver(_fail)
    signals = LiveSignals(alternative_marker_present=True, alternative_display_name="6.8.0.105 (Debian 6.8.0.105+dfsg-3)")

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.ALTERNATIVE_IMPLEMENTATION, Version("6.8.0.105"))


def test_alternative_marker_without_display_name_has_no_version() -> None:
    resolver = LegacyPlatformResolver(lambda: 528040)

    identity = resolver.resolve(LiveSignals(alternative_marker_present=True))

    assert identity.family is RuntimeFamily.ALTERNATIVE_IMPLEMENTATION
    assert identity.version is None
    assert str(identity) == "AlternativeImplementation"


def test_registry_reader_returns_none_off_windows(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("dotnet_detect.resolver.registry.sys.platform", "linux")

    assert read_installed_release_code() is None


def test_known_family_requires_version() -> None:
    with pytest.raises(ValueError):
        RuntimeIdentity(RuntimeFamily.LEGACY_FRAMEWORK)
