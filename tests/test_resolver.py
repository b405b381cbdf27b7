# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the runtime resolver decision procedure."""

from __future__ import annotations

import pytest
from packaging.version import Version

from dotnet_detect.catalog import BuildCatalog, default_catalog
from dotnet_detect.errors import (
    MissingRuntimeVersionError,
    UnknownBuildIdentifierError,
    UnknownDisambiguatorError,
    UnsupportedRuntimeError,
)
from dotnet_detect.models import LiveSignals, RuntimeFamily, RuntimeIdentity
from dotnet_detect.resolver import DescriptionStrategy, LegacyOnlyStrategy, Resolver

COMMIT_1_0_11 = "fcfe15acadb15545b0a51683d283803445d8bbb9"
COMMIT_2_0_7 = "b8c69ed222a1e6e5392783cbb4df5faa87be349e"

COMPATIBILITY_VERSION = Version("4.0.30319.42000")


def _no_registry() -> int | None:
    raise AssertionError("registry must not be read")


def test_modular_runtime_resolves_through_bundled_catalog() -> None:
    resolver = Resolver(default_catalog(), read_release_code=_no_registry)
    signals = LiveSignals(
        framework_description=".NET Core 4.6.26919.02",
        environment_version=Version("2.1"),
        build_identifier=Version("4.6.26919.02"),
        informational_version="4.6.26919.02 @BuiltBy: dlab14 @SrcCode: https://github.com/dotnet/coreclr/tree/abc",
    )

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, Version("2.1.5"))


def test_modular_runtime_ignores_compatibility_environment_version(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)
    signals = LiveSignals(
        framework_description=".NET Core 4.6.26919.02",
        environment_version=COMPATIBILITY_VERSION,
        build_identifier=Version("4.6.26919.2"),
    )

    assert resolver.resolve(signals).version == Version("2.1.5")


def test_alternative_implementation_from_description() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)
    signals = LiveSignals(framework_description="Mono 6.12.0.122 (tarball Mon Feb 22 17:33:28 UTC 2021)")

    identity = resolver.resolve(signals)

    assert identity == RuntimeIdentity(RuntimeFamily.ALTERNATIVE_IMPLEMENTATION, Version("6.12.0.122"))
    assert str(identity) == "AlternativeImplementation 6.12.0.122"


def test_missing_description_uses_legacy_registry() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=lambda: 528049)

    identity = resolver.resolve(LiveSignals(framework_description=None))

    assert identity == RuntimeIdentity(RuntimeFamily.LEGACY_FRAMEWORK, Version("4.8"))


def test_unified_runtime_uses_reported_version_without_catalog() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)
    signals = LiveSignals(framework_description=".NET 7.0.1", environment_version=Version("7.0.1"))

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.UNIFIED_RUNTIME, Version("7.0.1"))


def test_modular_runtime_from_cutover_reports_own_version() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)
    signals = LiveSignals(
        framework_description=".NET Core 3.1.32",
        environment_version=Version("3.1.32"),
        build_identifier=Version("4.700.22.55902"),
    )

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, Version("3.1.32"))


def test_legacy_framework_description_delegates_to_registry() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=lambda: 533325)
    signals = LiveSignals(framework_description=".NET Framework 4.8.9032.0")

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.LEGACY_FRAMEWORK, Version("4.8.1"))


def test_embedded_runtime_is_unsupported() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)

    with pytest.raises(UnsupportedRuntimeError):
        resolver.resolve(LiveSignals(framework_description=".NET Native 2.2"))


@pytest.mark.parametrize(
    "description",
    [".NET Nanoframework", ".NET", "CoreRT 1.0", "", "mono 6.12"],
)
def test_unrecognised_descriptions_are_unknown(description: str) -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)

    identity = resolver.resolve(LiveSignals(framework_description=description))

    assert identity == RuntimeIdentity.unknown()
    assert str(identity) == "Unknown"


def test_ambiguous_build_uses_commit_token(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)

    def _signals(commit: str) -> LiveSignals:
        return LiveSignals(
            framework_description=".NET Core 4.6.26328.01",
            build_identifier=Version("4.6.26328.1"),
            informational_version=f"4.6.26328.01. Commit Hash: {commit}",
        )

    assert resolver.resolve(_signals(COMMIT_1_0_11)).version == Version("1.0.11")
    assert resolver.resolve(_signals(COMMIT_2_0_7)).version == Version("2.0.7")


def test_repeated_commit_in_bundled_catalog_resolves_to_first_release() -> None:
    resolver = Resolver(default_catalog(), read_release_code=_no_registry)
    signals = LiveSignals(
        framework_description=".NET Core 4.6.26328.01",
        build_identifier=Version("4.6.26328.1"),
        informational_version=f"4.6.26328.01. Commit Hash: {COMMIT_2_0_7}",
    )

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, Version("2.0.7"))


def test_unknown_build_identifier_fails_loudly(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)
    signals = LiveSignals(framework_description=".NET Core 4.6.1", build_identifier=Version("4.6.99999.1"))

    with pytest.raises(UnknownBuildIdentifierError):
        resolver.resolve(signals)


def test_missing_build_identifier_fails_loudly(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)

    with pytest.raises(UnknownBuildIdentifierError):
        resolver.resolve(LiveSignals(framework_description=".NET Core 4.6.1"))


def test_unknown_commit_token_fails_loudly(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)
    signals = LiveSignals(
        framework_description=".NET Core 4.6.26328.01",
        build_identifier=Version("4.6.26328.1"),
        informational_version="4.6.26328.01. Commit Hash: 0000000000000000000000000000000000000000",
    )

    with pytest.raises(UnknownDisambiguatorError):
        resolver.resolve(signals)


def test_resolution_is_deterministic(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)
    signals = LiveSignals(
        framework_description=".NET Core 4.6.26919.02",
        build_identifier=Version("4.6.26919.2"),
    )

    first = resolver.resolve(signals)
    second = resolver.resolve(signals)

    assert first == second
    assert hash(first) == hash(second)


def test_strategy_selection_follows_description_capability(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)

    assert isinstance(resolver.select_strategy(LiveSignals()), LegacyOnlyStrategy)
    assert isinstance(resolver.select_strategy(LiveSignals(framework_description=".NET 8.0.0")), DescriptionStrategy)


def test_live_signals_from_probe_lines() -> None:
    signals = LiveSignals.from_probe_lines(
        ["4.6.26919.02", "4.6.26919.02 abc123", ".NET Core 4.6.26919.02", "Unknown", "4.0.30319.42000"],
    )

    assert signals.build_identifier == Version("4.6.26919.2")
    assert signals.informational_version == "4.6.26919.02 abc123"
    assert signals.environment_version == COMPATIBILITY_VERSION

    with pytest.raises(ValueError):
        LiveSignals.from_probe_lines(["4.6.26919.02"])


@pytest.mark.parametrize(
    "lines",
    [
        ["7.0.122.56804", "7.0.1+d099f075", ".NET 7.0.1"],
        ["7.0.122.56804", "7.0.1+d099f075", ".NET 7.0.1", "Unknown", "null"],
    ],
)
def test_probe_lines_without_environment_version(lines: list[str]) -> None:
    assert LiveSignals.from_probe_lines(lines).environment_version is None


def test_unified_runtime_version_falls_back_to_description() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)

    identity = resolver.resolve(LiveSignals(framework_description=".NET 7.0.1"))

    assert identity == RuntimeIdentity(RuntimeFamily.UNIFIED_RUNTIME, Version("7.0.1"))


def test_unified_runtime_without_any_version_fails_loudly() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)

    with pytest.raises(MissingRuntimeVersionError):
        resolver.resolve(LiveSignals(framework_description=".NET 5x"))


def test_modular_runtime_from_cutover_reads_description_without_environment() -> None:
    resolver = Resolver(BuildCatalog([]), read_release_code=_no_registry)
    signals = LiveSignals(
        framework_description=".NET Core 3.1.32",
        build_identifier=Version("4.700.22.55902"),
        informational_version="3.1.32+abc",
    )

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, Version("3.1.32"))


def test_pre_cutover_description_still_uses_catalog(small_catalog: BuildCatalog) -> None:
    resolver = Resolver(small_catalog, read_release_code=_no_registry)
    signals = LiveSignals(framework_description=".NET Core 4.6.26919.02", build_identifier=Version("4.6.26919.2"))

    assert resolver.resolve(signals) == RuntimeIdentity(RuntimeFamily.MODULAR_RUNTIME, Version("2.1.5"))
