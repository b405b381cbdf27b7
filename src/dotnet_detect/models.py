# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core value types shared by the resolver and the inventory builder."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from packaging.version import Version

from .versions import last_token, parse_version, try_parse_version

# Zero-based index of the environment version in probe output.
ENVIRONMENT_VERSION_LINE = 4


class RuntimeFamily(str, Enum):
    """Implementation lineage of a managed runtime."""

    UNKNOWN = "Unknown"
    LEGACY_FRAMEWORK = "LegacyFramework"
    MODULAR_RUNTIME = "ModularRuntime"
    UNIFIED_RUNTIME = "UnifiedRuntime"
    EMBEDDED_COMPATIBLE = "EmbeddedCompatible"
    ALTERNATIVE_IMPLEMENTATION = "AlternativeImplementation"


@dataclass(frozen=True, slots=True)
class RuntimeIdentity:
    """Resolved runtime family and version.

    Attributes:
        family: Runtime lineage the process executes under.
        version: Public version of the runtime. ``None`` for ``Unknown`` and
            for the alternative implementation when it cannot report a
            display name.
    """

    family: RuntimeFamily
    version: Version | None = None

    def __post_init__(self) -> None:
        if self.version is None and self.family not in _VERSIONLESS_FAMILIES:
            raise ValueError(f"{self.family.value} identity requires a version")

    @classmethod
    def unknown(cls) -> RuntimeIdentity:
        """Return the identity used for unclassifiable runtimes."""

        return cls(RuntimeFamily.UNKNOWN, None)

    def __str__(self) -> str:
        if self.family is RuntimeFamily.UNKNOWN or self.version is None:
            return self.family.value
        return f"{self.family.value} {self.version}"


_VERSIONLESS_FAMILIES = frozenset({RuntimeFamily.UNKNOWN, RuntimeFamily.ALTERNATIVE_IMPLEMENTATION})


@dataclass(frozen=True, slots=True)
class LiveSignals:
    """Identifying values reported by a running process.

    Attributes:
        framework_description: Human-readable description string, ``None`` on
            hosts that do not expose one.
        environment_version: Coarse runtime version reported by the process,
            ``None`` when the host did not report one.
        build_identifier: File version of the core library assembly.
        informational_version: Informational version of the core library,
            ending in the source commit hash.
        alternative_marker_present: ``True`` when the alternative
            implementation's marker type is loaded in the process.
        alternative_display_name: Display name reported by that marker type.
    """

    framework_description: str | None = None
    environment_version: Version | None = None
    build_identifier: Version | None = None
    informational_version: str | None = None
    alternative_marker_present: bool = False
    alternative_display_name: str | None = None

    @classmethod
    def from_probe_lines(cls, lines: Sequence[str]) -> LiveSignals:
        """Build signals from probe program output.

        The first three lines are the build identifier, the informational
        string and the description. The probe may go on to print its own
        detection result and then the coarse environment version (``null``
        on hosts without one); only the latter is read.

        Raises:
            ValueError: If fewer than three lines are supplied.
        """

        if len(lines) < 3:
            raise ValueError(f"expected at least 3 probe lines, got {len(lines)}")
        environment_version = None
        if len(lines) > ENVIRONMENT_VERSION_LINE:
            environment_version = try_parse_version(lines[ENVIRONMENT_VERSION_LINE])
        return cls(
            framework_description=lines[2],
            environment_version=environment_version,
            build_identifier=parse_version(lines[0]),
            informational_version=lines[1],
        )


@dataclass(frozen=True, slots=True)
class DiscoveredBuild:
    """One runtime probed by the inventory builder."""

    build_identifier: Version
    informational_version: str
    framework_description: str
    runtime_version: Version

    @property
    def disambiguator(self) -> str:
        """Return the commit token that distinguishes releases sharing a build id."""

        return last_token(self.informational_version)


@dataclass(frozen=True, slots=True)
class PendingDownload:
    """Archive that must be present and verified on local storage."""

    version: Version
    expected_digest: str | None
    url: str
    destination: Path


__all__ = [
    "ENVIRONMENT_VERSION_LINE",
    "DiscoveredBuild",
    "LiveSignals",
    "PendingDownload",
    "RuntimeFamily",
    "RuntimeIdentity",
]
