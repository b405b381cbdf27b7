# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the version probe under extracted runtimes and parse its output."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Final

from packaging.version import Version

from ..config import InventorySettings
from ..errors import ProbeError
from ..models import DiscoveredBuild
from ..subprocess_utils import run_command
from ..versions import parse_version, try_parse_version
from .extract import is_extracted
from .stages import Stage

# Stops the host from resolving frameworks from a system-wide install.
MULTILEVEL_LOOKUP_ENV: Final[str] = "DOTNET_MULTILEVEL_LOOKUP"
PROBE_LINE_COUNT: Final[int] = 3


def probe_environment(base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the environment used to launch the probe."""

    env = dict(os.environ if base is None else base)
    env[MULTILEVEL_LOOKUP_ENV] = "0"
    return env


def run_probe(
    executable: Path,
    probe_artifact: Path,
    *,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> list[str]:
    """Launch ``executable`` with ``probe_artifact`` and return its output lines.

    Raises:
        ProbeError: If the runtime exits non-zero or prints fewer than three lines.
    """

    completed = run_command(
        [str(executable), str(probe_artifact)],
        env=probe_environment(env),
        check=False,
        timeout=timeout,
    )
    if completed.returncode != 0:
        raise ProbeError(
            f"{executable} {probe_artifact.name} exited with status {completed.returncode}: "
            f"{(completed.stderr or '').strip() or '<no stderr>'}",
        )
    lines = [line.strip() for line in completed.stdout.splitlines() if line.strip()]
    if len(lines) < PROBE_LINE_COUNT:
        raise ProbeError(f"{executable}: expected {PROBE_LINE_COUNT} lines of probe output, got {len(lines)}")
    return lines


def parse_probe_output(lines: Sequence[str], runtime_version: Version) -> DiscoveredBuild:
    """Return the build described by probe ``lines`` for ``runtime_version``.

    Raises:
        ProbeError: If the build identifier is not a version.
    """

    try:
        build_identifier = parse_version(lines[0])
    except ValueError as exc:
        raise ProbeError(f"runtime {runtime_version}: {exc}") from exc
    return DiscoveredBuild(
        build_identifier=build_identifier,
        informational_version=lines[1],
        framework_description=lines[2],
        runtime_version=runtime_version,
    )


class ProbeRunner:
    """Probe every extracted runtime beneath the configured storage root."""

    def __init__(self, settings: InventorySettings, *, on_event: Callable[[str], None] | None = None) -> None:
        self._settings = settings
        self._on_event = on_event

    def executable_for(self, runtime_version: Version) -> Path:
        """Return the host executable of the extracted ``runtime_version``."""

        return self._settings.extract_dir / str(runtime_version) / self._settings.executable_name

    def probe_artifact_for(self, runtime_version: Version) -> Path:
        """Return the probe build targeting the major.minor of ``runtime_version``."""

        target = f"netcoreapp{runtime_version.major}.{runtime_version.minor}"
        return self._settings.probe_root / target / self._settings.probe_assembly

    def extracted_versions(self) -> list[Version]:
        """Return the runtime versions with a completed extraction, sorted."""

        root = self._settings.extract_dir
        if not root.is_dir():
            return []
        versions: list[Version] = []
        for entry in root.iterdir():
            version = try_parse_version(entry.name) if entry.is_dir() else None
            if version is not None and is_extracted(entry):
                versions.append(version)
        return sorted(versions)

    def probe(self, runtime_version: Version) -> DiscoveredBuild:
        """Return the build reported by the extracted ``runtime_version``.

        Raises:
            ProbeError: If the probe fails.
        """

        lines = run_probe(
            self.executable_for(runtime_version),
            self.probe_artifact_for(runtime_version),
            timeout=self._settings.probe_timeout,
        )
        build = parse_probe_output(lines, runtime_version)
        if self._on_event is not None:
            self._on_event(f"Probed {runtime_version}: {build.build_identifier}")
        return build

    def probe_all(self, versions: Sequence[Version] | None = None) -> list[DiscoveredBuild]:
        """Probe ``versions`` (default: every extracted runtime) concurrently.

        Raises:
            InventoryBuildError: Listing every probe that failed.
        """

        targets = list(versions) if versions is not None else self.extracted_versions()
        stage = Stage("probe", self.probe, label=str, jobs=self._settings.jobs)
        return stage.run(targets)


__all__ = [
    "MULTILEVEL_LOOKUP_ENV",
    "ProbeRunner",
    "parse_probe_output",
    "probe_environment",
    "run_probe",
]
