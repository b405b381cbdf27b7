# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the runtime build catalog by downloading and probing every release."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from itertools import groupby
from typing import Final

from packaging.version import Version

from ..catalog import BuildCatalog, BuildRecord
from ..config import InventorySettings
from ..errors import (
    CatalogIntegrityError,
    DigestConflictError,
    InventoryBuildError,
    MissingArtifactError,
    UnitFailure,
)
from ..models import DiscoveredBuild, PendingDownload
from ..resolver.modular import CUTOVER_MAJOR
from ..versions import parse_version
from .extract import Extractor, PendingExtraction
from .fetch import Fetcher
from .probe import ProbeRunner
from .source import CatalogSource, ReleaseFile, ReleaseMetadataSource, RuntimeRelease

LOGGER = logging.getLogger(__name__)

# 2.0.8 rebuilt ASP.NET only; its runtime archive is not a new runtime.
EXCLUDED_RELEASES: Final[frozenset[str]] = frozenset({"2.0.8"})
# 1.0.2 only published a macOS installer package.
RELEASES_WITHOUT_ARCHIVES: Final[frozenset[str]] = frozenset({"1.0.2"})

EventCallback = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class SelectedRuntime:
    """Runtime version paired with the archive chosen for the target platform."""

    version: Version
    artifact: ReleaseFile


def group_builds(builds: Iterable[DiscoveredBuild]) -> BuildCatalog:
    """Fold discovered builds into catalog records grouped by build identifier.

    Raises:
        CatalogIntegrityError: If one commit token maps to two versions within a group.
    """

    ordered = sorted(builds, key=lambda build: (build.build_identifier, build.runtime_version))
    records: list[BuildRecord] = []
    for build_id, members_iter in groupby(ordered, key=lambda build: build.build_identifier):
        members = list(members_iter)
        if len(members) == 1:
            records.append(BuildRecord.direct(build_id, members[0].runtime_version))
            continue
        seen: dict[str, Version] = {}
        for member in members:
            token = member.disambiguator
            if token in seen and seen[token] != member.runtime_version:
                raise CatalogIntegrityError(
                    f"build {build_id}: commit {token} identifies both {seen[token]} and {member.runtime_version}",
                )
            seen[token] = member.runtime_version
        records.append(
            BuildRecord.ambiguous(build_id, ((member.disambiguator, member.runtime_version) for member in members)),
        )
    return BuildCatalog(records)


class InventoryBuilder:
    """Orchestrate release discovery, download, extraction and probing."""

    def __init__(
        self,
        settings: InventorySettings,
        *,
        source: CatalogSource | None = None,
        fetcher: Fetcher | None = None,
        extractor: Extractor | None = None,
        probe_runner: ProbeRunner | None = None,
        on_event: EventCallback | None = None,
    ) -> None:
        self.settings = settings
        self._on_event = on_event
        self._source = source
        self._fetcher = fetcher or Fetcher(timeout=settings.download_timeout, jobs=settings.jobs, on_event=on_event)
        self._extractor = extractor or Extractor(settings.rid, jobs=settings.jobs, on_event=on_event)
        self._probe_runner = probe_runner or ProbeRunner(settings, on_event=on_event)

    @property
    def source(self) -> CatalogSource:
        """Return the catalog source, creating the default one on first use."""

        if self._source is None:
            self._source = ReleaseMetadataSource(timeout=self.settings.download_timeout)
        return self._source

    def build(self) -> BuildCatalog:
        """Return the build catalog for every runtime on local storage.

        Unless running offline, all releases are first downloaded and
        extracted.

        Raises:
            InventoryBuildError: If any release, download, extraction or probe failed.
            CatalogIntegrityError: If the probed builds cannot be represented.
        """

        self.settings.ensure_directories()
        if not self.settings.offline:
            selected = self.select_runtimes()
            self.download(selected)
            self.extract(selected)
        return group_builds(self.discover())

    def select_runtimes(self) -> list[SelectedRuntime]:
        """Return one archive per runtime version released before the cutover.

        Raises:
            InventoryBuildError: Listing every release without a usable archive
                and every runtime published with conflicting digests.
        """

        selected: dict[Version, ReleaseFile] = {}
        failures: list[UnitFailure] = []
        for channel in self.source.channels():
            if channel.major >= CUTOVER_MAJOR:
                continue
            for release in self.source.releases(channel):
                if not self._is_candidate(release):
                    continue
                try:
                    self._select_release(release, selected)
                except (MissingArtifactError, DigestConflictError, ValueError) as exc:
                    failures.append(UnitFailure(stage="select", unit=release.release_version, error=exc))
        if failures:
            raise InventoryBuildError(failures)
        return [SelectedRuntime(version=version, artifact=selected[version]) for version in sorted(selected)]

    def select_artifact(self, release: RuntimeRelease) -> ReleaseFile | None:
        """Return the single archive of ``release`` for the target platform.

        Returns:
            ReleaseFile | None: Matching archive, or ``None`` for releases known
            to publish no archive.

        Raises:
            MissingArtifactError: If no archive or more than one archive matches.
        """

        extension = self.settings.archive_extension
        matches = [
            artifact
            for artifact in release.files
            if artifact.rid == self.settings.rid and artifact.file_name.endswith(extension)
        ]
        if len(matches) == 1:
            return matches[0]
        if not matches and release.release_version in RELEASES_WITHOUT_ARCHIVES:
            LOGGER.debug("release %s publishes no archive; skipping", release.release_version)
            return None
        found = ", ".join(artifact.file_name for artifact in release.files) or "<none>"
        raise MissingArtifactError(
            f"Expected one {self.settings.rid} {extension} archive for version {release.release_version}, "
            f"found {len(matches)}. Files: {found}",
        )

    def download(self, selected: Sequence[SelectedRuntime]) -> None:
        """Fetch every selected archive."""

        self._fetcher.ensure_all([self._pending_download(runtime) for runtime in selected])

    def extract(self, selected: Sequence[SelectedRuntime]) -> None:
        """Extract every selected archive."""

        self._extractor.extract_all(
            [
                PendingExtraction(
                    version=runtime.version,
                    archive=self.settings.download_dir / runtime.artifact.file_name,
                    destination=self.settings.extract_dir / str(runtime.version),
                )
                for runtime in selected
            ],
        )

    def discover(self) -> list[DiscoveredBuild]:
        """Probe every extracted runtime."""

        builds = self._probe_runner.probe_all()
        self._emit(f"Discovered {len(builds)} runtime builds")
        return builds

    def _is_candidate(self, release: RuntimeRelease) -> bool:
        if not release.has_runtime or release.prerelease:
            return False
        return release.release_version not in EXCLUDED_RELEASES

    def _select_release(self, release: RuntimeRelease, selected: dict[Version, ReleaseFile]) -> None:
        artifact = self.select_artifact(release)
        if artifact is None or release.runtime_version is None:
            return
        version = parse_version(release.runtime_version)
        existing = selected.get(version)
        if existing is None:
            selected[version] = artifact
        elif existing.digest.lower() != artifact.digest.lower():
            raise DigestConflictError(
                f"runtime {version} is published as both {existing.file_name} and {artifact.file_name} "
                "with different digests",
            )

    def _pending_download(self, runtime: SelectedRuntime) -> PendingDownload:
        return PendingDownload(
            version=runtime.version,
            expected_digest=runtime.artifact.digest or None,
            url=runtime.artifact.url,
            destination=self.settings.download_dir / runtime.artifact.file_name,
        )

    def _emit(self, message: str) -> None:
        if self._on_event is not None:
            self._on_event(message)


__all__ = [
    "EXCLUDED_RELEASES",
    "RELEASES_WITHOUT_ARCHIVES",
    "InventoryBuilder",
    "SelectedRuntime",
    "group_builds",
]
