# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Build catalog records mapping internal build identifiers to public versions."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Final

from packaging.version import Version

from ..errors import CatalogIntegrityError, CatalogValidationError
from ..versions import parse_version

LOGGER = logging.getLogger(__name__)

SCHEMA_VERSION: Final[int] = 1
_BUILD_ID_KEY: Final[str] = "buildId"
_VERSION_KEY: Final[str] = "version"
_COMMITS_KEY: Final[str] = "commits"


@dataclass(frozen=True, slots=True)
class BuildRecord:
    """Catalog entry for one internal build identifier.

    Exactly one of ``version`` (the build id identifies a single release) or
    ``commits`` (commit token to release, for build ids shared by several
    releases) is populated.
    """

    build_id: Version
    version: Version | None = None
    commits: tuple[tuple[str, Version], ...] = ()

    def __post_init__(self) -> None:
        if (self.version is None) == (not self.commits):
            raise CatalogValidationError(
                f"build {self.build_id}: record must define exactly one of a version or a commit mapping",
            )

    @classmethod
    def direct(cls, build_id: Version, version: Version) -> BuildRecord:
        """Return a record whose build id maps to a single release."""

        return cls(build_id=build_id, version=version)

    @classmethod
    def ambiguous(cls, build_id: Version, pairs: Iterable[tuple[str, Version]]) -> BuildRecord:
        """Return a record disambiguated by commit token.

        A repeated commit token keeps its first entry; later duplicates are
        dropped with a warning.
        """

        commits: list[tuple[str, Version]] = []
        seen: dict[str, Version] = {}
        for token, version in pairs:
            if token in seen:
                LOGGER.warning(
                    "build %s: commit %s maps to both %s and %s; keeping %s",
                    build_id,
                    token,
                    seen[token],
                    version,
                    seen[token],
                )
                continue
            seen[token] = version
            commits.append((token, version))
        return cls(build_id=build_id, commits=tuple(commits))

    @property
    def is_ambiguous(self) -> bool:
        """Return ``True`` when the record needs a commit token to resolve."""

        return self.version is None

    def version_for_commit(self, token: str) -> Version | None:
        """Return the release built from ``token`` or ``None`` when unknown."""

        for candidate, version in self.commits:
            if candidate == token:
                return version
        return None

    def to_document(self) -> dict[str, object]:
        """Return the JSON representation of the record."""

        if self.version is not None:
            return {_BUILD_ID_KEY: str(self.build_id), _VERSION_KEY: str(self.version)}
        return {
            _BUILD_ID_KEY: str(self.build_id),
            _COMMITS_KEY: {token: str(version) for token, version in self.commits},
        }

    @classmethod
    def from_document(cls, data: Mapping[str, object]) -> BuildRecord:
        """Return a record parsed from its JSON representation.

        Raises:
            CatalogValidationError: If the document is malformed.
        """

        raw_build_id = data.get(_BUILD_ID_KEY)
        if not isinstance(raw_build_id, str):
            raise CatalogValidationError("catalog record requires a string 'buildId'")
        try:
            build_id = parse_version(raw_build_id)
            raw_version = data.get(_VERSION_KEY)
            raw_commits = data.get(_COMMITS_KEY)
            if raw_version is not None and raw_commits is not None:
                raise CatalogValidationError(f"build {raw_build_id}: record defines both a version and commits")
            if isinstance(raw_version, str):
                return cls.direct(build_id, parse_version(raw_version))
            if isinstance(raw_commits, Mapping):
                return cls.ambiguous(
                    build_id,
                    ((str(token), parse_version(str(version))) for token, version in raw_commits.items()),
                )
        except ValueError as exc:
            raise CatalogValidationError(f"build {raw_build_id}: {exc}") from exc
        raise CatalogValidationError(f"build {raw_build_id}: record must define 'version' or 'commits'")


class BuildCatalog:
    """Read-only collection of :class:`BuildRecord` entries ordered by build id."""

    def __init__(self, records: Iterable[BuildRecord]) -> None:
        ordered = sorted(records, key=lambda record: record.build_id)
        index: dict[Version, BuildRecord] = {}
        for record in ordered:
            if record.build_id in index:
                raise CatalogIntegrityError(f"build {record.build_id} appears more than once in the catalog")
            index[record.build_id] = record
        self._records = tuple(ordered)
        self._index = index

    @property
    def records(self) -> tuple[BuildRecord, ...]:
        """Return the records in build id order."""

        return self._records

    def get(self, build_id: Version) -> BuildRecord | None:
        """Return the record for ``build_id`` when present."""

        return self._index.get(build_id)

    def __contains__(self, build_id: object) -> bool:
        return build_id in self._index

    def __iter__(self) -> Iterator[BuildRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BuildCatalog):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"BuildCatalog(records={len(self._records)})"

    def to_document(self) -> dict[str, object]:
        """Return the JSON document representing the catalog."""

        return {
            "schemaVersion": SCHEMA_VERSION,
            "records": [record.to_document() for record in self._records],
        }

    @classmethod
    def from_document(cls, document: Mapping[str, object]) -> BuildCatalog:
        """Return a catalog parsed from a JSON document.

        Raises:
            CatalogValidationError: If the document is malformed.
        """

        version = document.get("schemaVersion")
        if version != SCHEMA_VERSION:
            raise CatalogValidationError(f"unsupported catalog schemaVersion: {version!r}")
        records = document.get("records")
        if not isinstance(records, list):
            raise CatalogValidationError("catalog document requires a 'records' array")
        parsed: list[BuildRecord] = []
        for entry in records:
            if not isinstance(entry, Mapping):
                raise CatalogValidationError("catalog records must be objects")
            parsed.append(BuildRecord.from_document(entry))
        return cls(parsed)


__all__ = ["SCHEMA_VERSION", "BuildCatalog", "BuildRecord"]
