# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Catalog source describing every published runtime release."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Final, Protocol

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import InventoryError
from ..versions import is_prerelease

LOGGER = logging.getLogger(__name__)

RELEASES_INDEX_URL: Final[str] = (
    "https://dotnetcli.blob.core.windows.net/dotnet/release-metadata/releases-index.json"
)


class ReleaseFile(BaseModel):
    """One downloadable artifact of a runtime release."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str
    rid: str = ""
    url: str
    digest: str = Field(default="", alias="hash")

    @property
    def file_name(self) -> str:
        """Return the file name component of :attr:`url`."""

        return self.url.rstrip("/").split("/")[-1]


class RuntimeRelease(BaseModel):
    """Published release together with the runtime it ships, if any."""

    model_config = ConfigDict(frozen=True)

    release_version: str
    runtime_version: str | None = None
    files: tuple[ReleaseFile, ...] = ()

    @property
    def has_runtime(self) -> bool:
        """Return ``True`` when the release ships a runtime."""

        return self.runtime_version is not None

    @property
    def prerelease(self) -> bool:
        """Return ``True`` when the shipped runtime is a prerelease build."""

        return self.runtime_version is not None and is_prerelease(self.runtime_version)

    @classmethod
    def from_metadata(cls, data: Mapping[str, object]) -> RuntimeRelease:
        """Return a release parsed from a ``releases.json`` entry."""

        runtime = data.get("runtime")
        runtime_version = None
        files: tuple[ReleaseFile, ...] = ()
        if isinstance(runtime, Mapping) and runtime.get("version"):
            runtime_version = str(runtime["version"])
            raw_files = runtime.get("files")
            if isinstance(raw_files, Sequence):
                files = tuple(ReleaseFile.model_validate(entry) for entry in raw_files)
        return cls(
            release_version=str(data.get("release-version", "")),
            runtime_version=runtime_version,
            files=files,
        )


class Channel(BaseModel):
    """Product channel (major.minor line) listed in the release index."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    channel_version: str = Field(alias="channel-version")
    releases_url: str = Field(alias="releases.json")

    @property
    def major(self) -> int:
        """Return the major version of the channel."""

        return int(self.channel_version.split(".")[0])


class CatalogSource(Protocol):
    """Read-only view of the published runtime releases."""

    def channels(self) -> Sequence[Channel]:
        """Return every product channel."""
        raise NotImplementedError

    def releases(self, channel: Channel) -> Sequence[RuntimeRelease]:
        """Return the releases of ``channel`` in published order."""
        raise NotImplementedError


class ReleaseMetadataSource:
    """Catalog source backed by the public release-metadata JSON documents."""

    def __init__(
        self,
        *,
        index_url: str = RELEASES_INDEX_URL,
        session: requests.Session | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._index_url = index_url
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def channels(self) -> Sequence[Channel]:
        payload = self._get_json(self._index_url)
        entries = payload.get("releases-index")
        if not isinstance(entries, list):
            raise InventoryError(f"{self._index_url}: missing 'releases-index' array")
        try:
            return tuple(Channel.model_validate(entry) for entry in entries)
        except ValidationError as exc:
            raise InventoryError(f"{self._index_url}: malformed channel entry") from exc

    def releases(self, channel: Channel) -> Sequence[RuntimeRelease]:
        payload = self._get_json(channel.releases_url)
        entries = payload.get("releases")
        if not isinstance(entries, list):
            raise InventoryError(f"{channel.releases_url}: missing 'releases' array")
        try:
            return tuple(RuntimeRelease.from_metadata(entry) for entry in entries if isinstance(entry, Mapping))
        except ValidationError as exc:
            raise InventoryError(f"{channel.releases_url}: malformed release entry") from exc

    def _get_json(self, url: str) -> Mapping[str, object]:
        LOGGER.debug("fetching release metadata %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise InventoryError(f"failed to fetch release metadata from {url}: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise InventoryError(f"{url}: release metadata must be a JSON object")
        return payload


__all__ = [
    "RELEASES_INDEX_URL",
    "CatalogSource",
    "Channel",
    "ReleaseFile",
    "ReleaseMetadataSource",
    "RuntimeRelease",
]
