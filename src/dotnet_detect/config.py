# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the runtime inventory builder."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

STORAGE_ROOT_ENV: Final[str] = "DOTNETS_PATH"
DEFAULT_STORAGE_DIRNAME: Final[str] = "dotnets"
DEFAULT_PROBE_ASSEMBLY: Final[str] = "VersionProbe.dll"
WINDOWS_RID_PREFIX: Final[str] = "win-"

_OS_RID_NAMES: Final[dict[str, str]] = {"windows": "win", "linux": "linux", "darwin": "osx"}
_ARCH_RID_NAMES: Final[dict[str, str]] = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "armv7l": "arm",
}


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


def default_storage_root() -> Path:
    """Return the storage root from ``DOTNETS_PATH`` or ``~/dotnets``."""

    env_value = os.environ.get(STORAGE_ROOT_ENV)
    if env_value:
        return Path(env_value).expanduser()
    return Path.home() / DEFAULT_STORAGE_DIRNAME


def host_rid() -> str:
    """Return the runtime identifier describing the host platform.

    Raises:
        ConfigError: If the host operating system has no known identifier.
    """

    system = platform.system().lower()
    os_name = _OS_RID_NAMES.get(system)
    if os_name is None:
        raise ConfigError(f"no runtime identifier known for operating system '{system}'")
    machine = platform.machine().lower()
    return f"{os_name}-{_ARCH_RID_NAMES.get(machine, machine)}"


def default_parallel_jobs() -> int:
    """Return a worker count for I/O and process-launch bound stages."""

    return max(1, min(32, (os.cpu_count() or 1) + 4))


def is_windows_rid(rid: str) -> bool:
    """Return ``True`` when ``rid`` targets Windows."""

    return rid.startswith(WINDOWS_RID_PREFIX)


class InventorySettings(BaseModel):
    """Settings controlling where and how runtimes are downloaded and probed."""

    model_config = ConfigDict(validate_assignment=True)

    storage_root: Path = Field(default_factory=default_storage_root)
    rid: str = Field(default_factory=host_rid)
    offline: bool = False
    jobs: int = Field(default_factory=default_parallel_jobs, ge=1)
    download_timeout: float = Field(default=300.0, gt=0)
    probe_timeout: float = Field(default=60.0, gt=0)
    probe_root: Path = Field(default_factory=lambda: Path("probe") / "bin")
    probe_assembly: str = DEFAULT_PROBE_ASSEMBLY

    @field_validator("rid")
    @classmethod
    def _validate_rid(cls, value: str) -> str:
        rid = value.strip().lower()
        if "-" not in rid:
            raise ValueError(f"runtime identifier must look like '<os>-<arch>', got '{value}'")
        return rid

    @property
    def is_windows(self) -> bool:
        """Return ``True`` when the target platform is Windows."""

        return is_windows_rid(self.rid)

    @property
    def archive_extension(self) -> str:
        """Return the archive extension published for the target platform."""

        return ".zip" if self.is_windows else ".tar.gz"

    @property
    def executable_name(self) -> str:
        """Return the runtime host executable name for the target platform."""

        return "dotnet.exe" if self.is_windows else "dotnet"

    @property
    def download_dir(self) -> Path:
        """Return the directory holding downloaded archives."""

        return self.storage_root / self.rid / "downloads"

    @property
    def extract_dir(self) -> Path:
        """Return the directory holding one extracted runtime per version."""

        return self.storage_root / self.rid / "extracted"

    def ensure_directories(self) -> None:
        """Create the download and extraction directories."""

        self.download_dir.mkdir(parents=True, exist_ok=True)
        self.extract_dir.mkdir(parents=True, exist_ok=True)


__all__ = [
    "STORAGE_ROOT_ENV",
    "ConfigError",
    "InventorySettings",
    "default_parallel_jobs",
    "default_storage_root",
    "host_rid",
    "is_windows_rid",
]
