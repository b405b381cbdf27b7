# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for runtime archive extraction."""

from __future__ import annotations

import io
import tarfile
import zipfile
from pathlib import Path

import pytest
from packaging.version import Version

from dotnet_detect.errors import ExtractionError, InventoryBuildError
from dotnet_detect.inventory import Extractor, PendingExtraction, is_extracted


def _make_tarball(path: Path, members: dict[str, bytes]) -> Path:
    with tarfile.open(path, "w:gz") as bundle:
        for name, payload in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(payload)
            bundle.addfile(info, io.BytesIO(payload))
    return path


def _make_zip(path: Path, members: dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as bundle:
        for name, payload in members.items():
            bundle.writestr(name, payload)
    return path


def test_archive_format_follows_platform() -> None:
    assert Extractor("win-x64").archive_format == "zip"
    assert Extractor("linux-x64").archive_format == "tar.gz"
    assert Extractor("osx-x64").archive_format == "tar.gz"


def test_tarball_extraction_is_idempotent(tmp_path: Path) -> None:
    archive = _make_tarball(tmp_path / "runtime.tar.gz", {"dotnet": b"host", "shared/lib.so": b"lib"})
    destination = tmp_path / "extracted" / "2.1.5"
    extractor = Extractor("linux-x64")

    assert extractor.extract(archive, destination) is True
    assert (destination / "shared" / "lib.so").read_bytes() == b"lib"
    assert is_extracted(destination)
    assert extractor.extract(archive, destination) is False


def test_zip_extraction(tmp_path: Path) -> None:
    archive = _make_zip(tmp_path / "runtime.zip", {"dotnet.exe": b"host"})
    destination = tmp_path / "extracted" / "2.1.5"

    assert Extractor("win-x86").extract(archive, destination) is True
    assert (destination / "dotnet.exe").read_bytes() == b"host"


def test_interrupted_extraction_is_redone(tmp_path: Path) -> None:
    archive = _make_tarball(tmp_path / "runtime.tar.gz", {"dotnet": b"host"})
    destination = tmp_path / "extracted" / "1.0.4"
    destination.mkdir(parents=True)
    (destination / "partial.tmp").write_bytes(b"leftover")

    assert Extractor("linux-x64").extract(archive, destination) is True
    assert not (destination / "partial.tmp").exists()
    assert (destination / "dotnet").read_bytes() == b"host"


def test_corrupt_archive_raises(tmp_path: Path) -> None:
    archive = tmp_path / "runtime.tar.gz"
    archive.write_bytes(b"not a tarball")
    destination = tmp_path / "extracted" / "2.0.0"

    with pytest.raises(ExtractionError):
        Extractor("linux-x64").extract(archive, destination)
    assert not is_extracted(destination)


def test_extract_all_reports_failed_versions(tmp_path: Path) -> None:
    good = _make_tarball(tmp_path / "good.tar.gz", {"dotnet": b"host"})
    bad = tmp_path / "bad.tar.gz"
    bad.write_bytes(b"garbage")
    events: list[str] = []
    extractor = Extractor("linux-x64", jobs=2, on_event=events.append)

    with pytest.raises(InventoryBuildError) as excinfo:
        extractor.extract_all(
            [
                PendingExtraction(Version("2.1.5"), good, tmp_path / "out" / "2.1.5"),
                PendingExtraction(Version("2.0.0"), bad, tmp_path / "out" / "2.0.0"),
            ],
        )

    assert [failure.unit for failure in excinfo.value.failures] == ["2.0.0"]
    assert is_extracted(tmp_path / "out" / "2.1.5")
    assert "Extracted 2.1.5" in events
