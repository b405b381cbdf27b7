# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from packaging.version import Version

from dotnet_detect.catalog import BuildCatalog, BuildRecord

COMMIT_1_0_11 = "fcfe15acadb15545b0a51683d283803445d8bbb9"
COMMIT_1_1_8 = "4fc99b8b5e0ac61b661359d8e633001137ae1a5c"
COMMIT_2_0_7 = "b8c69ed222a1e6e5392783cbb4df5faa87be349e"


@pytest.fixture
def small_catalog() -> BuildCatalog:
    """Return a catalog with one direct and one ambiguous record."""

    return BuildCatalog(
        [
            BuildRecord.direct(Version("4.6.26919.2"), Version("2.1.5")),
            BuildRecord.ambiguous(
                Version("4.6.26328.1"),
                [
                    (COMMIT_1_0_11, Version("1.0.11")),
                    (COMMIT_1_1_8, Version("1.1.8")),
                    (COMMIT_2_0_7, Version("2.0.7")),
                ],
            ),
        ],
    )


@pytest.fixture
def make_fake_runtime(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing a shell script that mimics a runtime running the probe."""

    if sys.platform == "win32":
        pytest.skip("fake runtimes are POSIX shell scripts")

    def _factory(lines: Sequence[str], *, exit_code: int = 0, name: str = "dotnet", directory: Path | None = None) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        script = target_dir / name
        body = "\n".join(f'echo "{line}"' for line in lines)
        script.write_text(f"#!/bin/sh\n{body}\nexit {exit_code}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _factory
