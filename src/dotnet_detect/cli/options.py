# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared Typer option declarations for the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import STORAGE_ROOT_ENV

STORAGE_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--dotnets-path",
        envvar=STORAGE_ROOT_ENV,
        help="Where to store downloaded archives and extracted runtimes (default: ~/dotnets).",
    ),
]
RID_OPTION = Annotated[
    str | None,
    typer.Option("--rid", help="Runtime identifier of the runtimes to catalog (default: host platform)."),
]
OFFLINE_OPTION = Annotated[
    bool,
    typer.Option("--offline", help="Only probe runtimes already extracted; download nothing."),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Maximum concurrent downloads, extractions and probes."),
]
PROBE_ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--probe-root", help="Directory holding the probe builds, one per target framework."),
]
OUTPUT_OPTION = Annotated[
    Path,
    typer.Option("--output", "-o", help="File the generated build catalog is written to."),
]
CATALOG_OPTION = Annotated[
    Path | None,
    typer.Option("--catalog", help="Build catalog to use instead of the bundled one."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output."),
]

__all__ = [
    "CATALOG_OPTION",
    "EMOJI_OPTION",
    "JOBS_OPTION",
    "OFFLINE_OPTION",
    "OUTPUT_OPTION",
    "PROBE_ROOT_OPTION",
    "RID_OPTION",
    "STORAGE_OPTION",
]
