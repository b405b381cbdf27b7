# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the `dotnet-detect detect` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..catalog import default_catalog, load_catalog
from ..console import fail, info, ok
from ..errors import CatalogIntegrityError, CatalogValidationError, ProbeError, ResolutionError
from ..inventory import run_probe
from ..models import LiveSignals
from ..resolver import Resolver, RuntimeDetector
from .options import CATALOG_OPTION, EMOJI_OPTION

DOTNET_OPTION = Annotated[
    Path,
    typer.Option("--dotnet", help="Runtime host executable to probe.", exists=True, dir_okay=False),
]
PROBE_OPTION = Annotated[
    Path,
    typer.Option("--probe", help="Probe assembly matching the runtime's target framework.", exists=True),
]
TIMEOUT_OPTION = Annotated[
    float,
    typer.Option("--timeout", min=0.1, help="Seconds to wait for the probe before giving up."),
]


def detect_command(
    dotnet: DOTNET_OPTION,
    probe: PROBE_OPTION,
    catalog: CATALOG_OPTION = None,
    timeout: TIMEOUT_OPTION = 60.0,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Probe a runtime and print the family and version it resolves to."""

    try:
        build_catalog = load_catalog(catalog) if catalog is not None else default_catalog()
    except (CatalogIntegrityError, CatalogValidationError, FileNotFoundError) as exc:
        fail(f"Unable to load build catalog: {exc}", use_emoji=emoji)
        raise typer.Exit(code=1) from exc

    def _signals() -> LiveSignals:
        return LiveSignals.from_probe_lines(run_probe(dotnet, probe, timeout=timeout))

    detector = RuntimeDetector(_signals, Resolver(build_catalog))
    try:
        identity = detector.detect()
    except (ProbeError, ResolutionError, ValueError) as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc

    info(f"Probed {dotnet}", use_emoji=emoji)
    ok(str(identity), use_emoji=emoji)


__all__ = ["detect_command"]
