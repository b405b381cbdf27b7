# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the `dotnet-detect scrape` command."""

from __future__ import annotations

from functools import partial
from pathlib import Path

import typer
from pydantic import ValidationError

from ..catalog import dump_catalog
from ..config import ConfigError, InventorySettings
from ..console import fail, info, ok, warn
from ..errors import CatalogIntegrityError, CatalogValidationError, InventoryBuildError, InventoryError
from ..inventory import InventoryBuilder
from .options import (
    EMOJI_OPTION,
    JOBS_OPTION,
    OFFLINE_OPTION,
    OUTPUT_OPTION,
    PROBE_ROOT_OPTION,
    RID_OPTION,
    STORAGE_OPTION,
)


def build_settings(
    *,
    dotnets_path: Path | None,
    rid: str | None,
    offline: bool,
    jobs: int | None,
    probe_root: Path | None,
) -> InventorySettings:
    """Return inventory settings, leaving unset options at their defaults."""

    overrides: dict[str, object] = {"offline": offline}
    if dotnets_path is not None:
        overrides["storage_root"] = dotnets_path.expanduser()
    if rid is not None:
        overrides["rid"] = rid
    if jobs is not None:
        overrides["jobs"] = jobs
    if probe_root is not None:
        overrides["probe_root"] = probe_root.expanduser()
    return InventorySettings.model_validate(overrides)


def scrape_command(
    dotnets_path: STORAGE_OPTION = None,
    rid: RID_OPTION = None,
    offline: OFFLINE_OPTION = False,
    jobs: JOBS_OPTION = None,
    probe_root: PROBE_ROOT_OPTION = None,
    output: OUTPUT_OPTION = Path("build_catalog.json"),
    emoji: EMOJI_OPTION = True,
) -> None:
    """Scrape build identifiers from every modular runtime release."""

    try:
        settings = build_settings(
            dotnets_path=dotnets_path,
            rid=rid,
            offline=offline,
            jobs=jobs,
            probe_root=probe_root,
        )
    except (ConfigError, ValidationError) as exc:
        fail(f"Invalid configuration: {exc}", use_emoji=emoji)
        raise typer.Exit(code=1) from exc

    mode = "offline" if settings.offline else "online"
    info(f"Building catalog for {settings.rid} under {settings.storage_root} ({mode})", use_emoji=emoji)

    builder = InventoryBuilder(settings, on_event=partial(info, use_emoji=emoji))
    try:
        catalog = builder.build()
        dump_catalog(catalog, output)
    except InventoryBuildError as exc:
        fail(f"{len(exc.failures)} unit(s) failed:", use_emoji=emoji)
        for failure in exc.failures:
            fail(failure.describe(), use_emoji=emoji)
        raise typer.Exit(code=1) from exc
    except (InventoryError, CatalogIntegrityError, CatalogValidationError, OSError) as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc

    if not len(catalog):
        warn(f"No extracted runtimes found under {settings.extract_dir}", use_emoji=emoji)
    ok(f"Wrote {len(catalog)} build records to {output}", use_emoji=emoji)


__all__ = ["build_settings", "scrape_command"]
