# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the `dotnet-detect show` command."""

from __future__ import annotations

import typer
from rich import box
from rich.table import Table

from ..catalog import BuildCatalog, default_catalog, load_catalog
from ..console import fail, get_console
from ..errors import CatalogIntegrityError, CatalogValidationError
from .options import CATALOG_OPTION, EMOJI_OPTION


def render_catalog(catalog: BuildCatalog) -> Table:
    """Return a table listing every record of ``catalog``."""

    table = Table(box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("Build id", style="cyan", no_wrap=True)
    table.add_column("Version", style="green")
    table.add_column("Commit", style="dim")
    for record in catalog:
        if record.version is not None:
            table.add_row(str(record.build_id), str(record.version), "")
            continue
        for index, (token, version) in enumerate(record.commits):
            table.add_row(str(record.build_id) if index == 0 else "", str(version), token)
    return table


def show_command(catalog: CATALOG_OPTION = None, emoji: EMOJI_OPTION = True) -> None:
    """Print the build catalog."""

    try:
        build_catalog = load_catalog(catalog) if catalog is not None else default_catalog()
    except (CatalogIntegrityError, CatalogValidationError, FileNotFoundError) as exc:
        fail(f"Unable to load build catalog: {exc}", use_emoji=emoji)
        raise typer.Exit(code=1) from exc

    get_console().print(render_catalog(build_catalog))


__all__ = ["render_catalog", "show_command"]
