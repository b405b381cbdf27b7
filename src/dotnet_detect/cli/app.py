# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the catalog and detection commands."""

from __future__ import annotations

import typer

from .detect import detect_command
from .scrape import scrape_command
from .show import show_command

app = typer.Typer(
    help="Runtime version detection and build catalog tooling.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("scrape")(scrape_command)
app.command("detect")(detect_command)
app.command("show")(show_command)


def main() -> None:
    """Run the CLI application."""

    app()


__all__ = ["app", "main"]
