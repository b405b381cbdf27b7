# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Terminal output for the scrape, detect and show commands."""

from __future__ import annotations

from functools import cache
from typing import Final

from rich.console import Console
from rich.text import Text

# Glyph and style per kind of status line.
_STATUS: Final[dict[str, tuple[str, str]]] = {
    "info": ("ℹ️", "cyan"),
    "ok": ("✅", "green"),
    "warn": ("⚠️", "yellow"),
    "fail": ("❌", "red"),
}


@cache
def get_console() -> Console:
    """Return the console shared by every command.

    Colour is only emitted when stdout is a terminal, so catalog listings
    and status lines stay plain when piped.
    """

    return Console(soft_wrap=True, highlight=False)


def _status(kind: str, message: str, *, use_emoji: bool) -> None:
    glyph, style = _STATUS[kind]
    line = Text(f"{glyph} " if use_emoji else "")
    line.append(message, style=style)
    get_console().print(line)


def info(message: str, *, use_emoji: bool) -> None:
    """Report pipeline progress or a detection step."""

    _status("info", message, use_emoji=use_emoji)


def ok(message: str, *, use_emoji: bool) -> None:
    """Report a resolved identity or a written catalog."""

    _status("ok", message, use_emoji=use_emoji)


def warn(message: str, *, use_emoji: bool) -> None:
    _status("warn", message, use_emoji=use_emoji)


def fail(message: str, *, use_emoji: bool) -> None:
    """Report a fatal error or one failed pipeline unit."""

    _status("fail", message, use_emoji=use_emoji)


__all__ = ["fail", "get_console", "info", "ok", "warn"]
