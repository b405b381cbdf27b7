# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for parsing and comparing runtime version strings."""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


def parse_version(raw: str) -> Version:
    """Return ``raw`` parsed as a :class:`Version`.

    Raises:
        ValueError: If ``raw`` is not a dotted numeric version.
    """

    candidate = raw.strip()
    try:
        return Version(candidate)
    except InvalidVersion as exc:
        raise ValueError(f"invalid version string: {raw!r}") from exc


def try_parse_version(raw: str | None) -> Version | None:
    """Return the first dotted version found in ``raw``, or ``None``."""

    if not raw:
        return None
    match = VERSION_PATTERN.search(raw)
    candidate = match.group(1) if match else raw.strip()
    try:
        return Version(candidate)
    except InvalidVersion:
        return None


def is_prerelease(raw: str) -> bool:
    """Return ``True`` when ``raw`` carries a semantic-version prerelease suffix."""

    return "-" in raw.strip()


def first_token(text: str) -> str:
    """Return the first whitespace-delimited token in ``text``."""

    parts = text.split()
    return parts[0] if parts else ""


def last_token(text: str) -> str:
    """Return the token following the last space in ``text``."""

    return text.rsplit(" ", 1)[-1]


__all__ = ["VERSION_PATTERN", "first_token", "is_prerelease", "last_token", "parse_version", "try_parse_version"]
