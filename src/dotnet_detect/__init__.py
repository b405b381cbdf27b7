# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Identify the managed runtime family and exact version of a process."""

from __future__ import annotations

from .catalog import BuildCatalog, BuildRecord, default_catalog
from .models import LiveSignals, RuntimeFamily, RuntimeIdentity
from .resolver import Resolver, RuntimeDetector

__all__ = [
    "BuildCatalog",
    "BuildRecord",
    "LiveSignals",
    "Resolver",
    "RuntimeDetector",
    "RuntimeFamily",
    "RuntimeIdentity",
    "default_catalog",
]
