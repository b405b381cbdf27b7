# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Static catalog mapping internal build identifiers to public releases."""

from __future__ import annotations

from .io import DEFAULT_CATALOG_PATH, default_catalog, dump_catalog, load_catalog, validate_document
from .records import SCHEMA_VERSION, BuildCatalog, BuildRecord

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "SCHEMA_VERSION",
    "BuildCatalog",
    "BuildRecord",
    "default_catalog",
    "dump_catalog",
    "load_catalog",
    "validate_document",
]
