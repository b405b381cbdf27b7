# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Offline pipeline that builds the runtime build catalog."""

from __future__ import annotations

from .builder import InventoryBuilder, SelectedRuntime, group_builds
from .extract import Extractor, PendingExtraction, is_extracted
from .fetch import Fetcher
from .probe import ProbeRunner, parse_probe_output, run_probe
from .source import CatalogSource, Channel, ReleaseFile, ReleaseMetadataSource, RuntimeRelease
from .stages import Stage
from .verify import verify_digest, verify_or_delete

__all__ = [
    "CatalogSource",
    "Channel",
    "Extractor",
    "Fetcher",
    "InventoryBuilder",
    "PendingExtraction",
    "ProbeRunner",
    "ReleaseFile",
    "ReleaseMetadataSource",
    "RuntimeRelease",
    "SelectedRuntime",
    "Stage",
    "group_builds",
    "is_extracted",
    "parse_probe_output",
    "run_probe",
    "verify_digest",
    "verify_or_delete",
]
