# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Runtime-side resolution of live signals into a runtime identity."""

from __future__ import annotations

from .detector import IdentityCell, RuntimeDetector, SignalProvider
from .legacy import RELEASE_BANDS, LegacyPlatformResolver, classify_release_code
from .modular import ModularRuntimeResolver, described_product_version, reports_product_version
from .registry import read_installed_release_code
from .resolver import DescriptionStrategy, DetectionStrategy, LegacyOnlyStrategy, Resolver

__all__ = [
    "RELEASE_BANDS",
    "DescriptionStrategy",
    "DetectionStrategy",
    "IdentityCell",
    "LegacyOnlyStrategy",
    "LegacyPlatformResolver",
    "ModularRuntimeResolver",
    "Resolver",
    "RuntimeDetector",
    "SignalProvider",
    "classify_release_code",
    "described_product_version",
    "read_installed_release_code",
    "reports_product_version",
]
