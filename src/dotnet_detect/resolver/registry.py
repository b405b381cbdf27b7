# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read the legacy framework installation release code from the Windows registry."""

from __future__ import annotations

import sys
from typing import Final

FULL_PROFILE_KEY: Final[str] = r"SOFTWARE\Microsoft\NET Framework Setup\NDP\v4\Full"
RELEASE_VALUE: Final[str] = "Release"


def read_installed_release_code() -> int | None:
    """Return the installed legacy framework release code.

    The 64-bit registry view is requested explicitly; 32-bit Windows ignores
    the flag.

    Returns:
        int | None: Release code, or ``None`` off Windows or when the key or
        value is absent.
    """

    if sys.platform != "win32":
        return None

    import winreg

    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE,
            FULL_PROFILE_KEY,
            0,
            winreg.KEY_READ | winreg.KEY_WOW64_64KEY,
        ) as key:
            value, _ = winreg.QueryValueEx(key, RELEASE_VALUE)
    except FileNotFoundError:
        return None
    return int(value)


__all__ = ["FULL_PROFILE_KEY", "RELEASE_VALUE", "read_installed_release_code"]
