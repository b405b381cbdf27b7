# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content digest verification for downloaded runtime archives."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Final

from ..errors import DownloadIntegrityError, UnsupportedDigestError

LOGGER = logging.getLogger(__name__)

_ALGORITHMS_BY_LENGTH: Final[dict[int, str]] = {64: "sha256", 128: "sha512"}
_CHUNK_SIZE: Final[int] = 1024 * 1024


def compute_digest(path: Path, algorithm: str) -> str:
    """Return the lowercase hex digest of ``path`` using ``algorithm``."""

    hasher = hashlib.new(algorithm)
    with path.open("rb") as stream:
        for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def algorithm_for(expected: str) -> str:
    """Return the digest algorithm producing hex digests as long as ``expected``.

    Raises:
        UnsupportedDigestError: If no supported algorithm matches the length.
    """

    algorithm = _ALGORITHMS_BY_LENGTH.get(len(expected))
    if algorithm is None:
        raise UnsupportedDigestError(f"unexpected digest length {len(expected)}: {expected!r}")
    return algorithm


def verify_digest(path: Path, expected: str | None) -> bool:
    """Return ``True`` when ``path`` matches ``expected``; no digest always passes."""

    if not expected:
        return True
    return compute_digest(path, algorithm_for(expected)) == expected.lower()


def verify_or_delete(path: Path, expected: str | None, *, raise_on_mismatch: bool = False) -> bool:
    """Verify ``path`` and delete it when the digest does not match.

    Args:
        path: File to verify.
        expected: Expected hex digest, or ``None`` when the source supplies none.
        raise_on_mismatch: Raise instead of returning ``False`` on mismatch.

    Returns:
        bool: ``True`` when the file verified.

    Raises:
        DownloadIntegrityError: On mismatch when ``raise_on_mismatch`` is set.
    """

    if not expected:
        return True
    actual = compute_digest(path, algorithm_for(expected))
    if actual == expected.lower():
        return True
    LOGGER.debug("digest mismatch for %s; deleting", path)
    path.unlink(missing_ok=True)
    if raise_on_mismatch:
        raise DownloadIntegrityError(f"For file {path.name}, expected digest {expected} but got {actual}")
    return False


__all__ = ["algorithm_for", "compute_digest", "verify_digest", "verify_or_delete"]
