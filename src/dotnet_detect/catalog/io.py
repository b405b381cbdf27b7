# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading, validating and writing build catalog documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import cache
from pathlib import Path
from typing import Final, cast

from jsonschema import Draft202012Validator

from ..errors import CatalogIntegrityError, CatalogValidationError
from .records import BuildCatalog

_PACKAGE_ROOT: Final[Path] = Path(__file__).resolve().parent
DEFAULT_CATALOG_PATH: Final[Path] = _PACKAGE_ROOT / "data" / "build_catalog.json"
SCHEMA_PATH: Final[Path] = _PACKAGE_ROOT / "schema" / "build_catalog.schema.json"


def _read_json(path: Path) -> object:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as stream:
        try:
            return json.load(stream)
        except json.JSONDecodeError as exc:
            raise CatalogIntegrityError(f"{path}: failed to parse JSON") from exc


@cache
def catalog_validator() -> Draft202012Validator:
    """Return the cached schema validator for catalog documents."""

    schema = _read_json(SCHEMA_PATH)
    if not isinstance(schema, Mapping):
        raise CatalogIntegrityError(f"{SCHEMA_PATH}: schema must be a JSON object at the root level")
    return Draft202012Validator(schema)


def validate_document(document: object, *, context: str) -> Mapping[str, object]:
    """Validate ``document`` against the catalog schema.

    Args:
        document: Parsed JSON payload.
        context: Human-readable source used in error messages.

    Returns:
        Mapping[str, object]: The validated document.

    Raises:
        CatalogValidationError: If the document violates the schema.
    """

    errors = sorted(catalog_validator().iter_errors(document), key=lambda error: [str(part) for part in error.path])
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise CatalogValidationError(f"{context}: {location}: {first.message}")
    return cast(Mapping[str, object], document)


def load_catalog(path: Path) -> BuildCatalog:
    """Return the catalog stored at ``path``."""

    document = validate_document(_read_json(path), context=str(path))
    return BuildCatalog.from_document(document)


def dump_catalog(catalog: BuildCatalog, path: Path) -> None:
    """Persist ``catalog`` as JSON at ``path``."""

    document = catalog.to_document()
    validate_document(document, context=str(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")


@cache
def default_catalog() -> BuildCatalog:
    """Return the catalog bundled with the package."""

    return load_catalog(DEFAULT_CATALOG_PATH)


__all__ = [
    "DEFAULT_CATALOG_PATH",
    "SCHEMA_PATH",
    "catalog_validator",
    "default_catalog",
    "dump_catalog",
    "load_catalog",
    "validate_document",
]
