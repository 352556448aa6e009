"""
Loads the reference table from YAML or JSON.

Any problem here is fatal: callers should refuse to start rather than
serve inconsistent data.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import Field, ValidationError

from pglocks.catalog.catalog import ReferenceCatalog
from pglocks.core.exceptions import DataIntegrityError
from pglocks.core.logging import logger, perf_logger
from pglocks.data import bundled_reference
from pglocks.models.base import PgLocksBaseModel
from pglocks.models.reference import Command, Lock

SUPPORTED_VERSION = 1


class ReferenceDocument(PgLocksBaseModel):
    """Shape of `reference.yaml`."""

    version: int = Field(default=SUPPORTED_VERSION)
    locks: List[Lock] = Field(default_factory=list)
    commands: List[Command] = Field(default_factory=list)
    conflicts: Dict[str, List[str]] = Field(default_factory=dict)


def catalog_from_dict(raw: Any, source: str = "<memory>") -> ReferenceCatalog:
    """
    Validate a parsed document and build the catalog.

    Args:
        raw: Parsed YAML/JSON content
        source: Where it came from, for error messages

    Raises:
        DataIntegrityError: malformed document or broken references
    """
    if not isinstance(raw, dict):
        raise DataIntegrityError(
            f"Reference data must be a mapping, got {type(raw).__name__}",
            context={"source": source},
        )

    try:
        document = ReferenceDocument.model_validate(raw)
    except ValidationError as e:
        raise DataIntegrityError(
            f"Invalid reference data in {source}: {e.error_count()} error(s)",
            context={
                "source": source,
                "errors": e.errors(include_url=False, include_context=False),
            },
            cause=e,
        ) from e

    if document.version != SUPPORTED_VERSION:
        raise DataIntegrityError(
            f"Unsupported reference data version {document.version} in {source}",
            context={"source": source, "version": document.version},
        )

    try:
        return ReferenceCatalog(document.locks, document.commands, document.conflicts)
    except DataIntegrityError as e:
        e.context.setdefault("source", source)
        raise


def load_catalog(path: Optional[Union[str, Path]] = None) -> ReferenceCatalog:
    """
    Load the reference catalog.

    Args:
        path: YAML or JSON file; the bundled table when None

    Raises:
        DataIntegrityError: unreadable, unparsable or inconsistent data
    """
    resource = Path(path) if path is not None else bundled_reference()
    source = str(resource)

    with perf_logger.measure("catalog_load", source=source):
        try:
            text = resource.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Cannot read reference data", source=source, error=str(e))
            raise DataIntegrityError(
                f"Cannot read reference data: {source}", context={"source": source}, cause=e
            ) from e

        try:
            if source.lower().endswith(".json"):
                raw = json.loads(text)
            else:
                raw = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error("Cannot parse reference data", source=source, error=str(e))
            raise DataIntegrityError(
                f"Cannot parse reference data {source}: {e}", context={"source": source}, cause=e
            ) from e

        catalog = catalog_from_dict(raw, source=source)

    logger.info("Reference catalog loaded", source=source, items=len(catalog))
    return catalog
