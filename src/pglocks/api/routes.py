"""
Read-only endpoints over the reference catalog.

Records have the same shape as the static export. Unknown slugs answer
404 with an ErrorResponse body.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from pglocks._version import __version__
from pglocks.core.exceptions import NotFoundError
from pglocks.core.logging import AsyncLogger
from pglocks.engine.descriptions import DescriptionGenerator
from pglocks.engine.relationships import RelationshipEngine
from pglocks.engine.search import search_items
from pglocks.export.records import RecordBuilder
from pglocks.models.description import Description
from pglocks.models.export import SlugMappings

router = APIRouter(prefix="/api")
logger = AsyncLogger("api")


@dataclass(frozen=True)
class ReferenceServices:
    """Everything the routes need, built once per application."""

    engine: RelationshipEngine
    descriptions: DescriptionGenerator
    records: RecordBuilder
    mappings: SlugMappings

    @classmethod
    def from_engine(cls, engine: RelationshipEngine) -> "ReferenceServices":
        records = RecordBuilder(engine)
        return cls(
            engine=engine,
            descriptions=DescriptionGenerator(engine),
            records=records,
            mappings=records.mappings(),
        )


def get_services(request: Request) -> ReferenceServices:
    return request.app.state.services


def _not_found(resource: str, slug: str) -> NotFoundError:
    logger.info("Unknown slug requested", resource=resource, slug=slug)
    return NotFoundError(
        f"{resource.capitalize()} not found: {slug}",
        context={"resource": resource, "identifier": slug},
    )


def _description_payload(description: Description) -> Dict[str, Any]:
    return {
        "subject": description.subject,
        "markdown": description.to_markdown(),
        "plain": description.to_plain(),
        "spans": [span.model_dump() for span in description.spans],
    }


@router.get("/health")
async def health_check(services: ReferenceServices = Depends(get_services)) -> Dict[str, Any]:
    """Health check endpoint"""
    catalog = services.engine.catalog
    return {
        "status": "healthy",
        "service": "pglocks",
        "version": __version__,
        "commands": len(catalog.commands),
        "locks": len(catalog.locks),
    }


@router.get("/commands")
async def list_commands(services: ReferenceServices = Depends(get_services)) -> Dict[str, Any]:
    return services.records.command_index().model_dump()


@router.get("/locks")
async def list_locks(services: ReferenceServices = Depends(get_services)) -> Dict[str, Any]:
    return services.records.lock_index().model_dump()


@router.get("/mappings")
async def slug_mappings(services: ReferenceServices = Depends(get_services)) -> Dict[str, Any]:
    return services.mappings.model_dump()


@router.get("/commands/{slug}")
async def get_command(slug: str, services: ReferenceServices = Depends(get_services)):
    name = services.mappings.commands.get(slug)
    record = services.records.command_record(name) if name else None
    if record is None:
        raise _not_found("command", slug)
    return record.model_dump()


@router.get("/commands/{slug}/description")
async def describe_command(slug: str, services: ReferenceServices = Depends(get_services)):
    name = services.mappings.commands.get(slug)
    description = services.descriptions.describe_command(name) if name else None
    if description is None:
        raise _not_found("command", slug)
    return _description_payload(description)


@router.get("/locks/{slug}")
async def get_lock(slug: str, services: ReferenceServices = Depends(get_services)):
    name = services.mappings.locks.get(slug)
    record = services.records.lock_record(name) if name else None
    if record is None:
        raise _not_found("lock", slug)
    return record.model_dump()


@router.get("/locks/{slug}/description")
async def describe_lock(slug: str, services: ReferenceServices = Depends(get_services)):
    name = services.mappings.locks.get(slug)
    description = services.descriptions.describe_lock(name) if name else None
    if description is None:
        raise _not_found("lock", slug)
    return _description_payload(description)


@router.get("/compatibility")
async def compatibility(
    a: str = Query(..., description="First command name"),
    b: str = Query(..., description="Second command name"),
    services: ReferenceServices = Depends(get_services),
) -> Dict[str, Any]:
    """
    Whether two commands can run concurrently.

    Unknown command names are answered with False, not an error.
    """
    return {
        "a": a,
        "b": b,
        "can_run_concurrently": services.engine.commands_can_run_concurrently(a, b),
    }


@router.get("/matrix")
async def conflict_matrix(
    table: bool = True,
    row: bool = True,
    services: ReferenceServices = Depends(get_services),
) -> Dict[str, Any]:
    return services.engine.conflict_matrix(include_table=table, include_row=row).model_dump()


@router.get("/search")
async def search(
    q: Optional[str] = Query(default="", description="Search term"),
    commands: bool = True,
    locks: bool = True,
    table: bool = True,
    row: bool = True,
    services: ReferenceServices = Depends(get_services),
) -> Dict[str, Any]:
    items = search_items(
        services.engine.catalog,
        q or "",
        include_commands=commands,
        include_locks=locks,
        include_table_locks=table,
        include_row_locks=row,
    )
    return {"query": q or "", "count": len(items), "items": [item.model_dump() for item in items]}
