"""
pglocks - PostgreSQL lock reference.

Lock modes, the SQL commands that acquire them, and which of them can run
at the same time.
"""

from pglocks._version import __version__, __version_info__

__license__ = "MIT"

# Core components
from pglocks.core import (
    logger,
    Settings,
    PgLocksError,
    DataIntegrityError,
    ConfigurationError,
    NotFoundError,
    ExportError,
)

# Models
from pglocks.models import (
    LockType,
    Lock,
    Command,
    ReferenceItem,
    TextSpan,
    Description,
    ConflictMatrix,
)

# Catalog and engine
from pglocks.catalog import ReferenceCatalog, load_catalog, catalog_from_dict
from pglocks.engine import RelationshipEngine, DescriptionGenerator, search_items

# Export
from pglocks.export import StaticExporter, RecordBuilder, to_url_slug


# Lazy import function for API
def get_app():
    """
    Get the pglocks FastAPI application (lazy import).

    FastAPI is only imported when the API is actually needed.

    Example:
        >>> app = get_app()
        >>> import uvicorn
        >>> uvicorn.run(app, host="127.0.0.1", port=8000)
    """
    from pglocks.api import create_app

    return create_app()


__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    "__license__",
    # Core
    "logger",
    "Settings",
    # Exceptions
    "PgLocksError",
    "DataIntegrityError",
    "ConfigurationError",
    "NotFoundError",
    "ExportError",
    # Models
    "LockType",
    "Lock",
    "Command",
    "ReferenceItem",
    "TextSpan",
    "Description",
    "ConflictMatrix",
    # Catalog and engine
    "ReferenceCatalog",
    "load_catalog",
    "catalog_from_dict",
    "RelationshipEngine",
    "DescriptionGenerator",
    "search_items",
    # Export
    "StaticExporter",
    "RecordBuilder",
    "to_url_slug",
    # API
    "get_app",
]
