"""
Static JSON API export.
"""

from pglocks.export.slug import to_url_slug
from pglocks.export.records import RecordBuilder
from pglocks.export.writer import StaticExporter, ExportResult, API_DIR, INDEX_FILE

__all__ = [
    "to_url_slug",
    "RecordBuilder",
    "StaticExporter",
    "ExportResult",
    "API_DIR",
    "INDEX_FILE",
]
