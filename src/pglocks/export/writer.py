"""
Static export of the JSON API.

Layout under `<output>/api/`:

    command/<slug>/index.json
    command/index.json
    lock/<slug>/index.json
    lock/index.json
    mappings/index.json

The tree can be served by any static file host without a backend.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from pglocks.core.exceptions import ExportError
from pglocks.core.logging import AsyncLogger, perf_logger
from pglocks.engine.relationships import RelationshipEngine
from pglocks.export.records import RecordBuilder
from pglocks.export.slug import to_url_slug

API_DIR = "api"
INDEX_FILE = "index.json"

logger = AsyncLogger("export")

ProgressCallback = Callable[[str, str], None]
"""Called with (kind, name) after each record file is written."""


@dataclass
class ExportResult:
    """Summary of one export run."""

    api_dir: Path
    command_files: List[Path] = field(default_factory=list)
    lock_files: List[Path] = field(default_factory=list)
    index_files: List[Path] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.command_files) + len(self.lock_files) + len(self.index_files)


class StaticExporter:
    """Writes every command and lock record plus the index listings."""

    def __init__(self, engine: RelationshipEngine):
        self.engine = engine
        self.records = RecordBuilder(engine)

    def export(
        self, output_dir: Union[str, Path], on_item: Optional[ProgressCallback] = None
    ) -> ExportResult:
        """
        Write the API tree.

        Args:
            output_dir: Root directory; files go under `<output_dir>/api`
            on_item: Optional progress callback

        Returns:
            ExportResult with every written path

        Raises:
            DataIntegrityError: slug collision (checked before any write)
            ExportError: filesystem failure
        """
        catalog = self.engine.catalog
        # Fails before touching the disk
        mappings = self.records.mappings()

        api_dir = Path(output_dir) / API_DIR
        result = ExportResult(api_dir=api_dir)

        with perf_logger.measure("static_export", output=str(api_dir)):
            for command in catalog.commands:
                record = self.records.build_command_record(command)
                path = api_dir / "command" / to_url_slug(command.name) / INDEX_FILE
                self._write_json(path, record.model_dump())
                result.command_files.append(path)
                logger.debug("Command exported", name=command.name, path=str(path))
                if on_item:
                    on_item("command", command.name)

            for lock in catalog.locks:
                record = self.records.build_lock_record(lock)
                path = api_dir / "lock" / to_url_slug(lock.name) / INDEX_FILE
                self._write_json(path, record.model_dump())
                result.lock_files.append(path)
                logger.debug("Lock exported", name=lock.name, path=str(path))
                if on_item:
                    on_item("lock", lock.name)

            index_payloads = [
                (api_dir / "command" / INDEX_FILE, self.records.command_index().model_dump()),
                (api_dir / "lock" / INDEX_FILE, self.records.lock_index().model_dump()),
                (api_dir / "mappings" / INDEX_FILE, mappings.model_dump()),
            ]
            for path, payload in index_payloads:
                self._write_json(path, payload)
                result.index_files.append(path)

        logger.info(
            "Static API generated",
            commands=len(result.command_files),
            locks=len(result.lock_files),
            output=str(api_dir),
        )
        return result

    @staticmethod
    def _write_json(path: Path, payload: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.error("Cannot write export file", path=str(path), error=str(e))
            raise ExportError(
                f"Cannot write {path}: {e}", context={"path": str(path)}, cause=e
            ) from e
