"""Tests for the static JSON API export"""
import json

import pytest

from pglocks.catalog import catalog_from_dict
from pglocks.core.exceptions import DataIntegrityError, ExportError
from pglocks.engine import RelationshipEngine
from pglocks.export import RecordBuilder, StaticExporter


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestRecords:
    """Test record shapes shared by the exporter and the HTTP API"""

    def test_command_record(self, engine):
        record = RecordBuilder(engine).command_record("SELECT")
        assert record.name == "SELECT"
        assert record.locks == ["ACCESS SHARE"]
        assert record.conflicts.locks == ["ACCESS EXCLUSIVE"]
        assert "VACUUM FULL" in record.conflicts.commands
        assert "SELECT" not in record.conflicts.commands

    def test_lock_record(self, engine):
        record = RecordBuilder(engine).lock_record("ACCESS SHARE")
        assert record.type == "table"
        assert record.commands == ["SELECT", "COPY TO"]
        assert record.conflicts.locks == ["ACCESS EXCLUSIVE"]
        assert record.conflicts.commands == list(
            engine.commands_conflicting_with_lock("ACCESS SHARE")
        )

    def test_row_lock_record(self, engine):
        record = RecordBuilder(engine).lock_record("FOR SHARE")
        assert record.type == "row"
        assert record.commands == []
        assert record.conflicts.locks == ["FOR NO KEY UPDATE", "FOR UPDATE"]

    def test_lock_record_one_directional(self, tiny_engine):
        record = RecordBuilder(tiny_engine).lock_record("BETA")
        assert record.conflicts.locks == ["BETA", "ALPHA"]
        assert record.conflicts.commands == ["WRITE", "READ", "BOTH"]

    def test_unknown(self, engine):
        builder = RecordBuilder(engine)
        assert builder.command_record("NOPE") is None
        assert builder.lock_record("NOPE") is None

    def test_indexes(self, engine):
        builder = RecordBuilder(engine)
        commands = builder.command_index().commands
        locks = builder.lock_index().locks
        assert len(commands) == 69
        assert len(locks) == 12
        assert commands[0].model_dump() == {
            "name": "SELECT",
            "url": "select",
            "description": "Read data from table; acquires ACCESS SHARE table lock.",
        }
        assert locks[-1].url == "for-update"
        assert locks[-1].type == "row"

    def test_mappings(self, engine):
        mappings = RecordBuilder(engine).mappings()
        assert mappings.commands["update-no-keys"] == "UPDATE (NO KEYS)"
        assert mappings.commands["alter-table-set-drop-default"] == "ALTER TABLE SET/DROP DEFAULT"
        assert mappings.locks["share-row-exclusive"] == "SHARE ROW EXCLUSIVE"
        assert len(mappings.commands) == 69
        assert len(mappings.locks) == 12

    def test_slug_collision(self, tiny_document):
        tiny_document["commands"].append({"name": "A B", "locks": []})
        tiny_document["commands"].append({"name": "A/B", "locks": []})
        builder = RecordBuilder(RelationshipEngine(catalog_from_dict(tiny_document)))
        with pytest.raises(DataIntegrityError, match="share the slug 'a-b'") as exc_info:
            builder.mappings()
        assert exc_info.value.context["names"] == ["A B", "A/B"]


class TestStaticExporter:
    """Test writing the api/ tree"""

    def test_export_bundled(self, engine, tmp_path):
        result = StaticExporter(engine).export(tmp_path)

        assert result.api_dir == tmp_path / "api"
        assert len(result.command_files) == 69
        assert len(result.lock_files) == 12
        assert len(result.index_files) == 3
        assert result.total_files == 84
        assert all(path.is_file() for path in result.command_files + result.lock_files)

    def test_layout(self, engine, tmp_path):
        StaticExporter(engine).export(tmp_path)
        api = tmp_path / "api"

        select = _read(api / "command" / "select" / "index.json")
        assert select == RecordBuilder(engine).command_record("SELECT").model_dump()
        assert set(select) == {"name", "description", "locks", "conflicts"}
        assert set(select["conflicts"]) == {"locks", "commands"}

        lock = _read(api / "lock" / "access-exclusive" / "index.json")
        assert set(lock) == {"name", "description", "type", "commands", "conflicts"}
        assert lock["type"] == "table"

        assert len(_read(api / "command" / "index.json")["commands"]) == 69
        assert len(_read(api / "lock" / "index.json")["locks"]) == 12
        mappings = _read(api / "mappings" / "index.json")
        assert mappings["locks"]["for-no-key-update"] == "FOR NO KEY UPDATE"

    def test_every_command_and_lock_written_once(self, engine, catalog, tmp_path):
        result = StaticExporter(engine).export(tmp_path)
        written = [_read(path)["name"] for path in result.command_files]
        assert written == list(catalog.command_names())
        written_locks = [_read(path)["name"] for path in result.lock_files]
        assert written_locks == list(catalog.lock_names())

    def test_non_ascii_kept(self, tiny_document, tmp_path):
        tiny_document["commands"][0]["description"] = "Lit les données."
        engine = RelationshipEngine(catalog_from_dict(tiny_document))
        StaticExporter(engine).export(tmp_path)
        text = (tmp_path / "api" / "command" / "read" / "index.json").read_text(encoding="utf-8")
        assert "données" in text

    def test_progress_callback(self, engine, tmp_path):
        seen = []
        StaticExporter(engine).export(tmp_path, on_item=lambda kind, name: seen.append(kind))
        assert seen.count("command") == 69
        assert seen.count("lock") == 12

    def test_collision_writes_nothing(self, tiny_document, tmp_path):
        tiny_document["locks"].append({"name": "BETA.", "type": "table"})
        engine = RelationshipEngine(catalog_from_dict(tiny_document))
        with pytest.raises(DataIntegrityError):
            StaticExporter(engine).export(tmp_path / "out")
        assert not (tmp_path / "out").exists()

    def test_unwritable_output(self, engine, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(ExportError, match="Cannot write"):
            StaticExporter(engine).export(blocker)
