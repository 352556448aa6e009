"""Pytest configuration and fixtures for pglocks tests"""
import json
import os

import pytest
import yaml

from pglocks.catalog import catalog_from_dict, load_catalog
from pglocks.engine import DescriptionGenerator, RelationshipEngine


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep PGLOCKS_* variables of the host out of the tests"""
    for key in list(os.environ):
        if key.startswith("PGLOCKS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(scope="session")
def catalog():
    """The bundled reference table"""
    return load_catalog()


@pytest.fixture(scope="session")
def engine(catalog):
    return RelationshipEngine(catalog)


@pytest.fixture(scope="session")
def descriptions(engine):
    return DescriptionGenerator(engine)


@pytest.fixture
def tiny_document():
    """
    Small hand-made table.

    ALPHA lists BETA as a conflict but not the other way round, BETA
    conflicts with itself, GAMMA and ROWLOCK conflict with nothing.
    """
    return {
        "version": 1,
        "locks": [
            {"name": "ALPHA", "type": "table", "description": "First test lock."},
            {"name": "BETA", "type": "table", "description": "Second test lock."},
            {"name": "GAMMA", "type": "table", "description": ""},
            {"name": "ROWLOCK", "type": "row", "description": ""},
        ],
        "commands": [
            {"name": "READ", "description": "Reads things.", "locks": ["ALPHA"]},
            {"name": "WRITE", "description": "Writes things.", "locks": ["BETA"]},
            {"name": "IDLE", "description": "Takes nothing.", "locks": []},
            {"name": "BOTH", "description": "Takes two locks.", "locks": ["ALPHA", "GAMMA"]},
        ],
        "conflicts": {
            "ALPHA": ["BETA"],
            "BETA": ["BETA"],
        },
    }


@pytest.fixture
def tiny_catalog(tiny_document):
    return catalog_from_dict(tiny_document, source="tiny")


@pytest.fixture
def tiny_engine(tiny_catalog):
    return RelationshipEngine(tiny_catalog)


@pytest.fixture
def write_reference(tmp_path):
    """Write a reference document to disk as YAML or JSON and return the path"""

    def _write(document, name="reference.yaml"):
        path = tmp_path / name
        if name.endswith(".json"):
            path.write_text(json.dumps(document), encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return path

    return _write
