"""
Shared test fixtures and configuration for mockrest tests.
"""
import json
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from mockrest import create_app
from mockrest.config import TestingConfig
from mockrest.storage.collections import Store
from mockrest.storage.json_store import JsonStore


SAMPLE_DB = {
    "posts": [
        {"title": "Hello", "author": "ada", "views": 120, "Id": 1},
        {"title": "Second", "author": "grace", "views": 45, "Id": 2},
        {"title": "Third", "author": "ada", "views": 7, "Id": 3},
    ],
    "comments": [
        {"body": "First!", "postId": 1, "Id": 1},
        {"body": "Nice", "postId": 1, "Id": 2},
        {"body": "Following", "postId": 2, "Id": 3},
    ],
    "todos": [
        {"text": "buy milk", "completed": True, "Id": 1},
        {"text": "walk the dog", "completed": False, "Id": 2},
        {"text": "write tests", "completed": True, "Id": 3},
        {"text": "ship it", "completed": True, "Id": 4},
    ],
    "profile": {"name": "demo"},
}


@pytest.fixture
def db_file(tmp_path: Path) -> Path:
    """Write the sample snapshot to a temporary file."""
    path = tmp_path / "db.json"
    path.write_text(json.dumps(SAMPLE_DB, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def empty_db_file(tmp_path: Path) -> Path:
    path = tmp_path / "empty.json"
    path.write_text("{}", encoding="utf-8")
    return path


@pytest.fixture
def json_store(db_file: Path) -> JsonStore:
    return JsonStore(db_file)


@pytest.fixture
def app(db_file: Path) -> Flask:
    """Create a test Flask application backed by the sample snapshot."""
    app = create_app(TestingConfig, db_path=str(db_file))
    yield app


@pytest.fixture
def empty_app(empty_db_file: Path) -> Flask:
    return create_app(TestingConfig, db_path=str(empty_db_file))


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def empty_client(empty_app: Flask) -> FlaskClient:
    return empty_app.test_client()


@pytest.fixture
def store(app: Flask) -> Store:
    """The Store owned by the test app."""
    from mockrest.extensions import STORE_KEY
    return app.extensions[STORE_KEY]

