"""
Unit tests for create_app wiring.
"""
import pytest

from mockrest import create_app
from mockrest.config import TestingConfig
from mockrest.errors import SnapshotError
from mockrest.extensions import STORE_KEY
from mockrest.storage.collections import Store


@pytest.mark.unit
class TestCreateApp:

    def test_loads_store_from_db_path(self, db_file):
        app = create_app(TestingConfig, db_path=str(db_file))

        store = app.extensions[STORE_KEY]
        assert store.next_id("posts") == 4
        assert store.persistence.path == db_file

    def test_uses_given_store(self):
        store = Store.from_snapshot({"todos": [{"Id": 1}]})

        app = create_app(TestingConfig, store=store)

        assert app.extensions[STORE_KEY] is store
        assert app.test_client().get("/todos/1").get_json() == {"Id": 1}

    def test_missing_snapshot_is_fatal(self, tmp_path):
        with pytest.raises(SnapshotError):
            create_app(TestingConfig, db_path=str(tmp_path / "nope.json"))

    def test_cors_headers(self, client):
        response = client.get("/", headers={"Origin": "http://localhost:3000"})

        assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://localhost:3000")
