from flask import Flask
from .config import Config
from .errors import register_error_handlers
from .extensions import cors, init_store
from .storage.collections import Store
from .storage.json_store import JsonStore


def create_app(config_class: type[Config] = Config, store: Store | None = None, db_path: str | None = None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    if db_path:
        app.config["DB_PATH"] = db_path
    # Keep collection and field order as stored
    app.json.sort_keys = False

    # Extensions
    cors.init_app(app)

    # Store (SnapshotError here is fatal for the caller)
    if store is None:
        persistence = JsonStore(app.config["DB_PATH"], atomic=app.config["ATOMIC_WRITES"])
        store = Store.from_snapshot(persistence.load(), persistence=persistence)
        app.logger.info("Loaded %d collection(s) from %s", len(store.collections()), persistence.path)
    init_store(app, store)

    # Errors
    register_error_handlers(app)

    # Blueprints
    from .routes.api import bp as api

    app.register_blueprint(api)

    return app
