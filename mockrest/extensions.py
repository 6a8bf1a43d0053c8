# mockrest/extensions.py
from flask import current_app
from flask_cors import CORS

from .storage.collections import Store

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

STORE_KEY = "mockrest.store"


def init_store(app, store: Store):
    app.extensions[STORE_KEY] = store


def get_store() -> Store:
    """The Store owned by the current app."""
    return current_app.extensions[STORE_KEY]
