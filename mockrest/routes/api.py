from flask import Blueprint, current_app, jsonify, request

from ..errors import PersistenceError
from ..extensions import get_store
from ..utils.query import leading_int, run_pipeline

bp = Blueprint("api", __name__)

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def path_segments(path: str) -> list[str]:
    return [s.strip() for s in (path or "").split("/") if s.strip()]


@bp.route("/", defaults={"path": ""}, methods=METHODS)
@bp.route("/<path:path>", methods=METHODS, strict_slashes=False)
def dispatch(path):
    segments = path_segments(path)
    # Flask routes HEAD into this view; it is not a supported verb here
    if request.method == "HEAD":
        return jsonify({"message": "Method not allowed"}), 405
    if request.method == "GET":
        return _handle_get(segments)
    if request.method == "POST":
        return _handle_post(segments)
    return jsonify({"message": "Not implemented."}), 501


def _handle_get(segments: list[str]):
    store = get_store()

    if not segments:
        with store.lock:
            return jsonify(store.snapshot()), 200

    collection = segments[0]

    if len(segments) == 1:
        with store.lock:
            items = store.get(collection)
            if items is not None and not isinstance(items, list):
                # Singular resource, e.g. {"profile": {...}}
                return jsonify(items), 200
            result = run_pipeline(
                items or [],
                request.args,
                resolve=store.get,
                default_per_page=current_app.config.get("DEFAULT_PER_PAGE", 10),
            )
            return jsonify(result), 200

    ident = leading_int(segments[1])
    item = store.find(collection, ident) if ident is not None else None
    if item is None:
        return jsonify({"message": "Item not found."}), 404
    return jsonify(item), 200


def _handle_post(segments: list[str]):
    if len(segments) != 1:
        return jsonify({"message": "Invalid path for POST request."}), 400

    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        return jsonify({"message": "Invalid JSON body."}), 400

    store = get_store()
    collection = segments[0]
    with store.lock:
        record = store.insert(collection, body)
        try:
            store.persist()
        except PersistenceError:
            # Insert stands in memory; disk catches up on the next successful write
            current_app.logger.exception("Failed to persist snapshot after insert into %s", collection)
        return jsonify({"message": "Appended", "data": record}), 201
