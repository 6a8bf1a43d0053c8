from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException


class MockRestError(Exception):
    """Base class for errors raised by the mock server."""


class SnapshotError(MockRestError):
    """The snapshot file is missing, unreadable or not a JSON object."""


class PersistenceError(MockRestError):
    """Writing the snapshot back to disk failed."""


def _method_not_allowed(_e):
    return jsonify({"message": "Method not allowed"}), 405


def _http_error(e: HTTPException):
    return jsonify({"message": e.description}), e.code


def _unexpected_error(_e):
    # Never leak the traceback to the client
    current_app.logger.exception("Unhandled error while serving request")
    return jsonify({"message": "Internal server error."}), 500


def register_error_handlers(app):
    app.register_error_handler(405, _method_not_allowed)
    app.register_error_handler(HTTPException, _http_error)
    app.register_error_handler(Exception, _unexpected_error)
