"""Error taxonomy shared by every handler.

Handlers raise these; ``register_error_handlers`` turns them into
``{"message": ...}`` JSON responses. Anything not in the taxonomy is logged
and reported as a generic 500 so no internal detail reaches the caller.
"""

from flask import current_app, jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class AuthError(ApiError):
    status_code = 401
    default_message = "Not authorized"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not Found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Resource already exists"


class ServerError(ApiError):
    status_code = 500
    default_message = "Server error"


def error_response(error: ApiError):
    return jsonify(message=error.message), error.status_code


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return error_response(error)

    @app.errorhandler(PyMongoError)
    def handle_database_error(error):
        current_app.logger.exception("Database error: %s", error)
        return error_response(ServerError())

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        # Routing-level failures (404 for unknown paths, 405, bad JSON bodies)
        return jsonify(message=error.description or error.name), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        current_app.logger.exception("Unhandled error: %s", error)
        return error_response(ServerError())
