from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
import logging

from utils.exceptions import (
    ChirpyError,
    Conflict,
    NotFound,
    StorageFailure,
    Unauthenticated,
    Unauthorized,
    ValidationFailure,
)

# Core error kind -> HTTP status
STATUS_BY_ERROR = {
    ValidationFailure: 400,
    Unauthenticated: 401,
    Unauthorized: 403,
    NotFound: 404,
    Conflict: 409,
    StorageFailure: 500,
}


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def status_for(err: ChirpyError) -> int:
    for cls in type(err).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def register_error_handlers(app):
    # Errors raised by the repositories and the auth service
    @app.errorhandler(ChirpyError)
    def handle_chirpy_error(err: ChirpyError):
        status = status_for(err)
        if status >= 500:
            logging.exception("Datastore failure", exc_info=err)
        elif current_app and current_app.debug:
            logging.debug("%s: %s", err.code, err.message)
        return error_response(err.code, err.message, status)

    # Marshmallow validation errors: missing or malformed request fields
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return error_response("VALIDATION_ERROR", "Invalid input", 400, details=err.messages)

    # 404 Not Found (unknown routes)
    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", 404)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_response(err.name.upper().replace(" ", "_"), err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logging.exception("Unhandled exception", exc_info=err)
        details = None
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
