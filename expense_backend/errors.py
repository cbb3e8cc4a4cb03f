# expense_backend/errors.py
"""Error taxonomy shared by the session manager, the workflow and the routes."""
import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger("expense-backend")


class ExpenseBackendError(Exception):
    status_code = 400
    message = "Request failed"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class AuthError(ExpenseBackendError):
    status_code = 401
    message = "Unauthorized"


class MissingTokenError(AuthError):
    message = "No token"


class InvalidTokenError(AuthError):
    message = "Invalid token"


class BadRequestError(ExpenseBackendError):
    message = "Request body must be a JSON object"


class ForbiddenError(ExpenseBackendError):
    status_code = 403
    message = "Admin access required"


class ConfigurationError(ExpenseBackendError):
    """A required setting is missing; raised before any side effect."""
    status_code = 500
    message = "Server is not configured"


class StoreError(ExpenseBackendError):
    """The external store rejected or failed an operation."""
    message = "Store operation failed"


class ClassifierError(ExpenseBackendError):
    """The external classifier failed or returned nothing usable."""
    message = "Categorization failed"


def json_body():
    """The request JSON as a dict; a missing or unparseable body is empty."""
    data = request.get_json(force=True, silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequestError()
    return data


def register_error_handlers(app):
    @app.errorhandler(ExpenseBackendError)
    def handle_backend_error(exc):
        if not isinstance(exc, (AuthError, ForbiddenError)):
            log = logger.error if exc.status_code >= 500 else logger.warning
            log(f"{type(exc).__name__}: {exc.message}")
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"error": exc.name}), exc.code
