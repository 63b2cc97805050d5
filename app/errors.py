"""Error taxonomy for the journal API.

Services raise these exceptions; the handler registered by the application
factory turns them into HTTP responses. Errors without a message are sent
with an empty body.
"""

from flask import jsonify


class JournalAppError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message)
        self.message = message


class ValidationError(JournalAppError):
    """Malformed or missing request fields."""
    status_code = 400

    def __init__(self, message):
        super().__init__(message)


class AuthenticationRequired(JournalAppError):
    status_code = 401


class ForbiddenError(JournalAppError):
    status_code = 403


class NotFoundError(JournalAppError):
    status_code = 404


class ConflictError(JournalAppError):
    status_code = 409


class GatewayError(JournalAppError):
    """An AI backend call failed; the message is passed through."""
    status_code = 500


def error_response(error):
    if error.message:
        return jsonify({'error': error.message}), error.status_code
    return '', error.status_code


def register_error_handlers(app):
    @app.errorhandler(JournalAppError)
    def handle_app_error(error):
        if isinstance(error, GatewayError):
            app.logger.error(f'Gateway error: {error.message}')
        return error_response(error)
