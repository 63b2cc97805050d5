from flask import current_app
from flask_jwt_extended import JWTManager
from flasgger import Swagger
from app.errors import AuthenticationRequired, error_response

# Initialize extensions
jwt = JWTManager()

# Configure Swagger
swagger = Swagger(
    template={
        "swagger": "2.0",
        "info": {
            "title": "Journal Circles API",
            "description": "Journals, sharing circles and AI writing insights. "
                           "Authenticate via /api/auth/login; the session is kept "
                           "in the access_token_cookie cookie.",
            "version": "1.0.0"
        },
        "schemes": ["http", "https"],
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "definitions": {
            "User": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "username": {"type": "string"}
                }
            },
            "Journal": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "user_id": {"type": "integer"},
                    "title": {"type": "string"},
                    "content": {"type": "string"},
                    "category": {"type": "string"},
                    "mood": {"type": "string", "enum": ["joyful", "happy", "neutral", "sad", "angry"]},
                    "mood_color": {"type": "string"},
                    "is_public": {"type": "boolean"},
                    "shared_with_circle_id": {"type": "integer"},
                    "created_at": {"type": "string", "format": "date-time"}
                }
            },
            "Circle": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                    "owner_id": {"type": "integer"},
                    "description": {"type": "string"}
                }
            },
            "Member": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "circle_id": {"type": "integer"},
                    "user_id": {"type": "integer"},
                    "role": {"type": "string", "enum": ["member", "admin"]},
                    "username": {"type": "string"}
                }
            },
            "Error": {
                "type": "object",
                "properties": {
                    "error": {"type": "string", "description": "Error message"}
                }
            }
        }
    },
    config={
        "headers": [],
        "specs": [
            {
                "endpoint": 'apispec',
                "route": '/apispec.json',
                "rule_filter": lambda rule: True,
                "model_filter": lambda tag: True,
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/apidocs/"
    }
)


# --- Session callbacks ---

@jwt.user_identity_loader
def user_identity_lookup(user):
    return str(user.id)


@jwt.user_lookup_loader
def user_lookup_callback(_jwt_header, jwt_data):
    return current_app.extensions['store'].get_user(int(jwt_data['sub']))


# Unauthenticated requests get a bare 401
@jwt.unauthorized_loader
def missing_session_callback(reason):
    return error_response(AuthenticationRequired())


@jwt.invalid_token_loader
def invalid_session_callback(reason):
    return error_response(AuthenticationRequired())


@jwt.expired_token_loader
def expired_session_callback(_jwt_header, _jwt_data):
    return error_response(AuthenticationRequired())


@jwt.user_lookup_error_loader
def unknown_user_callback(_jwt_header, _jwt_data):
    return error_response(AuthenticationRequired())


def init_app(app):
    """Initialize all extensions with the app."""
    jwt.init_app(app)
    swagger.init_app(app)
