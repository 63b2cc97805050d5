from flask import jsonify, current_app
from flask_jwt_extended import (
    create_access_token, jwt_required, current_user,
    set_access_cookies, unset_jwt_cookies
)
from flasgger import swag_from
from app.errors import ValidationError
from app.validators import get_json_body
from auth.utils import validate_username, validate_password
from .models import User
from . import auth_bp


def _credentials_schema(description):
    return [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'description': description,
        'schema': {
            'type': 'object',
            'properties': {
                'username': {'type': 'string', 'example': 'johndoe'},
                'password': {'type': 'string', 'example': 'securepassword123'}
            },
            'required': ['username', 'password']
        }
    }]


def _session_response(user, status=200):
    """JSON user payload with the session cookie attached."""
    response = jsonify({'user': user.to_dict()})
    set_access_cookies(response, create_access_token(identity=user))
    return response, status


@auth_bp.route('/register', methods=['POST'])
@swag_from({
    'tags': ['Authentication'],
    'description': 'Register a new user and start a session',
    'parameters': _credentials_schema('New account credentials'),
    'responses': {
        '201': {
            'description': 'User registered successfully',
            'schema': {
                'type': 'object',
                'properties': {'user': {'$ref': '#/definitions/User'}}
            }
        },
        '400': {'description': 'Invalid input data'},
        '409': {'description': 'Username already exists'}
    }
})
def register():
    """Register a new user."""
    data = get_json_body()
    username = data.get('username')
    password = data.get('password')

    for valid, message in (validate_username(username), validate_password(password)):
        if not valid:
            raise ValidationError(message)

    # create_user rejects a taken username under the store lock
    user = current_app.extensions['store'].create_user(username, User.hash_password(password))
    current_app.logger.info(f'Registered user {user.id} ({user.username})')
    return _session_response(user, 201)


@auth_bp.route('/login', methods=['POST'])
@swag_from({
    'tags': ['Authentication'],
    'description': 'Login with username and password',
    'parameters': _credentials_schema('Account credentials'),
    'responses': {
        '200': {
            'description': 'Login successful, session cookie set',
            'schema': {
                'type': 'object',
                'properties': {'user': {'$ref': '#/definitions/User'}}
            }
        },
        '400': {'description': 'Invalid input data'},
        '401': {'description': 'Invalid credentials'}
    }
})
def login():
    """Login user and set the session cookie."""
    data = get_json_body()

    if not all(isinstance(data.get(k), str) and data.get(k) for k in ['username', 'password']):
        raise ValidationError('Missing username or password')

    user = current_app.extensions['store'].get_user_by_username(data['username'])

    if user and user.check_password(data['password']):
        return _session_response(user)

    current_app.logger.info(f"Failed login for username {data['username']!r}")
    return jsonify({'error': 'Invalid username or password'}), 401


@auth_bp.route('/logout', methods=['POST'])
@swag_from({
    'tags': ['Authentication'],
    'description': 'End the current session',
    'responses': {
        '200': {'description': 'Session cookie cleared'}
    }
})
def logout():
    response = jsonify({'message': 'Logged out'})
    unset_jwt_cookies(response)
    return response


@auth_bp.route('/me')
@jwt_required()
@swag_from({
    'tags': ['Authentication'],
    'description': 'Get the logged-in user',
    'responses': {
        '200': {
            'description': 'User profile',
            'schema': {'$ref': '#/definitions/User'}
        },
        '401': {'description': 'Not logged in'}
    }
})
def get_current_user():
    """Get current user's profile."""
    return jsonify(current_user.to_dict())
