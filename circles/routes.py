from flask import jsonify, current_app
from flask_jwt_extended import jwt_required, current_user
from flasgger import swag_from
from app.validators import get_json_body

from . import circles_bp


def _circles():
    return current_app.extensions['circle_service']


CIRCLE_ID_PARAM = {
    'name': 'circle_id',
    'in': 'path',
    'type': 'integer',
    'required': True,
    'description': 'ID of the circle'
}


@circles_bp.route('', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Circles'],
    'description': 'Create a circle; the creator becomes its owner and admin member',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'name': {'type': 'string', 'example': 'Family'},
                'description': {'type': 'string'}
            },
            'required': ['name']
        }
    }],
    'responses': {
        '201': {'description': 'Circle created', 'schema': {'$ref': '#/definitions/Circle'}},
        '400': {'description': 'Invalid input'},
        '401': {'description': 'Unauthorized'}
    }
})
def create_circle():
    circle = _circles().create_circle(current_user.id, get_json_body())
    return jsonify(circle.to_dict()), 201


@circles_bp.route('', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Circles'],
    'description': 'Circles the current user owns or belongs to',
    'responses': {
        '200': {
            'description': 'List of circles',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Circle'}}
        },
        '401': {'description': 'Unauthorized'}
    }
})
def get_circles():
    circles = _circles().list_circles_for_user(current_user.id)
    return jsonify([circle.to_dict() for circle in circles])


@circles_bp.route('/<int:circle_id>', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Circles'],
    'description': 'Get a circle the current user belongs to',
    'parameters': [CIRCLE_ID_PARAM],
    'responses': {
        '200': {'description': 'Circle details', 'schema': {'$ref': '#/definitions/Circle'}},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not a member'},
        '404': {'description': 'Circle not found'}
    }
})
def get_circle(circle_id):
    circle = _circles().get_circle(circle_id, current_user.id)
    return jsonify(circle.to_dict())


@circles_bp.route('/<int:circle_id>', methods=['DELETE'])
@jwt_required()
@swag_from({
    'tags': ['Circles'],
    'description': 'Delete a circle (owner only); journals shared with it become unshared',
    'parameters': [CIRCLE_ID_PARAM],
    'responses': {
        '204': {'description': 'Circle deleted'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not the owner'},
        '404': {'description': 'Circle not found'}
    }
})
def delete_circle(circle_id):
    _circles().delete_circle(circle_id, current_user.id)
    return '', 204


@circles_bp.route('/<int:circle_id>/members', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Circles'],
    'description': 'List the members of a circle',
    'parameters': [CIRCLE_ID_PARAM],
    'responses': {
        '200': {
            'description': 'Membership rows with usernames',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Member'}}
        },
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not a member'},
        '404': {'description': 'Circle not found'}
    }
})
def get_members(circle_id):
    return jsonify(_circles().list_members(circle_id, current_user.id))


@circles_bp.route('/<int:circle_id>/members', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Circles'],
    'description': 'Add a user to a circle by username (owner only)',
    'parameters': [
        CIRCLE_ID_PARAM,
        {
            'name': 'body',
            'in': 'body',
            'required': True,
            'schema': {
                'type': 'object',
                'properties': {
                    'username': {'type': 'string', 'example': 'janedoe'},
                    'role': {'type': 'string', 'enum': ['member', 'admin'], 'default': 'member'}
                },
                'required': ['username']
            }
        }
    ],
    'responses': {
        '201': {'description': 'Member added', 'schema': {'$ref': '#/definitions/Member'}},
        '400': {'description': 'Invalid input'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not the owner'},
        '404': {'description': 'Circle or user not found'},
        '409': {'description': 'User is already a member'}
    }
})
def add_member(circle_id):
    member = _circles().add_member(circle_id, current_user.id, get_json_body())
    return jsonify(member), 201


@circles_bp.route('/<int:circle_id>/members/<int:user_id>', methods=['DELETE'])
@jwt_required()
@swag_from({
    'tags': ['Circles'],
    'description': 'Remove a member from a circle (owner only); removing a non-member is a no-op',
    'parameters': [
        CIRCLE_ID_PARAM,
        {
            'name': 'user_id',
            'in': 'path',
            'type': 'integer',
            'required': True,
            'description': 'ID of the user to remove'
        }
    ],
    'responses': {
        '204': {'description': 'Member removed'},
        '400': {'description': 'The owner cannot be removed'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not the owner'},
        '404': {'description': 'Circle not found'}
    }
})
def remove_member(circle_id, user_id):
    _circles().remove_member(circle_id, current_user.id, user_id)
    return '', 204
