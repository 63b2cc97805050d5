from flask import jsonify, current_app
from flask_jwt_extended import jwt_required, current_user
from flasgger import swag_from
from app.validators import get_json_body, optional_id

from . import journal_bp


def _journals():
    return current_app.extensions['journal_service']


JOURNAL_ID_PARAM = {
    'name': 'journal_id',
    'in': 'path',
    'type': 'integer',
    'required': True,
    'description': 'ID of the journal entry'
}


@journal_bp.route('', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Journals the current user may read: own, public, and shared with their circles',
    'responses': {
        '200': {
            'description': 'List of journal entries',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Journal'}}
        },
        '401': {'description': 'Unauthorized'}
    }
})
def get_journals():
    """List every journal the current user can read."""
    journals = _journals().list_accessible_journals(current_user.id)
    return jsonify([journal.to_dict() for journal in journals])


@journal_bp.route('/my', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': "Get the current user's own journal entries",
    'responses': {
        '200': {
            'description': 'List of journal entries',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Journal'}}
        },
        '401': {'description': 'Unauthorized'}
    }
})
def get_my_journals():
    journals = _journals().list_own_journals(current_user.id)
    return jsonify([journal.to_dict() for journal in journals])


@journal_bp.route('', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Create a new journal entry',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'title': {'type': 'string', 'example': 'Trip'},
                'content': {'type': 'string', 'example': 'We drove to the coast.'},
                'category': {'type': 'string', 'example': 'Travel'},
                'mood': {'type': 'string', 'enum': ['joyful', 'happy', 'neutral', 'sad', 'angry']},
                'mood_color': {'type': 'string', 'example': '#FFD700'},
                'is_public': {'type': 'boolean'},
                'shared_with_circle_id': {'type': 'integer'}
            },
            'required': ['title', 'content', 'category']
        }
    }],
    'responses': {
        '201': {
            'description': 'Journal entry created successfully',
            'schema': {'$ref': '#/definitions/Journal'}
        },
        '400': {'description': 'Invalid input'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not a member of the circle to share with'}
    }
})
def create_journal():
    """Create a new journal entry."""
    journal = _journals().create_journal(current_user.id, get_json_body())
    return jsonify(journal.to_dict()), 201


@journal_bp.route('/<int:journal_id>', methods=['GET'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Get a specific journal entry',
    'parameters': [JOURNAL_ID_PARAM],
    'responses': {
        '200': {
            'description': 'Journal entry details',
            'schema': {'$ref': '#/definitions/Journal'}
        },
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Journal is not visible to this user'},
        '404': {'description': 'Journal not found'}
    }
})
def get_journal(journal_id):
    """Get a specific journal entry by ID."""
    journal = _journals().get_journal(journal_id, current_user.id)
    return jsonify(journal.to_dict())


@journal_bp.route('/<int:journal_id>/share', methods=['PATCH'])
@jwt_required()
@swag_from({
    'tags': ['Journals'],
    'description': 'Share a journal with a circle, or stop sharing with circle_id null',
    'parameters': [
        JOURNAL_ID_PARAM,
        {
            'name': 'body',
            'in': 'body',
            'required': True,
            'schema': {
                'type': 'object',
                'properties': {
                    'circle_id': {'type': 'integer', 'x-nullable': True}
                }
            }
        }
    ],
    'responses': {
        '200': {
            'description': 'Updated journal entry',
            'schema': {'$ref': '#/definitions/Journal'}
        },
        '400': {'description': 'Invalid input'},
        '401': {'description': 'Unauthorized'},
        '403': {'description': 'Not the owner, or not a member of the circle'},
        '404': {'description': 'Journal not found'}
    }
})
def share_journal(journal_id):
    circle_id = optional_id(get_json_body(), 'circle_id')
    journal = _journals().update_sharing(journal_id, current_user.id, circle_id)
    return jsonify(journal.to_dict())
