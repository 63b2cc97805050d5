from flask import jsonify, current_app
from flask_jwt_extended import jwt_required
from flasgger import swag_from
from app.errors import ValidationError
from app.validators import get_json_body

from . import insights_bp


def _gateway():
    return current_app.extensions['insight_gateway']


def _content(data):
    content = data.get('content')
    if not isinstance(content, str) or not content.strip():
        raise ValidationError('Content is required')
    return content


CONTENT_BODY = {
    'name': 'body',
    'in': 'body',
    'required': True,
    'schema': {
        'type': 'object',
        'properties': {'content': {'type': 'string'}},
        'required': ['content']
    }
}


@insights_bp.route('/insights', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Insights'],
    'description': 'AI mood analysis, insights and suggestions for a journal text',
    'parameters': [CONTENT_BODY],
    'responses': {
        '200': {
            'description': 'Insights',
            'schema': {
                'type': 'object',
                'properties': {
                    'mood': {'type': 'string'},
                    'insights': {'type': 'array', 'items': {'type': 'string'}},
                    'suggestions': {'type': 'array', 'items': {'type': 'string'}}
                }
            }
        },
        '400': {'description': 'Content is required'},
        '401': {'description': 'Unauthorized'},
        '500': {'description': 'AI backend error', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def get_insights():
    content = _content(get_json_body())
    return jsonify(_gateway().get_insights(content))


@insights_bp.route('/recommendations', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Insights'],
    'description': 'Suggested topics and writing prompts based on previous entries',
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'entries': {'type': 'array', 'items': {'type': 'string'}}
            },
            'required': ['entries']
        }
    }],
    'responses': {
        '200': {
            'description': 'Recommendations',
            'schema': {
                'type': 'object',
                'properties': {
                    'topics': {'type': 'array', 'items': {'type': 'string'}},
                    'prompts': {'type': 'array', 'items': {'type': 'string'}}
                }
            }
        },
        '400': {'description': 'Previous entries are required'},
        '401': {'description': 'Unauthorized'},
        '500': {'description': 'AI backend error', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def get_recommendations():
    entries = get_json_body().get('entries')
    if not isinstance(entries, list):
        raise ValidationError('Previous entries are required')
    entries = [e for e in entries if isinstance(e, str) and e.strip()]
    if not entries:
        raise ValidationError('Previous entries are required')
    return jsonify(_gateway().get_recommendations(entries))


@insights_bp.route('/chat', methods=['POST'])
@jwt_required()
@swag_from({
    'tags': ['Insights'],
    'description': 'Free-form AI reply to a piece of text',
    'parameters': [CONTENT_BODY],
    'responses': {
        '200': {
            'description': 'Generated reply',
            'schema': {'type': 'object', 'properties': {'response': {'type': 'string'}}}
        },
        '400': {'description': 'Content is required'},
        '401': {'description': 'Unauthorized'},
        '500': {'description': 'AI backend error', 'schema': {'$ref': '#/definitions/Error'}}
    }
})
def chat():
    content = _content(get_json_body())
    return jsonify({'response': _gateway().generate_reply(content)})
