"""Shared fixtures: a fresh app and store per test, one test client per user."""

import pytest

from app import create_app
from app.storage import MemStorage
from auth.models import User
from config import TestingConfig
from insights.gateways import InsightGateway

PASSWORD = 'password123'


class FakeGateway(InsightGateway):
    """Records calls and returns canned results."""

    name = 'fake'

    def __init__(self):
        self.calls = []

    def get_insights(self, text):
        self.calls.append(('insights', text))
        return {'mood': 'happy', 'insights': ['You sound rested'], 'suggestions': ['Keep going']}

    def get_recommendations(self, texts):
        self.calls.append(('recommendations', texts))
        return {'topics': ['Travel'], 'prompts': ['Where next?']}

    def generate_reply(self, text):
        self.calls.append(('chat', text))
        return 'Thanks for sharing.'


@pytest.fixture
def store():
    return MemStorage()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(store, gateway):
    return create_app(TestingConfig, store=store, gateway=gateway)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(app):
    """Register *username* and return a test client holding their session."""

    def _login_as(username):
        user_client = app.test_client()
        resp = user_client.post('/api/auth/register', json={'username': username, 'password': PASSWORD})
        assert resp.status_code == 201
        user_client.user_id = resp.get_json()['user']['id']
        return user_client

    return _login_as


@pytest.fixture
def make_user(store):
    """Create a user directly in the store."""

    def _make_user(username):
        return store.create_user(username, User.hash_password(PASSWORD))

    return _make_user
