"""Tests for the journal and circle HTTP endpoints."""

import pytest


def _create_journal(client, **overrides):
    data = {'title': 'Trip', 'content': 'We drove to the coast.', 'category': 'Travel'}
    data.update(overrides)
    return client.post('/api/journals', json=data)


@pytest.fixture
def alice(login_as):
    return login_as('alice')


@pytest.fixture
def bob(login_as):
    return login_as('bob')


class TestJournalEndpoints:
    def test_create_and_fetch(self, alice):
        resp = _create_journal(alice, mood='happy')
        assert resp.status_code == 201
        journal = resp.get_json()
        assert journal['user_id'] == alice.user_id
        assert journal['mood_color'] == '#98FB98'
        assert journal['is_public'] is False

        fetched = alice.get(f"/api/journals/{journal['id']}")
        assert fetched.status_code == 200
        assert fetched.get_json() == journal

    def test_create_validation(self, alice):
        resp = _create_journal(alice, title='')
        assert resp.status_code == 400
        assert 'title' in resp.get_json()['error']

        assert _create_journal(alice, mood='elated').status_code == 400

    def test_unknown_journal(self, alice):
        resp = alice.get('/api/journals/999')
        assert resp.status_code == 404
        assert resp.data == b''

    def test_private_journal_forbidden(self, alice, bob):
        journal_id = _create_journal(alice).get_json()['id']
        assert bob.get(f'/api/journals/{journal_id}').status_code == 403

    def test_public_journal_visible(self, alice, bob):
        journal_id = _create_journal(alice, is_public=True).get_json()['id']

        assert bob.get(f'/api/journals/{journal_id}').status_code == 200
        assert [j['id'] for j in bob.get('/api/journals').get_json()] == [journal_id]
        assert bob.get('/api/journals/my').get_json() == []

    def test_share_with_non_member_circle(self, alice, bob):
        circle_id = bob.post('/api/circles', json={'name': 'Bobs'}).get_json()['id']

        assert _create_journal(alice, shared_with_circle_id=circle_id).status_code == 403

        journal_id = _create_journal(alice).get_json()['id']
        resp = alice.patch(f'/api/journals/{journal_id}/share', json={'circle_id': circle_id})
        assert resp.status_code == 403
        assert alice.get(f'/api/journals/{journal_id}').get_json()['shared_with_circle_id'] is None

    def test_share_and_unshare(self, alice):
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']
        journal_id = _create_journal(alice).get_json()['id']

        resp = alice.patch(f'/api/journals/{journal_id}/share', json={'circle_id': circle_id})
        assert resp.status_code == 200
        assert resp.get_json()['shared_with_circle_id'] == circle_id

        resp = alice.patch(f'/api/journals/{journal_id}/share', json={'circle_id': None})
        assert resp.get_json()['shared_with_circle_id'] is None

    def test_share_errors(self, alice, bob):
        journal_id = _create_journal(alice).get_json()['id']

        assert alice.patch('/api/journals/999/share', json={'circle_id': None}).status_code == 404
        assert bob.patch(f'/api/journals/{journal_id}/share', json={'circle_id': None}).status_code == 403
        assert alice.patch(f'/api/journals/{journal_id}/share', json={'circle_id': 'x'}).status_code == 400


class TestCircleEndpoints:
    def test_create_circle_lists_owner_as_admin(self, alice):
        resp = alice.post('/api/circles', json={'name': 'Family'})
        assert resp.status_code == 201
        circle = resp.get_json()
        assert circle['owner_id'] == alice.user_id

        members = alice.get(f"/api/circles/{circle['id']}/members").get_json()
        assert len(members) == 1
        assert members[0]['user_id'] == alice.user_id
        assert members[0]['role'] == 'admin'
        assert members[0]['username'] == 'alice'

        assert alice.get('/api/circles').get_json() == [circle]
        assert alice.get(f"/api/circles/{circle['id']}").get_json() == circle

    def test_member_roster_after_add(self, alice, bob):
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']
        assert alice.post(f'/api/circles/{circle_id}/members',
                          json={'username': 'bob'}).status_code == 201

        for client in (alice, bob):
            resp = client.get(f'/api/circles/{circle_id}/members')
            assert resp.status_code == 200
            assert sorted(m['username'] for m in resp.get_json()) == ['alice', 'bob']

        resp = alice.post(f'/api/circles/{circle_id}/members', json={'username': 'bob'})
        assert resp.status_code == 409

    def test_create_circle_requires_name(self, alice):
        assert alice.post('/api/circles', json={}).status_code == 400

    def test_non_member_cannot_list_members(self, alice, bob):
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']

        assert bob.get(f'/api/circles/{circle_id}/members').status_code == 403
        assert bob.get(f'/api/circles/{circle_id}').status_code == 403

    def test_only_owner_adds_or_removes(self, alice, bob, login_as):
        carol = login_as('carol')
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']
        alice.post(f'/api/circles/{circle_id}/members', json={'username': 'bob'})

        assert bob.post(f'/api/circles/{circle_id}/members', json={'username': 'carol'}).status_code == 403
        assert bob.delete(f'/api/circles/{circle_id}/members/{alice.user_id}').status_code == 403
        assert carol.delete(f'/api/circles/{circle_id}/members/{bob.user_id}').status_code == 403

    def test_add_member_errors(self, alice, bob):
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']

        resp = alice.post(f'/api/circles/{circle_id}/members', json={'username': 'nobody'})
        assert resp.status_code == 404
        assert resp.get_json() == {'error': 'User not found'}

        assert alice.post('/api/circles/999/members', json={'username': 'bob'}).status_code == 404

        assert alice.post(f'/api/circles/{circle_id}/members', json={'username': 'bob'}).status_code == 201
        assert alice.post(f'/api/circles/{circle_id}/members', json={'username': 'bob'}).status_code == 409

    def test_remove_non_member_is_noop(self, alice):
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']

        resp = alice.delete(f'/api/circles/{circle_id}/members/999')
        assert resp.status_code == 204
        assert len(alice.get(f'/api/circles/{circle_id}/members').get_json()) == 1

    def test_owner_cannot_be_removed(self, alice):
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']

        assert alice.delete(f'/api/circles/{circle_id}/members/{alice.user_id}').status_code == 400

    def test_delete_circle(self, alice, bob):
        circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']
        journal_id = _create_journal(alice, shared_with_circle_id=circle_id).get_json()['id']

        assert bob.delete(f'/api/circles/{circle_id}').status_code == 403
        assert alice.delete(f'/api/circles/{circle_id}').status_code == 204
        assert alice.get(f'/api/circles/{circle_id}').status_code == 404
        assert alice.get(f'/api/journals/{journal_id}').get_json()['shared_with_circle_id'] is None


def test_family_circle_scenario(alice, bob):
    circle_id = alice.post('/api/circles', json={'name': 'Family'}).get_json()['id']
    resp = _create_journal(alice, title='Trip', is_public=False, shared_with_circle_id=circle_id)
    assert resp.status_code == 201
    journal_id = resp.get_json()['id']

    assert bob.get(f'/api/journals/{journal_id}').status_code == 403

    assert alice.post(f'/api/circles/{circle_id}/members', json={'username': 'bob'}).status_code == 201
    resp = bob.get(f'/api/journals/{journal_id}')
    assert resp.status_code == 200
    assert resp.get_json()['title'] == 'Trip'
    assert [c['id'] for c in bob.get('/api/circles').get_json()] == [circle_id]

    assert alice.delete(f'/api/circles/{circle_id}/members/{bob.user_id}').status_code == 204
    assert bob.get(f'/api/journals/{journal_id}').status_code == 403
    assert bob.get('/api/journals').get_json() == []
