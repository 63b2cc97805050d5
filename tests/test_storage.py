"""Tests for the in-memory entity store."""

import threading
from unittest.mock import patch

import pytest

from app.errors import ConflictError
from app.storage import MemStorage


class TestIds:
    def test_ids_shared_across_kinds(self, store):
        user = store.create_user('alice', 'hash')
        journal = store.create_journal(user.id, title='t', content='c', category='Work')
        circle = store.create_circle(user.id, 'Family')

        # The circle's admin row takes the id after the circle.
        assert [user.id, journal.id, circle.id] == [1, 2, 3]
        assert store.get_circle_member(circle.id, user.id).id == 4

    def test_stores_are_independent(self):
        first, second = MemStorage(), MemStorage()
        first.create_user('alice', 'hash')

        assert second.get_user_by_username('alice') is None
        assert second.create_user('bob', 'hash').id == 1


class TestJournals:
    def test_defaults(self, store):
        journal = store.create_journal(1, title='t', content='c', category='Work')

        assert journal.mood == 'neutral'
        assert journal.mood_color == '#808080'
        assert journal.is_public is False
        assert journal.shared_with_circle_id is None
        assert journal.created_at is not None

    def test_journals_by_user(self, store):
        store.create_journal(1, title='a', content='c', category='Work')
        store.create_journal(2, title='b', content='c', category='Work')

        assert [j.title for j in store.journals_by_user(1)] == ['a']

    def test_update_sharing_replaces_entry(self, store):
        journal = store.create_journal(1, title='a', content='c', category='Work')
        updated = store.update_journal_sharing(journal.id, 7)

        assert updated.shared_with_circle_id == 7
        assert store.get_journal(journal.id).shared_with_circle_id == 7
        assert journal.shared_with_circle_id is None

    def test_update_sharing_unknown_journal(self, store):
        with pytest.raises(KeyError):
            store.update_journal_sharing(42, None)


class TestCircles:
    def test_create_circle_adds_admin_row(self, store):
        circle = store.create_circle(5, 'Family', 'Close relatives')
        members = store.circle_members(circle.id)

        assert len(members) == 1
        assert members[0].user_id == 5
        assert members[0].role == 'admin'
        assert circle.description == 'Close relatives'

    def test_create_circle_rolls_back_when_member_row_fails(self, store):
        with patch.object(store, 'add_circle_member', side_effect=RuntimeError('boom')):
            with pytest.raises(RuntimeError):
                store.create_circle(5, 'Family')

        assert store.circles == {}
        assert store.members == {}

    def test_circles_for_user_includes_owned_and_joined(self, store):
        owned = store.create_circle(1, 'Mine')
        joined = store.create_circle(2, 'Theirs')
        store.create_circle(3, 'Other')
        store.add_circle_member(joined.id, 1)

        assert [c.id for c in store.circles_for_user(1)] == [owned.id, joined.id]

    def test_remove_missing_member_is_noop(self, store):
        circle = store.create_circle(1, 'Mine')
        before = dict(store.members)

        assert store.remove_circle_member(circle.id, 99) is False
        assert store.members == before

    def test_delete_circle_clears_rows_and_shares(self, store):
        circle = store.create_circle(1, 'Mine')
        store.add_circle_member(circle.id, 2)
        journal = store.create_journal(1, title='a', content='c', category='Work',
                                       shared_with_circle_id=circle.id)

        store.delete_circle(circle.id)

        assert store.get_circle(circle.id) is None
        assert store.circle_members(circle.id) == []
        assert store.get_journal(journal.id).shared_with_circle_id is None

    def test_duplicate_member_row_rejected(self, store):
        circle = store.create_circle(1, 'Mine')
        store.add_circle_member(circle.id, 2)

        with pytest.raises(ConflictError):
            store.add_circle_member(circle.id, 2, role='admin')

        rows = [m for m in store.circle_members(circle.id) if m.user_id == 2]
        assert len(rows) == 1
        assert rows[0].role == 'member'


class TestUsers:
    def test_duplicate_username_rejected(self, store):
        store.create_user('alice', 'hash')

        with pytest.raises(ConflictError):
            store.create_user('alice', 'other')

        assert len(store.users) == 1
        assert store.get_user_by_username('alice').password_hash == 'hash'


class TestConcurrency:
    def test_scans_survive_concurrent_writes(self, store):
        circle = store.create_circle(1, 'Mine')
        stop = threading.Event()
        errors = []

        def writer():
            user_id = 100
            while not stop.is_set():
                store.create_journal(1, title='t', content='c', category='Work')
                store.add_circle_member(circle.id, user_id)
                user_id += 1

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            for _ in range(3000):
                try:
                    store.journals_by_user(1)
                    store.circles_for_user(1)
                    store.circle_members(circle.id)
                    store.get_user_by_username('nobody')
                except RuntimeError as exc:
                    errors.append(exc)
        finally:
            stop.set()
            thread.join()

        assert errors == []

    def test_concurrent_registration_keeps_one_user(self, store):
        barrier = threading.Barrier(8)
        outcomes = []

        def register():
            barrier.wait()
            try:
                outcomes.append(store.create_user('alice', 'hash'))
            except ConflictError as exc:
                outcomes.append(exc)

        threads = [threading.Thread(target=register) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.users) == 1
        assert sum(isinstance(o, ConflictError) for o in outcomes) == 7

    def test_concurrent_member_adds_keep_one_row(self, store):
        circle = store.create_circle(1, 'Mine')
        barrier = threading.Barrier(8)
        conflicts = []

        def add():
            barrier.wait()
            try:
                store.add_circle_member(circle.id, 2)
            except ConflictError as exc:
                conflicts.append(exc)

        threads = [threading.Thread(target=add) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len([m for m in store.circle_members(circle.id) if m.user_id == 2]) == 1
        assert len(conflicts) == 7
