"""In-memory entity store.

One mapping per entity kind, all ids drawn from a single counter. Nothing is
persisted and nothing is evicted; entities live as long as the store does.
Lookups by id are O(1); every other predicate scans.

Writes and scans hold the store lock, so a threaded server never iterates a
mapping while another request resizes it. Uniqueness checks (usernames,
membership rows) run under the same lock as the insert.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from app.errors import ConflictError
from auth.models import User
from circles.models import Circle, CircleMember
from journal.models import Journal


class MemStorage:
    def __init__(self):
        self.users: Dict[int, User] = {}
        self.journals: Dict[int, Journal] = {}
        self.circles: Dict[int, Circle] = {}
        self.members: Dict[int, CircleMember] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def _next_id(self) -> int:
        return next(self._ids)

    # --- Users ---------------------------------------------------------------

    def create_user(self, username: str, password_hash: str) -> User:
        """Store a new user; ConflictError if the username is taken."""
        with self._lock:
            if self.get_user_by_username(username) is not None:
                raise ConflictError('Username already exists')
            user = User(id=self._next_id(), username=username, password_hash=password_hash)
            self.users[user.id] = user
            return user

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self.users.values() if u.username == username), None)

    # --- Journals ------------------------------------------------------------

    def create_journal(self, user_id: int, **fields) -> Journal:
        with self._lock:
            journal = Journal(id=self._next_id(), user_id=user_id, **fields)
            self.journals[journal.id] = journal
            return journal

    def get_journal(self, journal_id: int) -> Optional[Journal]:
        return self.journals.get(journal_id)

    def list_journals(self) -> List[Journal]:
        with self._lock:
            return list(self.journals.values())

    def journals_by_user(self, user_id: int) -> List[Journal]:
        with self._lock:
            return [j for j in self.journals.values() if j.user_id == user_id]

    def update_journal_sharing(self, journal_id: int, circle_id: Optional[int]) -> Journal:
        with self._lock:
            journal = self.journals.get(journal_id)
            if journal is None:
                raise KeyError(journal_id)
            updated = replace(journal, shared_with_circle_id=circle_id)
            self.journals[journal_id] = updated
            return updated

    # --- Circles -------------------------------------------------------------

    def create_circle(self, owner_id: int, name: str, description: Optional[str] = None) -> Circle:
        """Store a circle together with the owner's admin membership row."""
        with self._lock:
            circle = Circle(id=self._next_id(), name=name, owner_id=owner_id, description=description)
            self.circles[circle.id] = circle
            try:
                self.add_circle_member(circle.id, owner_id, role='admin')
            except Exception:
                del self.circles[circle.id]
                raise
            return circle

    def get_circle(self, circle_id: int) -> Optional[Circle]:
        return self.circles.get(circle_id)

    def delete_circle(self, circle_id: int) -> None:
        """Drop a circle, its membership rows and any journal shares pointing at it."""
        with self._lock:
            self.circles.pop(circle_id, None)
            for member_id in [m.id for m in self.members.values() if m.circle_id == circle_id]:
                del self.members[member_id]
            for journal in list(self.journals.values()):
                if journal.shared_with_circle_id == circle_id:
                    self.journals[journal.id] = replace(journal, shared_with_circle_id=None)

    def circles_for_user(self, user_id: int) -> List[Circle]:
        with self._lock:
            joined = {m.circle_id for m in self.members.values() if m.user_id == user_id}
            return [c for c in self.circles.values() if c.owner_id == user_id or c.id in joined]

    # --- Circle membership ---------------------------------------------------

    def add_circle_member(self, circle_id: int, user_id: int, role: str = 'member') -> CircleMember:
        """Store a membership row; ConflictError if the user already has one."""
        with self._lock:
            if self.get_circle_member(circle_id, user_id) is not None:
                raise ConflictError('User is already a member of this circle')
            member = CircleMember(id=self._next_id(), circle_id=circle_id, user_id=user_id, role=role)
            self.members[member.id] = member
            return member

    def get_circle_member(self, circle_id: int, user_id: int) -> Optional[CircleMember]:
        with self._lock:
            return next(
                (m for m in self.members.values()
                 if m.circle_id == circle_id and m.user_id == user_id),
                None
            )

    def circle_members(self, circle_id: int) -> List[CircleMember]:
        with self._lock:
            return [m for m in self.members.values() if m.circle_id == circle_id]

    def remove_circle_member(self, circle_id: int, user_id: int) -> bool:
        """Remove the membership row if present. Returns whether one was removed."""
        with self._lock:
            member = self.get_circle_member(circle_id, user_id)
            if member is None:
                return False
            del self.members[member.id]
            return True

    def has_membership_row(self, user_id: int, circle_id: int) -> bool:
        return self.get_circle_member(circle_id, user_id) is not None
