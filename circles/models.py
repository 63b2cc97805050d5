from dataclasses import dataclass
from typing import Optional

ROLES = ('member', 'admin')


@dataclass
class Circle:
    """Named group of users that journals can be shared with."""
    id: int
    name: str
    owner_id: int
    description: Optional[str] = None

    def to_dict(self):
        """Return circle data as dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'owner_id': self.owner_id,
            'description': self.description
        }

    def __repr__(self):
        return f'<Circle {self.name}>'


@dataclass
class CircleMember:
    """Membership row linking a user to a circle."""
    id: int
    circle_id: int
    user_id: int
    role: str = 'member'

    def to_dict(self, username=None):
        """Return membership data, optionally with the member's username."""
        data = {
            'id': self.id,
            'circle_id': self.circle_id,
            'user_id': self.user_id,
            'role': self.role
        }
        if username is not None:
            data['username'] = username
        return data

    def __repr__(self):
        return f'<CircleMember {self.user_id}@{self.circle_id}>'
