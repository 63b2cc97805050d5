"""Circle operations and membership roster management.

Only a circle's owner may change its roster. The owner always counts as a
member and cannot be removed through the roster.
"""

import logging

from app import access
from app.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.validators import optional_string, required_string
from .models import ROLES

logger = logging.getLogger(__name__)


class CircleService:
    def __init__(self, store):
        self.store = store

    def _get_circle(self, circle_id):
        circle = self.store.get_circle(circle_id)
        if circle is None:
            raise NotFoundError()
        return circle

    def _get_managed_circle(self, circle_id, requester_id):
        circle = self._get_circle(circle_id)
        if not access.can_manage_circle(requester_id, circle):
            logger.info('User %s denied managing circle %s', requester_id, circle_id)
            raise ForbiddenError()
        return circle

    def create_circle(self, owner_id, data):
        name = required_string(data, 'name')
        description = optional_string(data, 'description')
        circle = self.store.create_circle(owner_id, name, description)
        logger.info('User %s created circle %s', owner_id, circle.id)
        return circle

    def list_circles_for_user(self, user_id):
        return self.store.circles_for_user(user_id)

    def get_circle(self, circle_id, requester_id):
        circle = self._get_circle(circle_id)
        if not access.is_circle_member(self.store, requester_id, circle_id):
            raise ForbiddenError()
        return circle

    def list_members(self, circle_id, requester_id):
        """Return membership rows as dicts including each member's username."""
        self.get_circle(circle_id, requester_id)
        members = []
        for member in self.store.circle_members(circle_id):
            user = self.store.get_user(member.user_id)
            members.append(member.to_dict(username=user.username if user else None))
        return members

    def add_member(self, circle_id, requester_id, data):
        circle = self._get_managed_circle(circle_id, requester_id)

        username = required_string(data, 'username')
        role = optional_string(data, 'role') or 'member'
        if role not in ROLES:
            raise ValidationError(f"'role' must be one of: {', '.join(ROLES)}")

        user = self.store.get_user_by_username(username)
        if user is None:
            raise NotFoundError('User not found')
        # the owner counts as a member even without a row; duplicate rows are
        # rejected by the store under its lock
        if user.id == circle.owner_id:
            raise ConflictError('User is already a member of this circle')

        member = self.store.add_circle_member(circle_id, user.id, role=role)
        logger.info('User %s added to circle %s as %s', user.id, circle_id, role)
        return member.to_dict(username=user.username)

    def remove_member(self, circle_id, requester_id, target_user_id):
        circle = self._get_managed_circle(circle_id, requester_id)
        if target_user_id == circle.owner_id:
            raise ValidationError('The circle owner cannot be removed')
        if self.store.remove_circle_member(circle_id, target_user_id):
            logger.info('User %s removed from circle %s', target_user_id, circle_id)

    def delete_circle(self, circle_id, requester_id):
        self._get_managed_circle(circle_id, requester_id)
        self.store.delete_circle(circle_id)
        logger.info('Circle %s deleted by user %s', circle_id, requester_id)
