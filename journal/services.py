"""Journal operations: creation, listing, retrieval and sharing changes."""

import logging

from app import access
from app.errors import ForbiddenError, NotFoundError, ValidationError
from app.validators import optional_bool, optional_id, optional_string, required_string
from .models import DEFAULT_MOOD, MOOD_COLORS, MOODS

logger = logging.getLogger(__name__)


class JournalService:
    def __init__(self, store):
        self.store = store

    def create_journal(self, owner_id, data):
        """Validate *data* and store a new journal owned by *owner_id*.

        Sharing with a circle requires the owner to be a member of it right
        now; otherwise ForbiddenError is raised and nothing is stored.
        """
        title = required_string(data, 'title')
        content = required_string(data, 'content')
        category = required_string(data, 'category')

        mood = optional_string(data, 'mood') or DEFAULT_MOOD
        if mood not in MOODS:
            raise ValidationError(f"'mood' must be one of: {', '.join(MOODS)}")
        mood_color = optional_string(data, 'mood_color') or MOOD_COLORS[mood]

        is_public = optional_bool(data, 'is_public')
        circle_id = optional_id(data, 'shared_with_circle_id')

        if circle_id is not None and not access.can_share_with_circle(self.store, owner_id, circle_id):
            logger.info('User %s denied sharing new journal with circle %s', owner_id, circle_id)
            raise ForbiddenError('You are not a member of this circle')

        journal = self.store.create_journal(
            owner_id,
            title=title,
            content=content,
            category=category,
            mood=mood,
            mood_color=mood_color,
            is_public=is_public,
            shared_with_circle_id=circle_id
        )
        logger.info('User %s created journal %s', owner_id, journal.id)
        return journal

    def list_accessible_journals(self, user_id):
        return [j for j in self.store.list_journals() if access.can_read_journal(self.store, j, user_id)]

    def list_own_journals(self, user_id):
        return self.store.journals_by_user(user_id)

    def get_journal(self, journal_id, user_id):
        journal = self.store.get_journal(journal_id)
        if journal is None:
            raise NotFoundError()
        if not access.can_read_journal(self.store, journal, user_id):
            logger.info('User %s denied read access to journal %s', user_id, journal_id)
            raise ForbiddenError()
        return journal

    def update_sharing(self, journal_id, requester_id, circle_id):
        """Share the journal with *circle_id*, or stop sharing when it is None.

        Membership is checked at the moment of sharing, regardless of any
        earlier share.
        """
        journal = self.store.get_journal(journal_id)
        if journal is None:
            raise NotFoundError()
        if journal.user_id != requester_id:
            raise ForbiddenError()
        if circle_id is not None and not access.can_share_with_circle(self.store, requester_id, circle_id):
            logger.info('User %s denied sharing journal %s with circle %s', requester_id, journal_id, circle_id)
            raise ForbiddenError('You are not a member of this circle')

        updated = self.store.update_journal_sharing(journal_id, circle_id)
        logger.info('Journal %s sharing set to circle %s', journal_id, circle_id)
        return updated
