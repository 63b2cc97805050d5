"""Visibility and management rules for journals and circles.

Checks always read the current store state; nothing here is cached, so a
member removed from a circle loses access on their next request.
"""


def is_circle_member(store, user_id, circle_id):
    """Owner of an existing circle, or holder of a membership row."""
    circle = store.get_circle(circle_id)
    if circle is None:
        return False
    return circle.owner_id == user_id or store.has_membership_row(user_id, circle_id)


def can_read_journal(store, journal, user_id):
    if journal.user_id == user_id:
        return True
    if journal.is_public:
        return True
    if journal.shared_with_circle_id is not None:
        return is_circle_member(store, user_id, journal.shared_with_circle_id)
    return False


def can_share_with_circle(store, user_id, circle_id):
    return is_circle_member(store, user_id, circle_id)


def can_manage_circle(user_id, circle):
    return circle.owner_id == user_id
