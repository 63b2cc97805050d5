from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

MOODS = ('joyful', 'happy', 'neutral', 'sad', 'angry')
DEFAULT_MOOD = 'neutral'

MOOD_COLORS = {
    'joyful': '#FFD700',
    'happy': '#98FB98',
    'neutral': '#808080',
    'sad': '#87CEEB',
    'angry': '#FF6B6B',
}


def _utcnow():
    return datetime.now(timezone.utc)


@dataclass
class Journal:
    """Journal entry with its visibility settings."""
    id: int
    user_id: int
    title: str
    content: str
    category: str
    mood: str = DEFAULT_MOOD
    mood_color: str = MOOD_COLORS[DEFAULT_MOOD]
    is_public: bool = False
    shared_with_circle_id: Optional[int] = None
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self):
        """Return journal data as dictionary."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'content': self.content,
            'category': self.category,
            'mood': self.mood,
            'mood_color': self.mood_color,
            'is_public': self.is_public,
            'shared_with_circle_id': self.shared_with_circle_id,
            'created_at': self.created_at.isoformat()
        }

    def __repr__(self):
        return f'<Journal {self.title}>'
