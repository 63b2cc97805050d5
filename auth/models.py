from dataclasses import dataclass
from werkzeug.security import generate_password_hash, check_password_hash


@dataclass
class User:
    """Registered user.

    `password_hash` holds werkzeug's salted hash string (method, salt and
    digest together); the plain password is never stored.
    """
    id: int
    username: str
    password_hash: str

    @staticmethod
    def hash_password(password):
        """Create hashed password."""
        return generate_password_hash(password)

    def check_password(self, password):
        """Check hashed password."""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Return user data as dictionary."""
        return {
            'id': self.id,
            'username': self.username
        }

    def __repr__(self):
        return f'<User {self.username}>'
