import re
from typing import Tuple, Optional

USERNAME_REGEX = re.compile(r"^[A-Za-z0-9_.-]{3,32}$")


def validate_username(username: str) -> Tuple[bool, Optional[str]]:
    """Usernames are 3-32 characters of letters, digits, '_', '.' or '-'.

    Returns (is_valid, error_message)."""
    if not isinstance(username, str) or not username:
        return False, "Username is required"
    if not USERNAME_REGEX.match(username):
        return False, "Username must be 3-32 letters, digits, '_', '.' or '-'"
    return True, None


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """Ensure password meets minimum requirements.

    Requirements:
    * At least 8 characters
    * Contains a letter and a digit
    """
    if not isinstance(password, str) or not password:
        return False, "Password is required"
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"
    if not re.search(r"[A-Za-z]", password):
        return False, "Password must contain a letter"
    if not re.search(r"\d", password):
        return False, "Password must contain a digit"
    return True, None
