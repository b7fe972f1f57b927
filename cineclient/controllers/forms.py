"""
Form field rules shared by the screen controllers.
"""

import re
from typing import Optional

# Same shape as the platform's standard e-mail address pattern
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)

MIN_PASSWORD_LENGTH = 6
MIN_MOVIE_YEAR = 1800

INVALID_EMAIL = "Invalid email"
EMPTY_PASSWORD = "Password cannot be empty"
SHORT_PASSWORD = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
NAME_REQUIRED = "Name is required"
EMPTY_NAME = "Name cannot be empty"


def is_blank(value: str) -> bool:
    return not value.strip()


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None
