"""
Password strength validation.

Registration requires every rule in PASSWORD_REQUIREMENTS to pass; the
strength meter shown during sign-up is the number of satisfied rules.

Example:
    from common.utils import validate_password

    is_valid, errors = validate_password("weakpass")
    if not is_valid:
        print("Password errors:", errors)
"""

import re
from typing import Callable, List, Tuple


# (id, message, check)
PASSWORD_REQUIREMENTS: List[Tuple[str, str, Callable[[str], bool]]] = [
    ("length", "Password must be at least 8 characters", lambda p: len(p) >= 8),
    ("uppercase", "Password must contain at least one uppercase letter", lambda p: bool(re.search(r"[A-Z]", p))),
    ("lowercase", "Password must contain at least one lowercase letter", lambda p: bool(re.search(r"[a-z]", p))),
    ("number", "Password must contain at least one digit", lambda p: bool(re.search(r"[0-9]", p))),
]


def password_strength(password: str) -> int:
    """Number of satisfied requirements (0 to len(PASSWORD_REQUIREMENTS))."""
    return sum(1 for _, _, check in PASSWORD_REQUIREMENTS if check(password))


def validate_password(
    password: str,
    max_length: int = 128,
) -> Tuple[bool, List[str]]:
    """
    Validate password strength.

    Args:
        password: The password to validate
        max_length: Maximum password length accepted by the auth backend

    Returns:
        Tuple of (is_valid: bool, errors: List[str])

    Examples:
        >>> validate_password("weak")[0]
        False
        >>> validate_password("StrongPass1")
        (True, [])
    """
    errors: List[str] = [
        message for _, message, check in PASSWORD_REQUIREMENTS if not check(password)
    ]

    if len(password) > max_length:
        errors.append(f"Password must be no more than {max_length} characters")

    return len(errors) == 0, errors
