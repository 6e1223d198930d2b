# File: src/tailordesk/core/validators.py
"""Reusable validation utilities for input sanitization."""

import re


def validate_email(value: str) -> str:
    """
    Basic email format validation.

    Args:
        value: Email to validate

    Returns:
        Lowercase email

    Raises:
        ValueError: If format is invalid
    """
    cleaned = value.strip().lower()

    pattern = r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$"
    if not re.match(pattern, cleaned):
        raise ValueError("Invalid email format")

    return cleaned


def validate_search_term(value: str | None, max_length: int = 100) -> str | None:
    """
    Normalize a free-text search filter.

    Returns:
        Stripped term, or None if empty

    Raises:
        ValueError: If the term is too long or contains SQL wildcard characters
    """
    if value is None or not value.strip():
        return None

    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise ValueError(f"Search term cannot exceed {max_length} characters")

    # LIKE wildcards are added by the query layer
    if re.search(r"[%_\\]", cleaned):
        raise ValueError("Search term cannot contain %, _ or \\")

    return cleaned


MIN_PASSWORD_LENGTH = 8


def validate_password_strength(value: str) -> str:
    """
    Check a new password for a reset: length plus mixed character classes.

    Raises:
        ValueError: If the password is too short or misses a character class
    """
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    checks = (
        re.search(r"[A-Z]", value),
        re.search(r"[a-z]", value),
        re.search(r"\d", value),
        re.search(r"[^A-Za-z0-9]", value),
    )
    if not all(checks):
        raise ValueError(
            "Password must include at least one uppercase letter, one lowercase "
            "letter, one number, and one special character"
        )

    return value
