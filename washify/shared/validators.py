"""Shared validation utilities"""

import re
import uuid
from typing import Optional
from urllib.parse import urlparse


def validate_uuid(value: str) -> bool:
    """Validate UUID format"""
    try:
        uuid.UUID(value)
        return True
    except (ValueError, AttributeError, TypeError):
        return False


def require_uuid(value: str, label: str = "ID") -> str:
    """
    Validate that a value is a UUID, for use inside pydantic validators.

    Raises:
        ValueError: If the value is not a UUID
    """
    if not validate_uuid(value):
        raise ValueError(f"Invalid {label}")
    return value


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        raise ValueError("Invalid email address")

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email address")

    return email


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a free-form international phone number.

    Accepts digits with optional leading "+", spaces, dashes, dots and
    parentheses, e.g. "+1-555-0001" or "(555) 010-2030".

    Raises:
        ValueError: If the number has the wrong characters or digit count
    """
    if phone is None:
        return phone

    phone = phone.strip()
    if not phone:
        return None

    if not re.match(r"^\+?[\d\s\-\.\(\)]+$", phone):
        raise ValueError("Invalid phone number")

    digits = re.sub(r"\D", "", phone)
    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 7 and 15 digits")

    return phone


def validate_photo_url(url: str) -> str:
    """
    Validate a photo URL (absolute http/https).

    Raises:
        ValueError: If the URL is not an absolute http(s) URL
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid photo URL")
    return url


LIKE_ESCAPE = "\\"


def contains_pattern(search: str) -> str:
    """LIKE pattern matching `search` as a literal substring"""
    escaped = (
        search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
