"""
Form-side field rules. These mirror contact_relay.lib.validation but speak to
the person filling the form, so the wording differs; what passes and fails
does not.
"""
import re
from typing import Callable, Dict, Optional

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate_name(value: str) -> str:
    return "" if len(value.strip()) >= 2 else "Please enter your full name."


def validate_email(value: str) -> str:
    value = value.strip()
    if not value:
        return "Email is required."
    return "" if EMAIL_PATTERN.search(value) else "Enter a valid email address."


def validate_phone(value: str) -> str:
    value = value.strip()
    if value and len(value) < 6:
        return "Phone number looks too short."
    return ""


def validate_message(value: str) -> str:
    return "" if len(value.strip()) >= 10 else "Let us know how we can help."


VALIDATORS: Dict[str, Callable[[str], str]] = {
    "name": validate_name,
    "email": validate_email,
    "phone": validate_phone,
    "message": validate_message,
}


def validate_field(name: str, value: str) -> Optional[str]:
    """Return the error for a field, or None when it passes or has no rule."""
    validator = VALIDATORS.get(name)
    if validator is None:
        return None
    return validator(value or "") or None
