import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

NAME_MIN = 2
PHONE_MIN = 6
MESSAGE_MIN = 10

FIELDS = ("name", "email", "phone", "message")


def sanitize(value: Any) -> str:
    """Trimmed text; anything that is not a string counts as empty."""
    if not isinstance(value, str):
        return ""
    return value.strip()


class Enquiry(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _as_trimmed_text(cls, value):
        return sanitize(value)


@dataclass
class ValidationResult:
    errors: Dict[str, str] = field(default_factory=dict)
    enquiry: Optional[Enquiry] = None

    @property
    def is_valid(self) -> bool:
        return not self.errors


def check_name(value: str) -> Optional[str]:
    if len(value) < NAME_MIN:
        return "Please provide your full name."
    return None


def check_email(value: str) -> Optional[str]:
    if not EMAIL_PATTERN.search(value):
        return "Please provide a valid email address."
    return None


def check_phone(value: str) -> Optional[str]:
    if value and len(value) < PHONE_MIN:
        return "Phone number looks too short."
    return None


def check_message(value: str) -> Optional[str]:
    if len(value) < MESSAGE_MIN:
        return "Please include a short message."
    return None


CHECKS: Dict[str, Callable[[str], Optional[str]]] = {
    "name": check_name,
    "email": check_email,
    "phone": check_phone,
    "message": check_message,
}


def check_enquiry(enquiry: Enquiry) -> Dict[str, str]:
    """Run every rule over the model and collect all failures at once."""
    errors: Dict[str, str] = {}
    for name in FIELDS:
        problem = CHECKS[name](getattr(enquiry, name))
        if problem:
            errors[name] = problem
    return errors


def validate_enquiry(payload: Mapping[str, Any]) -> ValidationResult:
    enquiry = Enquiry.model_validate(dict(payload))
    errors = check_enquiry(enquiry)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(enquiry=enquiry)
