# Canonical field values both validators must agree on: (field, value, is_valid)
FIELD_CASES = [
    ("name", "Jo", True),
    ("name", "  Ada Lovelace  ", True),
    ("name", "J", False),
    ("name", "  J  ", False),
    ("name", "", False),
    ("email", "jo@example.com", True),
    ("email", "  first.last@studio.co.uk ", True),
    ("email", "bad", False),
    ("email", "jo@example", False),
    ("email", "@example.com", False),
    ("email", "", False),
    ("email", "   ", False),
    ("phone", "", True),
    ("phone", "   ", True),
    ("phone", "12345", False),
    ("phone", "123456", True),
    ("phone", "+44 20 7946 0000", True),
    ("message", "Hello there, need a quote", True),
    ("message", "0123456789", True),
    ("message", "hi", False),
    ("message", "  short    ", False),
    ("message", "", False),
]

VALID_PAYLOAD = {
    "name": "Jo",
    "email": "jo@example.com",
    "phone": "",
    "message": "Hello there, need a quote",
}

INVALID_PAYLOAD = {"name": "J", "email": "bad", "message": "hi"}
