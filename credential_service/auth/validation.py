"""
Request validation.

Payloads are checked against named schemas. A schema is an ordered table of
fields, each with an ordered list of tagged rules. Every violated rule
contributes its message, so a single call reports all problems with a
request in a stable field-then-rule order.
"""
import re
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Tuple
from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, ConfigDict, Field

# Letters (ASCII and Latin-1 accented) separated by single spaces
FULL_NAME_PATTERN = re.compile(r"[A-Za-zÀ-ÿ]+(?: [A-Za-zÀ-ÿ]+)*")


class Rule(NamedTuple):
    """One check on a field: ``kind`` selects the checker, ``arg`` parameterizes it."""
    kind: str
    message: str
    arg: Any = None


def _required(value: Any, _arg: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _email(value: Any, _arg: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _pattern(value: Any, pattern: "re.Pattern[str]") -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def _min_length(value: Any, length: int) -> bool:
    return isinstance(value, str) and len(value) >= length


def _max_length(value: Any, length: int) -> bool:
    return isinstance(value, str) and len(value) <= length


CHECKERS: Dict[str, Callable[[Any, Any], bool]] = {
    "required": _required,
    "email": _email,
    "pattern": _pattern,
    "min_length": _min_length,
    "max_length": _max_length,
}

EMAIL_RULES = [
    Rule("required", "Email is required"),
    Rule("email", "Email must be a valid email address"),
]

PASSWORD_RULES = [
    Rule("required", "Password is required"),
    Rule("min_length", "Password must be at least 6 characters long", 6),
    Rule("max_length", "Password must be at most 32 characters long", 32),
]

FULL_NAME_RULES = [
    Rule("required", "Full name is required"),
    Rule("pattern", "Full name must contain only letters and valid spaces between words", FULL_NAME_PATTERN),
    Rule("min_length", "Full name must be at least 4 characters long", 4),
    Rule("max_length", "Full name must be at most 50 characters long", 50),
]

SCHEMAS: Dict[str, List[Tuple[str, List[Rule]]]] = {
    "CreateUser": [
        ("email", EMAIL_RULES),
        ("fullName", FULL_NAME_RULES),
        ("password", PASSWORD_RULES),
    ],
    "LoginUser": [
        ("email", EMAIL_RULES),
        ("password", PASSWORD_RULES),
    ],
}


class ValidationOutcome(BaseModel):
    """Result of validating a payload. Empty ``messages`` means valid."""
    messages: List[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.messages

    @property
    def message(self) -> str:
        return ", ".join(self.messages)


def validate(schema_name: str, payload: Any) -> ValidationOutcome:
    """
    Validate ``payload`` against the schema registered as ``schema_name``.

    Args:
        schema_name: Key into ``SCHEMAS``
        payload: Incoming request data; anything other than a mapping is
            treated as an empty one

    Returns:
        ValidationOutcome listing every violated rule's message

    Raises:
        KeyError: If no schema is registered under ``schema_name``
    """
    schema = SCHEMAS[schema_name]
    if not isinstance(payload, Mapping):
        payload = {}

    messages = []
    for field_name, rules in schema:
        value = payload.get(field_name)
        for rule in rules:
            if not CHECKERS[rule.kind](value, rule.arg):
                messages.append(rule.message)
    return ValidationOutcome(messages=messages)


# Typed views of payloads that passed validation

class RegistrationRequest(BaseModel):
    """Registration payload as received on ``auth/store``."""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    full_name: str = Field(..., alias="fullName")
    password: str


class LoginRequest(BaseModel):
    """Login payload as received on ``auth/login``."""
    email: str
    password: str
