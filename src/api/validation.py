"""
Input validation pass

Each rule is (field, predicate, message). Predicates receive the field value
and the whole payload, so cross-field checks (password confirmation) are
plain rules too. All rules run; failures are joined into one
VALIDATION_ERROR before any use case is invoked.
"""

import re
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional, Tuple

from libs.result import Error, Result, Return

Rule = Tuple[str, Callable[[Any, dict], bool], str]

DATE_FORMATS = ("%d/%m/%Y", "%Y/%m/%d")
OTP_PATTERN = re.compile(r"[0-9]{6}")
RESET_METHODS = ("otp", "token")


def parse_date_of_birth(value: Any) -> Optional[date]:
    """Accepts dd/MM/yyyy, yyyy/MM/dd, ISO yyyy-MM-dd or a full ISO timestamp"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    # Full ISO timestamps ("1990-01-31T00:00:00Z") keep only the date part
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def length_between(low: int, high: int) -> Callable[[Any, dict], bool]:
    return lambda value, _: isinstance(value, str) and low <= len(value) <= high


def optional_range(low: float, high: float) -> Callable[[Any, dict], bool]:
    return lambda value, _: value is None or low <= value <= high


def _provided(value: Any) -> bool:
    return value is not None and value != ""


SIGNUP_RULES: list[Rule] = [
    ("name", length_between(2, 50), "The name must be between 2 and 50 characters long."),
    (
        "last_name",
        length_between(2, 50),
        "The last name must be between 2 and 50 characters long.",
    ),
    (
        "telephone",
        length_between(10, 15),
        "The telephone number must be between 10 and 15 digits.",
    ),
    (
        "date_of_birth",
        lambda value, _: parse_date_of_birth(value) is not None,
        "The dateOfBirth must be a valid date in the format dd/MM/yyyy, yyyy/MM/dd or yyyy-MM-dd.",
    ),
    (
        "password",
        length_between(8, 20),
        "The password must be between 8 and 20 characters long.",
    ),
    (
        "confirm_password",
        length_between(8, 20),
        "The confirm password must be between 8 and 20 characters long.",
    ),
    (
        "confirm_password",
        lambda value, data: value == data.get("password"),
        "Password and confirm password do not match.",
    ),
    ("latitude", optional_range(-90, 90), "The latitude must be a valid coordinate."),
    ("longitude", optional_range(-180, 180), "The longitude must be a valid coordinate."),
]

LOGIN_RULES: list[Rule] = [
    ("password", lambda value, _: _provided(value), "The password is required."),
    ("latitude", optional_range(-90, 90), "The latitude must be a valid coordinate."),
    ("longitude", optional_range(-180, 180), "The longitude must be a valid coordinate."),
]

RESET_PASSWORD_RULES: list[Rule] = [
    (
        "method",
        lambda value, _: value in RESET_METHODS,
        'The reset method must be "otp" or "token".',
    ),
    (
        "otp",
        lambda value, data: _provided(value) != _provided(data.get("token")),
        "Exactly one of OTP or Token must be provided.",
    ),
    (
        "otp",
        lambda value, _: value is None or bool(OTP_PATTERN.fullmatch(value)),
        "The OTP code must be a 6-digit number.",
    ),
    (
        "otp",
        lambda value, data: data.get("method") != "otp" or _provided(value),
        "The OTP is required when method is otp.",
    ),
    (
        "email",
        lambda value, data: data.get("method") != "otp" or _provided(value),
        "The email is required when method is otp.",
    ),
    (
        "token",
        lambda value, data: data.get("method") != "token" or _provided(value),
        "The token is required when method is token.",
    ),
    (
        "new_password",
        length_between(8, 20),
        "The new password must be between 8 and 20 characters long.",
    ),
]


def run_rules(data: dict, rules: Iterable[Rule]) -> Result[None]:
    """
    Evaluate every rule against the payload.

    Args:
        data: Payload keyed by snake_case field name
        rules: Rules to evaluate

    Returns:
        Result with None, or Error(VALIDATION_ERROR) listing every failed message
    """
    messages = []
    for field, check, message in rules:
        if not check(data.get(field), data) and message not in messages:
            messages.append(message)

    if messages:
        return Return.err(Error("VALIDATION_ERROR", " ".join(messages)))
    return Return.ok(None)
