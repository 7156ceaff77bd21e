"""
Built-in rules.

Each rule matches explicitly on the runtime type of the resolved value.
"Number" below means int or float, never bool. No rule converts the value;
it is checked as given.

RULE -> PASSES WHEN:
- required   -> not None and, for strings, not blank after trimming
- string     -> str
- integer    -> int, integral float, or a string holding a base-10 integer
- min / max  -> numbers by magnitude, strings by trimmed length, others pass
- email      -> str with valid address syntax
- boolean    -> bool
- url        -> str with a scheme and (for network schemes) a host
- alpha      -> letters only
- alpha_dash -> letters, digits, dash, underscore
- numeric    -> number, or a string holding a numeric literal
- equal      -> same type and value as the field named by the parameter
- in/not_in  -> membership in the comma-split parameter
- date       -> canonical YYYY-MM-DD calendar date
"""

import re
from datetime import datetime
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from email_validator import EmailNotValidError, validate_email

from ..field_paths import resolve_path
from ..sanitizer import trim
from .base import BuiltinRule

_INTEGER_RE = re.compile(r"[+-]?(0|[1-9][0-9]*)")
_NUMERIC_RE = re.compile(r"[ \t\n\r\v\f]*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?[ \t\n\r\v\f]*")
_BOUND_RE = re.compile(r"\s*([+-]?[0-9]+)")
_ALPHA_RE = re.compile(r"[A-Za-z]+")
_ALPHA_DASH_RE = re.compile(r"[A-Za-z0-9_-]+")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")

# Schemes that are valid without a host part (mailto:someone@example.com).
_HOSTLESS_SCHEMES = {"mailto", "news", "file"}


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_bound(param: Optional[str]) -> int:
    """Leading integer of a min/max parameter; "3.5" -> 3, missing or junk -> 0."""
    if param is None:
        return 0
    match = _BOUND_RE.match(param)
    return int(match.group(1)) if match else 0


def as_text(value: Any) -> Optional[str]:
    """Text form used for in/not_in membership; None for non-scalar or bool values."""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return None


class Required(BuiltinRule):
    name = "required"
    message = "{field} is required."

    def passes(self, value, param, data):
        if value is None:
            return False
        if isinstance(value, str):
            return trim(value) != ""
        return True


class String(BuiltinRule):
    name = "string"
    message = "{field} must be a string."

    def passes(self, value, param, data):
        return isinstance(value, str)


class Integer(BuiltinRule):
    name = "integer"
    message = "{field} must be an integer."

    def passes(self, value, param, data):
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return value.is_integer()
        if isinstance(value, str):
            return _INTEGER_RE.fullmatch(trim(value)) is not None
        return False


class Min(BuiltinRule):
    name = "min"
    message = "{field} must be at least {param}."
    length_message = "{field} must be at least {param} characters."

    def passes(self, value, param, data):
        bound = parse_bound(param)
        if is_number(value):
            return value >= bound
        if isinstance(value, str):
            return len(trim(value)) >= bound
        return True

    def default_message(self, field, value, param):
        template = self.length_message if isinstance(value, str) else self.message
        return template.format(field=field, param="" if param is None else param)


class Max(BuiltinRule):
    name = "max"
    message = "{field} must not exceed {param}."
    length_message = "{field} must not exceed {param} characters."

    def passes(self, value, param, data):
        bound = parse_bound(param)
        if is_number(value):
            return value <= bound
        if isinstance(value, str):
            return len(trim(value)) <= bound
        return True

    def default_message(self, field, value, param):
        template = self.length_message if isinstance(value, str) else self.message
        return template.format(field=field, param="" if param is None else param)


class Email(BuiltinRule):
    name = "email"
    message = "{field} must be a valid email."

    def passes(self, value, param, data):
        if not isinstance(value, str):
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True


class Boolean(BuiltinRule):
    name = "boolean"
    message = "{field} must be a boolean value."

    def passes(self, value, param, data):
        return isinstance(value, bool)


class Url(BuiltinRule):
    name = "url"
    message = "{field} must be a valid URL."

    def passes(self, value, param, data):
        if not isinstance(value, str) or not value.isascii():
            return False
        if any(char.isspace() for char in value):
            return False
        try:
            parts = urlsplit(value)
            # Raises ValueError for a malformed port
            parts.port
        except ValueError:
            return False
        if not _SCHEME_RE.fullmatch(parts.scheme):
            return False
        if parts.scheme.lower() in _HOSTLESS_SCHEMES:
            return bool(parts.netloc or parts.path)
        return bool(parts.hostname)


class Alpha(BuiltinRule):
    name = "alpha"
    message = "{field} must contain only alphabetic characters."

    def passes(self, value, param, data):
        return isinstance(value, str) and _ALPHA_RE.fullmatch(value) is not None


class AlphaDash(BuiltinRule):
    name = "alpha_dash"
    message = "{field} must contain only alphanumeric characters, dashes, and underscores."

    def passes(self, value, param, data):
        return isinstance(value, str) and _ALPHA_DASH_RE.fullmatch(value) is not None


class Numeric(BuiltinRule):
    name = "numeric"
    message = "{field} must be numeric."

    def passes(self, value, param, data):
        if is_number(value):
            return True
        return isinstance(value, str) and _NUMERIC_RE.fullmatch(value) is not None


class Equal(BuiltinRule):
    name = "equal"
    message = "{field} must be equal to {param}."

    def passes(self, value, param, data):
        other = resolve_path(param, data)
        return type(value) is type(other) and value == other


class In(BuiltinRule):
    name = "in"
    message = "{field} must be one of the following values: {param}."

    def passes(self, value, param, data):
        text = as_text(value)
        if text is None or param is None:
            return False
        return text in param.split(",")


class NotIn(BuiltinRule):
    name = "not_in"
    message = "{field} must not be one of the following values: {param}."

    def passes(self, value, param, data):
        text = as_text(value)
        if text is None or param is None:
            return True
        return text not in param.split(",")


class Date(BuiltinRule):
    name = "date"
    message = "{field} must be a valid date."

    def passes(self, value, param, data):
        if not isinstance(value, str):
            return False
        try:
            parsed = datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            return False
        return parsed.isoformat() == value


BUILTIN_RULES: Dict[str, BuiltinRule] = {
    rule.name: rule
    for rule in (
        Required(),
        String(),
        Integer(),
        Min(),
        Max(),
        Email(),
        Boolean(),
        Url(),
        Alpha(),
        AlphaDash(),
        Numeric(),
        Equal(),
        In(),
        NotIn(),
        Date(),
    )
}


def get_builtin_rule(name: str) -> Optional[BuiltinRule]:
    """Return the built-in rule registered under name, or None."""
    return BUILTIN_RULES.get(name)
