"""
Identifier validation for tenant slugs and namespace (schema) names.

Namespace names end up inside DDL and schema-qualified SQL text, where bind
parameters cannot be used. Every such string must pass through
`validate_identifier` first; the `ValidIdentifier` type marks values that did.
"""

import re

from cardapio.errors import ValidationError

IDENTIFIER_PATTERN = re.compile(r"[a-z0-9_]+")
MIN_LENGTH = 3
# PostgreSQL truncates identifiers longer than NAMEDATALEN - 1
MAX_LENGTH = 63


def _check_identifier(candidate: object, field: str) -> str:
    """Accept lowercase ASCII letters, digits and underscore, 3 to 63 chars."""
    if not isinstance(candidate, str):
        raise ValidationError.for_field(field, "must be a string")
    if len(candidate) < MIN_LENGTH:
        raise ValidationError.for_field(field, f"must have at least {MIN_LENGTH} characters")
    if len(candidate) > MAX_LENGTH:
        raise ValidationError.for_field(field, f"must have at most {MAX_LENGTH} characters")
    if not IDENTIFIER_PATTERN.fullmatch(candidate):
        raise ValidationError.for_field(
            field, "only lowercase letters, digits and underscore are allowed"
        )
    return candidate


class ValidIdentifier(str):
    """A string that passed the identifier rules; construction validates."""

    __slots__ = ()

    def __new__(cls, candidate: object, field: str = "identifier"):
        return super().__new__(cls, _check_identifier(candidate, field))


def validate_identifier(candidate: object, field: str = "identifier") -> ValidIdentifier:
    if isinstance(candidate, ValidIdentifier):
        return candidate
    return ValidIdentifier(candidate, field)


def quote_identifier(identifier: ValidIdentifier) -> str:
    """Double-quote a validated identifier for use in SQL text."""
    if not isinstance(identifier, ValidIdentifier):
        raise TypeError("quote_identifier requires a ValidIdentifier")
    return f'"{identifier}"'
