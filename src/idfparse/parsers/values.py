"""Value reader: classifies scanner tokens into typed values.

Data records accept ``string | float | integer | quoted_string``; header
records accept ``string_num_allowed | quoted_string``. The classes are
mutually exclusive by first character, so classification is a single
dispatch on the token type followed by a shape check for numeric runs.
"""

import re

from lark import Token

from ..exceptions import Diagnostic, ErrorKind, IDFSyntaxError
from ..models.document import (
    FloatValue,
    IntegerValue,
    QuotedStringValue,
    StringValue,
)
from .scanner import NUMBER, QUOTED_STRING, WORD, position_of

# Pre-compiled numeric literal shapes
_INTEGER = re.compile(r"-?(?:0|[1-9][0-9]*)")
_FLOAT = re.compile(r"-?(?:0|[1-9][0-9]*)\.[0-9]+")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
# Longer runs are out of range; checked before int() to stay clear of the
# interpreter's int-string conversion limit
_INT64_MAX_DIGITS = 19

VALUE_TOKENS = frozenset({WORD, NUMBER, QUOTED_STRING})


def is_value_token(token: Token) -> bool:
    """Returns True if the token can appear inside a record."""
    return token.type in VALUE_TOKENS


def parse_number(token: Token):
    """Classifies a raw numeric run as a float or integer value.

    Raises:
        IDFSyntaxError: InvalidNumericLiteral when the run fits neither shape
            (``007``, ``3.``, ``1e5``, ``-``) or overflows 64 bits.
    """
    text = str(token)
    if _FLOAT.fullmatch(text):
        return FloatValue(value=float(text))
    if _INTEGER.fullmatch(text):
        if len(text.lstrip("-")) <= _INT64_MAX_DIGITS:
            value = int(text)
            if _INT64_MIN <= value <= _INT64_MAX:
                return IntegerValue(value=value)
        reason = "is outside the 64-bit integer range"
    else:
        reason = "is not a valid integer or float literal"
    raise IDFSyntaxError(
        Diagnostic(
            kind=ErrorKind.INVALID_NUMERIC_LITERAL,
            message=f"'{_shorten(text)}' {reason}",
            position=position_of(token),
        )
    )


def read_value(token: Token):
    """Reads one data-record value.

    Args:
        token: A WORD, NUMBER or QUOTED_STRING token.

    Returns:
        StringValue, FloatValue, IntegerValue or QuotedStringValue.
    """
    if token.type == WORD:
        return StringValue(value=str(token))
    if token.type == NUMBER:
        return parse_number(token)
    if token.type == QUOTED_STRING:
        return QuotedStringValue(value=str(token)[1:-1])
    raise _unexpected(token, "a value")


def read_header_value(token: Token):
    """Reads one header-record value.

    Digit-first runs such as ``3.0`` or ``2024-01-01`` are kept as strings
    with their raw text; they are never interpreted as numbers here.
    """
    if token.type == WORD or (token.type == NUMBER and token[0].isdigit()):
        return StringValue(value=str(token))
    if token.type == QUOTED_STRING:
        return QuotedStringValue(value=str(token)[1:-1])
    raise _unexpected(token, "a string or quoted string")


def _unexpected(token: Token, wanted: str) -> IDFSyntaxError:
    return IDFSyntaxError(
        Diagnostic(
            kind=ErrorKind.UNEXPECTED_TOKEN,
            message=f"Expected {wanted}, got {token.type} '{token}'",
            position=position_of(token),
        )
    )


def _shorten(text: str, limit: int = 40) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."
