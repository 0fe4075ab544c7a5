"""
zte_onu.extract.token_call
===========================
Reads key/value pairs the firmware serialises as pseudo-function calls
inside page script::

    Transfer_meaning('IPAddr0','192\\x2e168\\x2e1\\x2e2');

Field names are looked up exactly, so ``Name1`` never matches ``Name10``.
Indexed record lists are walked by suffixing the field with the record
number; the number of records is announced by ``IF_INSTNUM``.
"""

import re

from ..config import INSTNUM_FIELD, TOKEN_CALL_NAME
from ..errors import ParseError

# The firmware escapes exactly these four characters; nothing else is touched.
_ESCAPES = (
    ("\\x2d", "-"),
    ("\\x2e", "."),
    ("\\x3a", ":"),
    ("\\x5f", "_"),
)


def _call_re(field: str) -> "re.Pattern[str]":
    return re.compile(
        re.escape(TOKEN_CALL_NAME)
        + r"""\(\s*['"]"""
        + re.escape(field)
        + r"""['"]\s*,\s*(?P<q>['"])(?P<value>.*?)(?P=q)\s*\)""",
        re.DOTALL,
    )


def unescape(value: str) -> str:
    """Undo the firmware's hex escapes for ``- . : _``."""
    for escaped, literal in _ESCAPES:
        value = value.replace(escaped, literal)
    return value


def extract(body: str, field: str) -> str | None:
    """
    Return the unescaped value of the first ``Transfer_meaning('field', ...)``
    call in *body*, or ``None`` when there is no such call.

    An explicitly empty value comes back as ``""``, not ``None``.
    """
    m = _call_re(field).search(body)
    if not m:
        return None
    return unescape(m.group("value"))


def extract_or_empty(body: str, field: str) -> str:
    """Lenient read-path variant: an absent field reads as ``""``."""
    value = extract(body, field)
    return "" if value is None else value


def extract_count(body: str, field: str = INSTNUM_FIELD) -> int:
    """
    Return the record count announced by *field* (``IF_INSTNUM`` by default).

    Raises ParseError when the field is missing or not an unsigned integer.
    """
    raw = extract(body, field)
    if raw is None:
        raise ParseError(f"count field {field!r} not found")
    digits = raw.strip()
    if not (digits.isascii() and digits.isdecimal()):
        raise ParseError(f"count field {field!r} is not a number: {raw!r}")
    return int(digits)
