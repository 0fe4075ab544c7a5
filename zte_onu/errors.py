"""Exception hierarchy raised by the ZTE ONU client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ApiResult


class OnuError(Exception):
    """Base class for every error raised by this package."""


class TransportError(OnuError):
    """Network or I/O failure talking to the router.  Never retried."""


class AuthenticationError(OnuError):
    """Bad credentials, unexpected login page content, or no session yet."""


class ParseError(OnuError):
    """An expected field, element or number is missing or malformed."""


class ProtocolError(OnuError):
    """The router rejected a mutating request.

    ``result`` is the router's own status/param/kind triple, verbatim.
    """

    def __init__(self, result: "ApiResult") -> None:
        super().__init__(
            f"router rejected request: status={result.status_text!r} "
            f"param={result.param!r} kind={result.kind!r}"
        )
        self.result = result
