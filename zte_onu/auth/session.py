"""
Session state carried between requests.

The router hands out two pieces of state in page script:

* ``var session_token = "...";`` – a single-use token that must accompany
  the next form submission.
* ``function getURL(){var ret = "getpage.gch?pid=1002&nextpage=";`` – the
  path prefix that addresses the next page.

A ``Session`` is immutable.  Spending the token or receiving a new one
produces a new value; the client is either unauthenticated (``None``) or
holds one of these.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..errors import ParseError
from ..extract.js import NEXT_PAGE_RE, SESSION_TOKEN_RE, js_literal


@dataclass(frozen=True)
class Session:
    next_page_path: str
    # None once spent on a form submission and not yet replaced
    auth_token: str | None

    def consume(self) -> tuple[str | None, "Session"]:
        """Return the current token and the session left after spending it."""
        return self.auth_token, replace(self, auth_token=None)


def parse_session(body: str) -> Session:
    """
    Build a Session from a page that must carry both literals (the template
    page right after login).  Raises ParseError if either is missing.
    """
    token = js_literal(body, SESSION_TOKEN_RE)
    if token is None:
        raise ParseError("session_token not found")
    next_page = js_literal(body, NEXT_PAGE_RE)
    if next_page is None:
        raise ParseError("getURL() next-page path not found")
    return Session(next_page_path=next_page, auth_token=token)


def refresh_session(body: str, previous: Session | None) -> Session | None:
    """
    Return the session to use after receiving *body*.

    A body carrying ``session_token`` replaces *previous* wholesale; the
    next-page path is taken from the body when present and otherwise kept.
    Without a token, or without a previous session (nobody has logged in),
    *previous* is returned unchanged.
    """
    if previous is None:
        return None
    token = js_literal(body, SESSION_TOKEN_RE)
    if token is None:
        return previous
    next_page = js_literal(body, NEXT_PAGE_RE)
    return Session(
        next_page_path=next_page if next_page is not None else previous.next_page_path,
        auth_token=token,
    )
