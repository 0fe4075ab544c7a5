"""Login exchange and initial session extraction."""

import requests

from ..config import (
    ERRMSG_DEFAULT,
    LOGIN_SUCCESS_MARKER,
    REQUEST_TIMEOUT,
    TEMPLATE_PAGE,
)
from ..errors import AuthenticationError, TransportError
from ..extract.js import ERRMSG_RE, js_literal
from ..logging_setup import log
from ..network.client import body_text
from .session import Session, parse_session
from .token import get_login_token


def login_error_message(body: str) -> str:
    """Router's own complaint from ``getObj("errmsg").innerHTML = "...";``."""
    msg = js_literal(body, ERRMSG_RE)
    return ERRMSG_DEFAULT if msg is None else msg


def login(
    http: requests.Session,
    base: str,
    username: str,
    password: str,
    timeout: float = REQUEST_TIMEOUT,
) -> Session:
    """
    Authenticate against the ONU web interface and return the first Session.

      1. GET /          → Frm_Logintoken (defaults to "1")
      2. POST /         freshnum / action=login / Frm_Logintoken / Username / Password
      3. The authenticated top frame contains the ``topFrame`` iframe; a
         non-empty body without it is a failed login.
      4. GET /template.gch → session_token + getURL() next-page path

    Raises AuthenticationError carrying the router's message on failure,
    TransportError on network failure, ParseError if the template page does
    not carry the session literals.
    """
    login_token = get_login_token(http, base, timeout)

    payload = {
        "freshnum": "",
        "action": "login",
        "Frm_Logintoken": login_token,
        "Username": username,
        "Password": password,
    }
    try:
        resp = http.post(base, data=payload, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(f"Login POST failed: {exc}") from exc

    body = body_text(resp)
    if body and LOGIN_SUCCESS_MARKER not in body:
        log.debug("Login response length: %d", len(body))
        errmsg = login_error_message(body)
        log.error("Login failed: %s", errmsg)
        raise AuthenticationError(errmsg)

    template_url = base + TEMPLATE_PAGE
    try:
        resp = http.get(template_url, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(f"GET {template_url} failed: {exc}") from exc

    session = parse_session(body_text(resp))
    log.debug("session_token: %s  next page: %s",
              session.auth_token, session.next_page_path)
    log.info("Login successful as %s", username)
    return session
