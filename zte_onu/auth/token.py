"""One-time login token for the ZTE ONU login form."""

import requests

from ..config import LOGIN_TOKEN_DEFAULT, REQUEST_TIMEOUT
from ..errors import TransportError
from ..extract.js import LOGIN_TOKEN_RE, js_literal
from ..logging_setup import log
from ..network.client import body_text


def get_login_token(http: requests.Session, base: str,
                    timeout: float = REQUEST_TIMEOUT) -> str:
    """
    GET the login page and read ``getObj("Frm_Logintoken").value = "...";``.

    The firmware omits the assignment once it has seen a previous login from
    this client; the form then expects ``"1"``.
    """
    try:
        resp = http.get(base, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(f"GET {base} failed: {exc}") from exc
    token = js_literal(body_text(resp), LOGIN_TOKEN_RE)
    if token is None:
        log.debug("Frm_Logintoken not present, using %r", LOGIN_TOKEN_DEFAULT)
        token = LOGIN_TOKEN_DEFAULT
    log.debug("Frm_Logintoken: %s", token)
    return token
