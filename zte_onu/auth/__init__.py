"""Authentication submodule – login exchange and session state."""

from zte_onu.auth.login import login, login_error_message
from zte_onu.auth.session import Session, parse_session, refresh_session
from zte_onu.auth.token import get_login_token

__all__ = [
    "login",
    "login_error_message",
    "Session",
    "parse_session",
    "refresh_session",
    "get_login_token",
]
