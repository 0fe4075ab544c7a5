"""
zte_onu.engine
===============
Issues one HTTP call against the ONU and threads the Session through it.

Every call goes through two steps with a fixed order:

``prepare``
    Resolve the page URL from the session's next-page path and, for a form
    submission, attach the session token under ``_SESSION_TOKEN``.  The
    token is single-use, so the returned session has it spent *before*
    anything is transmitted.

``execute``
    Send and read the body. Pick up a fresh session token from the body
    when there is one, then optionally persist the body (a failed write is
    only logged) and read the
    ``IF_ERRORSTR`` / ``IF_ERRORPARAM`` / ``IF_ERRORTYPE`` result triple.

Callers keep the session returned by ``prepare`` even if ``execute``
raises: a failed submission still used up its token.  Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import requests

from .auth.session import Session, refresh_session
from .codec import decode_api_result
from .config import DEFAULT_NEXT_PAGE, REQUEST_TIMEOUT, SESSION_TOKEN_KEY
from .errors import AuthenticationError, TransportError
from .logging_setup import log
from .models import ApiResult
from .network.client import body_text
from .utils.files import save_file


@dataclass(frozen=True)
class PreparedCall:
    method: str
    url: str
    form: dict[str, str] | None


@dataclass(frozen=True)
class Response:
    result: ApiResult
    body: str
    session: Session | None


class RequestEngine:
    """Builds and executes single requests for a Context."""

    def __init__(
        self,
        http: requests.Session,
        base: str,
        timeout: float = REQUEST_TIMEOUT,
        save_path: Path | None = None,
    ) -> None:
        self.http = http
        self.base = base
        self.timeout = timeout
        self.save_path = save_path

    def url_for(self, session: Session | None, page: str) -> str:
        next_page = session.next_page_path if session is not None else DEFAULT_NEXT_PAGE
        return f"{self.base}/{next_page}{page}"

    def prepare(
        self,
        session: Session | None,
        method: str,
        page: str,
        form: dict[str, str] | None = None,
    ) -> tuple[PreparedCall, Session | None]:
        """Return the call to make and the session as it stands once it is made."""
        url = self.url_for(session, page)
        if form is not None and session is not None:
            token, session = session.consume()
            if token is None:
                raise AuthenticationError(
                    "session token already spent; list the page again before submitting"
                )
            form = {**form, SESSION_TOKEN_KEY: token}
        return PreparedCall(method, url, form), session

    def execute(self, call: PreparedCall, session: Session | None) -> Response:
        log.debug("%s %s", call.method, call.url)
        try:
            resp = self.http.request(
                call.method, call.url, data=call.form, timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{call.method} {call.url} failed: {exc}") from exc

        body = body_text(resp)
        new_session = refresh_session(body, session)
        if new_session is not session:
            log.debug("session token rotated: %s", new_session.auth_token)

        if self.save_path is not None:
            try:
                save_file(self.save_path, resp.content)
            except OSError as exc:
                log.warning("Could not save response body to %s: %s", self.save_path, exc)

        result = decode_api_result(body)
        if result.is_empty:
            log.warning("%s %s: response carries no IF_ERRORSTR", call.method, call.url)
        return Response(result=result, body=body, session=new_session)

    def send(
        self,
        session: Session | None,
        method: str,
        page: str,
        form: dict[str, str] | None = None,
    ) -> Response:
        """prepare + execute in one step, for callers that do not track the spent session."""
        call, session = self.prepare(session, method, page, form)
        return self.execute(call, session)
