"""
HTTP client configuration for router communication.

Provides a keep-alive session that never retries on its own: the router
rotates its session token on every response, so a blind resend would
always go out with a stale token.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


def build_session(verify_ssl: bool = True) -> requests.Session:
    """
    Return a requests.Session with keep-alive pre-configured and retries off.

    Args:
        verify_ssl: Whether to verify SSL certificates

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    # The web UI is only ever driven by a browser; keep the router's
    # user-agent checks happy.
    session.headers.update({
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Connection": "keep-alive",
    })
    return session


def base_url(host: str) -> str:
    """
    Build the base URL for the router.

    Accepts either a bare host (``192.168.1.1``) or a full origin
    (``http://192.168.1.1/``) and returns the origin without a trailing slash.
    """
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")


def body_text(resp: requests.Response) -> str:
    """
    Decode a response body.  The firmware serves UTF-8 pages without a
    charset parameter, which would make requests fall back to ISO-8859-1.
    """
    return resp.content.decode("utf-8", errors="replace")
