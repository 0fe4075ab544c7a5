"""
Network operations module for HTTP client setup.
"""

from zte_onu.network.client import build_session, base_url, body_text

__all__ = ["build_session", "base_url", "body_text"]
