"""Utility subpackage for the ZTE ONU client."""

from .files import save_file, load_body

__all__ = ["save_file", "load_body"]
