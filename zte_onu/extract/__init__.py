"""
zte_onu.extract
================
Two independent page grammars:

* ``token_call`` – ``Transfer_meaning('Field','value')`` script calls
* ``tables``     – two-column HTML tables and ``<select>`` option lists

plus ``js`` for the handful of string-literal assignments that carry
login and session state.
"""

from .token_call import extract, extract_count, extract_or_empty, unescape
from .tables import cell_text, extract_key_value_tables, extract_select_options
from .js import js_literal

__all__ = [
    "extract",
    "extract_count",
    "extract_or_empty",
    "unescape",
    "cell_text",
    "extract_key_value_tables",
    "extract_select_options",
    "js_literal",
]
