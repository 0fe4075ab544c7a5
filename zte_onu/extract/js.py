"""
zte_onu.extract.js
===================
Pulls double-quoted string literals out of the small set of JavaScript
assignments the web UI uses to hand state to the browser:

* ``getObj("Frm_Logintoken").value = "4";``        – one-time login token
* ``getObj("errmsg").innerHTML = "...";``           – login error text
* ``var session_token = "8592085478...";``           – rotating session token
* ``function getURL(){var ret = "getpage.gch?...";`` – next-page path
"""

import re

# getObj("Frm_Logintoken").value = "4";
LOGIN_TOKEN_RE = re.compile(
    r'getObj\(\s*"Frm_Logintoken"\s*\)\.value\s*=\s*"([^"]*)"',
)

# getObj("errmsg").innerHTML = "...";  (one firmware puts a space before .innerHTML)
ERRMSG_RE = re.compile(
    r'getObj\(\s*"errmsg"\s*\)\s?\.innerHTML\s*=\s*"([^"]*)"',
)

# var session_token = "...";
SESSION_TOKEN_RE = re.compile(
    r'session_token\s*=\s*"([^"]*)"',
)

# function getURL(){var ret = "getpage.gch?pid=1002&nextpage=";
NEXT_PAGE_RE = re.compile(
    r'getURL\s*\(\s*\)\s*\{\s*var\s+ret\s*=\s*"([^"]*)"',
)


def js_literal(body: str, pattern: "re.Pattern[str]") -> str | None:
    """Return the first captured literal for *pattern* in *body*, or None."""
    m = pattern.search(body)
    return m.group(1) if m else None
