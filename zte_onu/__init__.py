"""
zte_onu
=======
Client for the web administration interface of ZTE GPON ONUs (F6xx family).
There is no API: state is read out of server-rendered pages and the
``Transfer_meaning('Field','value')`` calls embedded in their script, and
port-forwarding rules are written back through the same page forms.

Package structure
-----------------
zte_onu/
├── __init__.py       – package init and public API
├── config.py         – constants: URLs, page names, wire field names
├── errors.py         – TransportError / AuthenticationError / ParseError / ProtocolError
├── logging_setup.py  – package logger
├── models.py         – typed records (WAN/LAN/WANC/port-forward)
├── codec.py          – records <-> wire fields, page decoders
├── engine.py         – single-request engine threading the Session
├── context.py        – Context: login and domain operations
├── cli.py            – argparse CLI (``python -m zte_onu``)
├── auth/             – login exchange, Session value
├── extract/          – token-call, table and JS-literal extraction
├── network/          – requests.Session factory
└── utils/            – raw response persistence
"""

from .context import Context
from .auth import Session, login
from .engine import RequestEngine
from .errors import (
    AuthenticationError,
    OnuError,
    ParseError,
    ProtocolError,
    TransportError,
)
from .models import (
    ApiResult,
    Apply,
    BridgeWan,
    Delete,
    DeleteByName,
    DhcpWan,
    Host,
    LanLease,
    MacHost,
    Multiple,
    New,
    PortForwardRule,
    PPPoEWan,
    Protocol,
    Simple,
    Transform,
    Wanc,
    WanIpInfo,
)

__all__ = [
    "Context",
    "Session",
    "login",
    "RequestEngine",
    "OnuError",
    "TransportError",
    "AuthenticationError",
    "ParseError",
    "ProtocolError",
    "ApiResult",
    "WanIpInfo",
    "PPPoEWan",
    "DhcpWan",
    "BridgeWan",
    "LanLease",
    "Wanc",
    "Protocol",
    "Host",
    "MacHost",
    "PortForwardRule",
    "Simple",
    "Transform",
    "Multiple",
    "New",
    "Apply",
    "Delete",
    "DeleteByName",
]
