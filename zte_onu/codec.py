"""
Mapping between typed records and the router's string-encoded fields.

Wire conventions:

* booleans are ``"1"`` / ``"0"``
* port numbers are decimal strings
* an absent optional string is the literal ``"NULL"``
* the local target is exactly one of ``InternalHost`` / ``InternalMacHost``,
  selected by ``MacEnable``

Indexed lists (rules, leases) are read from ``Transfer_meaning`` calls named
``Field{i}`` for ``i`` in ``range(IF_INSTNUM)``.  WAN status is read from
the two-column tables instead; see ``decode_wan_info``.
"""

from collections.abc import Mapping

from .config import (
    INDEX_FIELD,
    ACTION_FIELD,
    NEW_INDEX,
    NULL_SENTINEL,
    RESULT_KIND_FIELD,
    RESULT_PARAM_FIELD,
    RESULT_STATUS_FIELD,
    WAN_CELL_TAG,
    WAN_ROW_TAG,
    WAN_TABLE_CLASS,
    WAN_TABLE_TAG,
    WANC_IPMODE_ATTR,
    WANC_SELECT_ID,
    WANC_UNKNOWN_IPMODE,
)
from .errors import ParseError
from .extract.tables import extract_key_value_tables, extract_select_options
from .extract.token_call import extract, extract_count, extract_or_empty
from .logging_setup import log
from .models import (
    Action,
    ApiResult,
    Apply,
    BridgeWan,
    Delete,
    DhcpWan,
    Host,
    LanLease,
    MacHost,
    New,
    PortForwardRule,
    PPPoEWan,
    Protocol,
    WanInfo,
    WanIpInfo,
    Wanc,
)

# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def bool_to_wire(value: bool) -> str:
    return "1" if value else "0"


def bool_from_wire(raw: str, field: str = "") -> bool:
    if raw == "1":
        return True
    if raw == "0":
        return False
    raise ParseError(f"{field or 'boolean'}: expected '0' or '1', got {raw!r}")


def int_from_wire(raw: str, field: str = "") -> int:
    digits = raw.strip()
    if not (digits.isascii() and digits.isdecimal()):
        raise ParseError(f"{field or 'number'}: expected an unsigned integer, got {raw!r}")
    return int(digits)


def opt_to_wire(value: str | None) -> str:
    return NULL_SENTINEL if value is None else value


def opt_from_wire(raw: str | None) -> str | None:
    if raw is None or raw == NULL_SENTINEL:
        return None
    return raw


# ---------------------------------------------------------------------------
# Result triple
# ---------------------------------------------------------------------------

def decode_api_result(body: str) -> ApiResult:
    return ApiResult(
        status_text=extract_or_empty(body, RESULT_STATUS_FIELD),
        param=extract_or_empty(body, RESULT_PARAM_FIELD),
        kind=extract_or_empty(body, RESULT_KIND_FIELD),
    )


# ---------------------------------------------------------------------------
# Indexed token-call lists
# ---------------------------------------------------------------------------

def indexed_fields(body: str, names: tuple[str, ...], index: int) -> dict[str, str]:
    """Read ``{name}{index}`` for every name; absent fields are left out."""
    fields = {}
    for name in names:
        value = extract(body, f"{name}{index}")
        if value is not None:
            fields[name] = value
    return fields


_LEASE_FIELDS = ("HostName", "MACAddr", "IPAddr", "ExpiredTime", "PhyPortName")


def decode_lan_leases(body: str) -> list[LanLease]:
    leases = []
    for i in range(extract_count(body)):
        f = indexed_fields(body, _LEASE_FIELDS, i)
        leases.append(LanLease(
            name=f.get("HostName", ""),
            mac=f.get("MACAddr", ""),
            ip=f.get("IPAddr", ""),
            lease_time_remaining=f.get("ExpiredTime", ""),
            physical_interface_name=f.get("PhyPortName", ""),
        ))
    return leases


# ---------------------------------------------------------------------------
# Port-forward rules
# ---------------------------------------------------------------------------

RULE_FIELDS = (
    "Enable", "Name", "Protocol", "WANCViewName",
    "MinRemoteHost", "MaxRemoteHost", "MinExtPort", "MaxExtPort",
    "MacEnable", "InternalHost", "InternalMacHost",
    "MinIntPort", "MaxIntPort",
    "Description", "LeaseDuration", "PortMappCreator",
)


def _require(fields: Mapping[str, str], name: str) -> str:
    try:
        return fields[name]
    except KeyError:
        raise ParseError(f"port-forwarding field {name!r} missing") from None


def _protocol_from_wire(raw: str) -> Protocol:
    try:
        return Protocol(raw)
    except ValueError:
        raise ParseError(f"unknown port-forwarding protocol {raw!r}") from None


def decode_rule(fields: Mapping[str, str]) -> PortForwardRule:
    """Decode one rule from its un-suffixed wire fields."""
    if bool_from_wire(_require(fields, "MacEnable"), "MacEnable"):
        mac = opt_from_wire(fields.get("InternalMacHost"))
        if mac is None:
            raise ParseError("MacEnable=1 but InternalMacHost is absent")
        local_target = MacHost(mac)
    else:
        host = opt_from_wire(fields.get("InternalHost"))
        if host is None:
            raise ParseError("MacEnable=0 but InternalHost is absent")
        local_target = Host(host)

    min_remote = opt_from_wire(fields.get("MinRemoteHost"))
    max_remote = opt_from_wire(fields.get("MaxRemoteHost"))
    remote_range = None
    if min_remote is not None and max_remote is not None:
        remote_range = (min_remote, max_remote)

    return PortForwardRule(
        enabled=bool_from_wire(_require(fields, "Enable"), "Enable"),
        name=_require(fields, "Name"),
        protocol=_protocol_from_wire(_require(fields, "Protocol")),
        wan_view_name=_require(fields, "WANCViewName"),
        remote_address_range=remote_range,
        remote_port_range=(
            int_from_wire(_require(fields, "MinExtPort"), "MinExtPort"),
            int_from_wire(_require(fields, "MaxExtPort"), "MaxExtPort"),
        ),
        local_target=local_target,
        local_port_range=(
            int_from_wire(_require(fields, "MinIntPort"), "MinIntPort"),
            int_from_wire(_require(fields, "MaxIntPort"), "MaxIntPort"),
        ),
        description=opt_from_wire(fields.get("Description")),
        lease_duration=opt_from_wire(fields.get("LeaseDuration")),
        creator_tag=opt_from_wire(fields.get("PortMappCreator")),
    )


def encode_rule(rule: PortForwardRule) -> dict[str, str]:
    """Encode *rule* into un-suffixed wire fields (inverse of decode_rule)."""
    remote = rule.remote_address_range
    fields = {
        "Enable": bool_to_wire(rule.enabled),
        "Name": rule.name,
        "Protocol": rule.protocol.value,
        "WANCViewName": rule.wan_view_name,
        "MinRemoteHost": opt_to_wire(remote[0] if remote else None),
        "MaxRemoteHost": opt_to_wire(remote[1] if remote else None),
        "MinExtPort": str(rule.remote_port_range[0]),
        "MaxExtPort": str(rule.remote_port_range[1]),
    }
    if isinstance(rule.local_target, MacHost):
        fields["MacEnable"] = "1"
        fields["InternalMacHost"] = rule.local_target.mac
    else:
        fields["MacEnable"] = "0"
        fields["InternalHost"] = rule.local_target.address
    fields.update({
        "MinIntPort": str(rule.local_port_range[0]),
        "MaxIntPort": str(rule.local_port_range[1]),
        "Description": opt_to_wire(rule.description),
        "LeaseDuration": opt_to_wire(rule.lease_duration),
        "PortMappCreator": opt_to_wire(rule.creator_tag),
    })
    return fields


def decode_rules(body: str) -> list[PortForwardRule]:
    return [
        decode_rule(indexed_fields(body, RULE_FIELDS, i))
        for i in range(extract_count(body))
    ]


def encode_action(action: Action) -> dict[str, str]:
    """``IF_ACTION`` / ``IF_INDEX`` pair for a port-forward form."""
    if isinstance(action, New):
        return {ACTION_FIELD: "new", INDEX_FIELD: NEW_INDEX}
    if isinstance(action, Apply):
        return {ACTION_FIELD: "apply", INDEX_FIELD: str(action.index)}
    if isinstance(action, Delete):
        return {ACTION_FIELD: "delete", INDEX_FIELD: str(action.index)}
    raise ValueError(f"{action!r} has no wire form; resolve it to an index first")


# ---------------------------------------------------------------------------
# WAN connection enumeration
# ---------------------------------------------------------------------------

def decode_wancs(body: str) -> list[Wanc]:
    """
    Merge the ``<select id="Frm_WANCViewName">`` options (view name, IP
    mode) with the ``ConnName{i}`` / ``ConnViewName{i}`` script list
    (internal and display names), matching on view name.
    """
    ip_modes: dict[str, int] = {}
    for option in extract_select_options(body, WANC_SELECT_ID):
        view_name = option.get("value", "")
        raw_mode = option.get(WANC_IPMODE_ATTR)
        if raw_mode is None:
            continue
        try:
            ip_modes.setdefault(view_name, int(raw_mode))
        except ValueError:
            raise ParseError(f"WAN connection {view_name!r}: bad ipmode {raw_mode!r}") from None

    wancs = []
    i = 0
    while True:
        view_name = extract(body, f"ConnViewName{i}")
        if view_name is None:
            break
        internal_name = extract_or_empty(body, f"ConnName{i}")
        display_name = extract(body, f"ConnDisplayName{i}")
        wancs.append(Wanc(
            internal_name=internal_name,
            view_name=view_name,
            display_name=internal_name if display_name is None else display_name,
            ip_mode=ip_modes.get(view_name, WANC_UNKNOWN_IPMODE),
        ))
        i += 1
    return wancs


# ---------------------------------------------------------------------------
# WAN status tables
# ---------------------------------------------------------------------------

MODE_LABEL = "模式"
NAME_LABEL = "连接名称"
STATUS_LABEL = "连接状态"
ERROR_REASON_LABEL = "断开原因"
UPTIME_LABEL = "在线时长"
LEASE_TIME_LABEL = "剩余租期"

MODE_PPPOE = "PPPoE"
MODE_DHCP = "DHCP"
MODE_BRIDGE = "桥接"


def decode_wan_ip_info(kv: Mapping[str, str]) -> WanIpInfo:
    return WanIpInfo(
        nat=kv.get("NAT", ""),
        ip=kv.get("IP", ""),
        dns1=kv.get("DNS1", ""),
        dns2=kv.get("DNS2", ""),
        dns3=kv.get("DNS3", ""),
        mac=kv.get("WAN MAC", ""),
        gateway=kv.get("网关", ""),
    )


def decode_wan_info(kv: Mapping[str, str]) -> WanInfo:
    """Pick the WAN variant from the table's mode label.  Unknown -> ParseError."""
    mode = kv.get(MODE_LABEL)
    name = kv.get(NAME_LABEL, "")
    if mode == MODE_PPPOE:
        return PPPoEWan(
            name=name,
            ip_info=decode_wan_ip_info(kv),
            status=kv.get(STATUS_LABEL, ""),
            error_reason=kv.get(ERROR_REASON_LABEL, ""),
            uptime=kv.get(UPTIME_LABEL, ""),
        )
    if mode == MODE_DHCP:
        return DhcpWan(
            name=name,
            ip_info=decode_wan_ip_info(kv),
            status=kv.get(STATUS_LABEL, ""),
            lease_time=kv.get(LEASE_TIME_LABEL, ""),
        )
    if mode == MODE_BRIDGE:
        return BridgeWan(name=name)
    log.error("unknown WAN table: %r", dict(kv))
    raise ParseError(f"unknown WAN connection mode {mode!r}")


def decode_wan_infos(body: str) -> list[WanInfo]:
    return [
        decode_wan_info(kv)
        for kv in extract_key_value_tables(
            body, WAN_TABLE_TAG, WAN_TABLE_CLASS, WAN_ROW_TAG, WAN_CELL_TAG
        )
    ]
