"""
Typed records reconstructed from the router's pages.

Everything here is a read-only snapshot: each query builds fresh records and
nothing is cached between calls.  The WAN descriptor is a closed union of
three independent dataclasses (no shared base class); ``codec.decode_wan_info``
is the only place that chooses between them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .config import RESULT_SUCCESS


@dataclass(frozen=True)
class ApiResult:
    """Status triple every .gch page reports (IF_ERRORSTR/PARAM/TYPE)."""

    status_text: str = ""
    param: str = ""
    kind: str = ""

    @property
    def is_empty(self) -> bool:
        return self.status_text == ""

    @property
    def ok(self) -> bool:
        # read pages may omit the status fields entirely
        return self.status_text in (RESULT_SUCCESS, "")

    @property
    def succeeded(self) -> bool:
        """Explicit SUCC; what a form submission needs before it counts as applied."""
        return self.status_text == RESULT_SUCCESS


# ---------------------------------------------------------------------------
# WAN status
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WanIpInfo:
    """Addressing block shared by the PPPoE and DHCP tables, as rendered."""

    nat: str = ""
    ip: str = ""
    dns1: str = ""
    dns2: str = ""
    dns3: str = ""
    mac: str = ""
    gateway: str = ""


@dataclass(frozen=True)
class PPPoEWan:
    name: str
    ip_info: WanIpInfo
    status: str
    error_reason: str
    uptime: str
    mode: str = field(default="PPPoE", init=False)


@dataclass(frozen=True)
class DhcpWan:
    name: str
    ip_info: WanIpInfo
    status: str
    lease_time: str
    mode: str = field(default="DHCP", init=False)


@dataclass(frozen=True)
class BridgeWan:
    name: str
    mode: str = field(default="Bridge", init=False)


WanInfo = Union[PPPoEWan, DhcpWan, BridgeWan]


# ---------------------------------------------------------------------------
# LAN / WAN-connection enumeration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LanLease:
    """One active DHCP client."""

    name: str
    mac: str
    ip: str
    lease_time_remaining: str
    physical_interface_name: str


@dataclass(frozen=True)
class Wanc:
    """A WAN connection as offered by the port-forwarding page.

    ``ip_mode`` is -1 when the connection only appears in the script list
    and has no matching ``<option>``.
    """

    internal_name: str
    view_name: str
    display_name: str
    ip_mode: int


# ---------------------------------------------------------------------------
# Port forwarding
# ---------------------------------------------------------------------------

class Protocol(Enum):
    """Port-forward protocol, valued by its wire code."""

    TCP = "0"
    UDP = "1"
    BOTH = "2"


@dataclass(frozen=True)
class Host:
    """Local target addressed by IP / host name (``InternalHost``)."""

    address: str


@dataclass(frozen=True)
class MacHost:
    """Local target addressed by MAC (``InternalMacHost``, ``MacEnable=1``)."""

    mac: str


LocalTarget = Union[Host, MacHost]

PortRange = tuple[int, int]


@dataclass(frozen=True)
class PortForwardRule:
    """
    One port-forwarding slot.

    Rules have no stable id on the router: a rule is addressed by its
    position in the current listing, and every deletion shifts the
    positions after it.  Another admin session editing rules between a
    listing and a delete/apply will make that position point elsewhere;
    the router offers nothing to guard against this.
    """

    enabled: bool
    name: str
    protocol: Protocol
    wan_view_name: str
    remote_address_range: tuple[str, str] | None
    remote_port_range: PortRange
    local_target: LocalTarget
    local_port_range: PortRange
    description: str | None = None
    lease_duration: str | None = None
    creator_tag: str | None = None


@dataclass(frozen=True)
class Simple:
    """Same single port on both sides."""

    port: int

    def ranges(self) -> tuple[PortRange, PortRange]:
        return (self.port, self.port), (self.port, self.port)


@dataclass(frozen=True)
class Transform:
    """One remote port mapped onto a different local port."""

    remote: int
    local: int

    def ranges(self) -> tuple[PortRange, PortRange]:
        return (self.remote, self.remote), (self.local, self.local)


@dataclass(frozen=True)
class Multiple:
    """A remote port range mapped onto a local port range."""

    remote: PortRange
    local: PortRange

    def ranges(self) -> tuple[PortRange, PortRange]:
        return tuple(self.remote), tuple(self.local)


PortSpec = Union[Simple, Transform, Multiple]


# Port-forward actions.  ``port_forwarding`` accepts New/Apply,
# ``port_forwarding_delete`` accepts Delete/DeleteByName.

@dataclass(frozen=True)
class New:
    pass


@dataclass(frozen=True)
class Apply:
    index: int


@dataclass(frozen=True)
class Delete:
    index: int


@dataclass(frozen=True)
class DeleteByName:
    name: str


Action = Union[New, Apply, Delete, DeleteByName]
