"""
zte_onu.context
================
The client object: owns the base URL, the HTTP session and the router
Session, and exposes the read and port-forwarding operations.

Quick start
-----------
    from zte_onu import Context, New, Protocol, Host, Simple

    ctx = Context("http://192.168.1.1")
    ctx.login("admin", "secret")
    for wan in ctx.wan_info():
        print(wan)
    ctx.port_forwarding(New(), "ssh", Protocol.TCP,
                        "IGD.WD1.WCD3.WCPPP1", Host("192.168.1.10"), Simple(22))

Port-forward rules are addressed by their position in the current listing.
Deleting a rule shifts every rule after it, so name-based deletion lists
again before each delete.
"""

from __future__ import annotations

from pathlib import Path

import requests

from .auth.login import login
from .auth.session import Session
from .codec import (
    decode_lan_leases,
    decode_rules,
    decode_wan_infos,
    decode_wancs,
    encode_action,
    encode_rule,
)
from .config import (
    ACTION_FIELD,
    DEFAULT_BASE_URL,
    LAN_DHCP_PAGE,
    PORT_FORWARD_PAGE,
    REQUEST_TIMEOUT,
    WAN_STATUS_PAGE,
)
from .engine import RequestEngine, Response
from .errors import AuthenticationError, ProtocolError
from .logging_setup import log
from .models import (
    Action,
    Apply,
    Delete,
    DeleteByName,
    LanLease,
    LocalTarget,
    New,
    PortForwardRule,
    PortSpec,
    Protocol,
    WanInfo,
    Wanc,
)
from .network.client import base_url, build_session


class Context:
    """Stateful client for one ONU web interface."""

    def __init__(
        self,
        base: str = DEFAULT_BASE_URL,
        http: requests.Session | None = None,
        save_path: Path | None = None,
        verify_ssl: bool = True,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base = base_url(base)
        self.http = http if http is not None else build_session(verify_ssl=verify_ssl)
        self.timeout = timeout
        self.engine = RequestEngine(self.http, self.base, timeout=timeout, save_path=save_path)
        self.session: Session | None = None

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _request(self, method: str, page: str, form: dict[str, str] | None = None) -> Response:
        if self.session is None:
            raise AuthenticationError("not logged in")
        call, self.session = self.engine.prepare(self.session, method, page, form)
        response = self.engine.execute(call, self.session)
        self.session = response.session
        return response

    def _get(self, page: str) -> Response:
        response = self._request("GET", page)
        if not response.result.ok:
            log.warning("GET %s reported %s/%s/%s", page, response.result.status_text,
                        response.result.param, response.result.kind)
        return response

    def _submit(self, page: str, form: dict[str, str]) -> Response:
        response = self._request("POST", page, form)
        if not response.result.succeeded:
            raise ProtocolError(response.result)
        return response

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> Session:
        self.session = login(self.http, self.base, username, password, self.timeout)
        return self.session

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def wan_info(self) -> list[WanInfo]:
        return decode_wan_infos(self._get(WAN_STATUS_PAGE).body)

    def lan_info(self) -> list[LanLease]:
        return decode_lan_leases(self._get(LAN_DHCP_PAGE).body)

    def wanc_info(self) -> list[Wanc]:
        return decode_wancs(self._get(PORT_FORWARD_PAGE).body)

    # ------------------------------------------------------------------
    # Port forwarding
    # ------------------------------------------------------------------

    def port_forwarding_list(self) -> list[PortForwardRule]:
        return decode_rules(self._get(PORT_FORWARD_PAGE).body)

    def port_forwarding(
        self,
        action: Action,
        name: str,
        protocol: Protocol,
        wan_view_name: str,
        local_target: LocalTarget,
        port_spec: PortSpec,
        *,
        enabled: bool = True,
        remote_address_range: tuple[str, str] | None = None,
        description: str | None = None,
        lease_duration: str | None = None,
        creator_tag: str | None = None,
    ) -> list[PortForwardRule]:
        """
        Create (``New()``) or overwrite (``Apply(index)``) one rule and
        return the rule list as the router shows it afterwards.
        """
        if not isinstance(action, (New, Apply)):
            raise ValueError(f"port_forwarding accepts New or Apply, not {action!r}")
        remote_ports, local_ports = port_spec.ranges()
        rule = PortForwardRule(
            enabled=enabled,
            name=name,
            protocol=protocol,
            wan_view_name=wan_view_name,
            remote_address_range=remote_address_range,
            remote_port_range=remote_ports,
            local_target=local_target,
            local_port_range=local_ports,
            description=description,
            lease_duration=lease_duration,
            creator_tag=creator_tag,
        )
        form = {**encode_action(action), **encode_rule(rule)}
        log.info("Port forwarding %s: %s", form[ACTION_FIELD], name)
        self._submit(PORT_FORWARD_PAGE, form)
        return self.port_forwarding_list()

    def port_forwarding_delete(self, action: Action) -> list[PortForwardRule]:
        """
        Delete one rule by position (``Delete(index)``) or by the first rule
        carrying a name (``DeleteByName(name)``), and return the rule list
        afterwards.  Raises LookupError when no rule has that name.
        """
        if isinstance(action, DeleteByName):
            rules = self.port_forwarding_list()
            index = next((i for i, r in enumerate(rules) if r.name == action.name), None)
            if index is None:
                raise LookupError(f"no port-forwarding rule named {action.name!r}")
            log.debug("rule %r is at index %d", action.name, index)
            action = Delete(index)
        elif not isinstance(action, Delete):
            raise ValueError(f"port_forwarding_delete accepts Delete or DeleteByName, not {action!r}")
        log.info("Port forwarding delete: index %d", action.index)
        self._submit(PORT_FORWARD_PAGE, encode_action(action))
        return self.port_forwarding_list()

    def port_forwarding_delete_all(self, name: str) -> list[PortForwardRule]:
        """Delete every rule named *name*, one list+delete cycle per rule."""
        rules = self.port_forwarding_list()
        while any(r.name == name for r in rules):
            rules = self.port_forwarding_delete(DeleteByName(name))
        return rules
