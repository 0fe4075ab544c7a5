"""
Command-line interface for the ZTE ONU client.

    python -m zte_onu info wan
    python -m zte_onu pf list
    python -m zte_onu pf add ssh --wan IGD.WD1.WCD3.WCPPP1 --host 192.168.1.10 --port 22
    python -m zte_onu pf delete --name ssh
"""

import argparse
import dataclasses
import enum
import getpass
import json
import sys
from pathlib import Path

from zte_onu.config import DEFAULT_BASE_URL, DEFAULT_PASSWORD, DEFAULT_USER
from zte_onu.context import Context
from zte_onu.errors import OnuError
from zte_onu.logging_setup import _setup_logging, log
from zte_onu.models import (
    Apply,
    Delete,
    DeleteByName,
    Host,
    MacHost,
    Multiple,
    New,
    Protocol,
    Simple,
    Transform,
)

_PROTOCOLS = {"tcp": Protocol.TCP, "udp": Protocol.UDP, "both": Protocol.BOTH}


def parse_args(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="ZTE ONU web-admin client – status and port forwarding.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials can also be provided via the ROUTER_USERNAME and\n"
            "ROUTER_PASSWORD env vars.  If the password is not supplied and\n"
            "not in the environment, you will be prompted for it."
        ),
    )
    parser.add_argument(
        "--base-url", default=DEFAULT_BASE_URL,
        help=f"Router origin (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--user", default=DEFAULT_USER,
        help=f"Admin username (default: {DEFAULT_USER})",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="Admin password (overrides ROUTER_PASSWORD env var)",
    )
    parser.add_argument(
        "--save", type=Path, default=None,
        help="Write the last raw response body to this file",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Show status information")
    info.add_argument("target", choices=["wan", "lan", "wanc"])

    pf = sub.add_parser("pf", help="Port forwarding")
    pf_sub = pf.add_subparsers(dest="pf_command", required=True)
    pf_sub.add_parser("list", help="List port-forwarding rules")

    for name, help_text in (("add", "Add a rule"), ("apply", "Overwrite the rule at INDEX")):
        p = pf_sub.add_parser(name, help=help_text)
        if name == "apply":
            p.add_argument("index", type=int)
        p.add_argument("name")
        p.add_argument("--protocol", choices=sorted(_PROTOCOLS), default="both")
        p.add_argument("--wan", required=True, help="WAN connection view name (see `info wanc`)")
        target = p.add_mutually_exclusive_group(required=True)
        target.add_argument("--host", help="Local IP address")
        target.add_argument("--mac", help="Local MAC address")
        ports = p.add_mutually_exclusive_group(required=True)
        ports.add_argument("--port", type=int, help="Same port on both sides")
        ports.add_argument("--ports", type=int, nargs=2, metavar=("REMOTE", "LOCAL"))
        ports.add_argument("--range", type=int, nargs=4,
                           metavar=("RMIN", "RMAX", "LMIN", "LMAX"))
        p.add_argument("--description", default=None)

    delete = pf_sub.add_parser("delete", help="Delete a rule")
    which = delete.add_mutually_exclusive_group(required=True)
    which.add_argument("--index", type=int)
    which.add_argument("--name")
    delete.add_argument("--all", action="store_true",
                        help="With --name, delete every rule of that name")

    return parser.parse_args(argv)


def _to_jsonable(obj):
    if isinstance(obj, enum.Enum):
        return obj.name
    raise TypeError(f"{type(obj).__name__} is not JSON serialisable")


def _print_records(records) -> None:
    rows = [dataclasses.asdict(r) for r in records]
    print(json.dumps(rows, ensure_ascii=False, indent=2, default=_to_jsonable))


def _port_spec(args: argparse.Namespace):
    if args.port is not None:
        return Simple(args.port)
    if args.ports is not None:
        return Transform(*args.ports)
    rmin, rmax, lmin, lmax = args.range
    return Multiple((rmin, rmax), (lmin, lmax))


def run(ctx: Context, args: argparse.Namespace):
    """Execute the parsed command against a logged-in Context."""
    if args.command == "info":
        if args.target == "wan":
            return ctx.wan_info()
        if args.target == "lan":
            return ctx.lan_info()
        return ctx.wanc_info()

    if args.pf_command == "list":
        return ctx.port_forwarding_list()
    if args.pf_command in ("add", "apply"):
        action = New() if args.pf_command == "add" else Apply(args.index)
        target = MacHost(args.mac) if args.mac else Host(args.host)
        return ctx.port_forwarding(
            action, args.name, _PROTOCOLS[args.protocol], args.wan, target,
            _port_spec(args), description=args.description,
        )
    if args.index is not None:
        return ctx.port_forwarding_delete(Delete(args.index))
    if args.all:
        return ctx.port_forwarding_delete_all(args.name)
    return ctx.port_forwarding_delete(DeleteByName(args.name))


def main(argv=None) -> None:
    """
    Main entry point for the CLI.
    """
    args = parse_args(argv)

    _setup_logging(debug=args.debug)

    if not args.password:
        args.password = getpass.getpass("Router password: ")

    ctx = Context(args.base_url, save_path=args.save)
    try:
        ctx.login(args.user, args.password)
        records = run(ctx, args)
    except (OnuError, LookupError) as exc:
        log.error("%s", exc)
        sys.exit(1)
    _print_records(records)


if __name__ == "__main__":
    main()
