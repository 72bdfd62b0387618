"""
Command-line entry point.

Every subcommand except keygen takes one JSON argument and prints JSON:

    ecpdksap keygen --version v2
    ecpdksap send '{"K": "...", "V": "...", "Version": "v2", "ViewTagVersion": "v0-1byte"}'
    ecpdksap receive-scan '{"k": "...", "v": "...", "Rs": ["..."], "Version": "v2"}'
    ecpdksap receive-scan-using-vtag '{"k": "...", "v": "...", "Rs": [...],
                                       "ViewTags": [...], "Version": "v2",
                                       "ViewTagVersion": "v0-1byte"}'

Exit codes: 0 ok, 1 bad JSON / request, 2 protocol input error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import BaseModel, ValidationError

from ecpdksap.api.models import KeysRequest, ScanRequest, SendRequest
from ecpdksap.api.routes import generate_keys, send_output, to_scan_response
from ecpdksap.core.config import ScanConfig
from ecpdksap.core.keys import RecipientKeys
from ecpdksap.core.scanner import Scanner
from ecpdksap.crypto.view_tag import parse_view_tag_scheme
from ecpdksap.errors import StealthError
from ecpdksap.protocol import VARIANTS, get_variant

logger = logging.getLogger("ecpdksap.cli")


def _emit(model: BaseModel) -> None:
    print(json.dumps(model.model_dump(), indent=2))


def _cmd_keygen(args: argparse.Namespace) -> int:
    _emit(generate_keys(KeysRequest(version=args.version)))
    return 0


def _cmd_send(args: argparse.Namespace) -> int:
    _emit(send_output(SendRequest.model_validate_json(args.request)))
    return 0


def _cmd_scan(args: argparse.Namespace, require_tags: bool = False) -> int:
    req = ScanRequest.model_validate_json(args.request)
    variant = get_variant(req.version)
    scheme = parse_view_tag_scheme(req.view_tag_version)
    if require_tags and (scheme is None or req.view_tags is None):
        raise ValueError("receive-scan-using-vtag needs ViewTagVersion and ViewTags")

    config = ScanConfig(
        on_error=(req.on_error or args.on_error).strip().lower(),
        max_workers=args.workers,
        time_budget=args.time_budget,
    )
    keys = RecipientKeys.from_hex(req.k, req.v, variant.spend_group)
    result = Scanner(keys, variant, scheme, config=config).scan(req.candidates())
    _emit(to_scan_response(req, result))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecpdksap",
        description="Dual-key stealth addresses over BN254 pairings, with view tags.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("keygen", help="Generate recipient keys for a variant")
    p.add_argument("--version", default="v2", choices=sorted(VARIANTS))
    p.set_defaults(func=_cmd_keygen)

    p = sub.add_parser("send", help="Derive one stealth output")
    p.add_argument("request", help="JSON: K, V, Version, ViewTagVersion")
    p.set_defaults(func=_cmd_send)

    for name, require_tags in (("receive-scan", False), ("receive-scan-using-vtag", True)):
        p = sub.add_parser(name, help="Scan ephemeral points" + (" with view tags" if require_tags else ""))
        p.add_argument("request", help="JSON: k, v, Rs, Version, ViewTags, ViewTagVersion")
        p.add_argument("--on-error", default="skip", choices=["skip", "abort"])
        p.add_argument("--workers", type=int, default=1)
        p.add_argument("--time-budget", type=float, default=None, help="Seconds")
        p.set_defaults(func=lambda a, _r=require_tags: _cmd_scan(a, require_tags=_r))

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return args.func(args)
    except StealthError as e:
        logger.error(f"{e.kind}: {e}")
        return 2
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid request: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
