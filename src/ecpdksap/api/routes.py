import dataclasses
import logging

from fastapi import APIRouter, Request

from ecpdksap.api.models import (
    CandidateErrorModel,
    KeysRequest,
    KeysResponse,
    MatchModel,
    ScanRequest,
    ScanResponse,
    ScanStatsModel,
    SendRequest,
    SendResponse,
)
from ecpdksap.core.config import ScanConfig
from ecpdksap.core.keys import RecipientKeys, RecipientPublicKeys
from ecpdksap.core.scanner import ScanResult, Scanner
from ecpdksap.core.sender import send
from ecpdksap.crypto.view_tag import parse_view_tag_scheme
from ecpdksap.protocol import get_variant

logger = logging.getLogger("ecpdksap.api")

router = APIRouter(tags=["Stealth Addresses"])


def get_scan_config(request: Request, override: str | None = None) -> ScanConfig:
    """Scan config loaded at startup, with an optional per-request on_error override."""
    config = getattr(request.app.state, "scan_config", None) or ScanConfig()
    if override:
        config = dataclasses.replace(config, on_error=override.strip().lower())
    return config


def to_scan_response(req: ScanRequest, result: ScanResult) -> ScanResponse:
    stats = result.stats
    return ScanResponse(
        version=req.version,
        view_tag_version=req.view_tag_version,
        matches=[
            MatchModel(
                index=m.index,
                R=m.ephemeral,
                public_key=m.identifier.public_key,
                address=m.identifier.address,
                private_key=m.identifier.private_key,
            )
            for m in result.matches
        ],
        errors=[CandidateErrorModel(index=e.index, kind=e.kind, message=e.message) for e in result.errors],
        stats=ScanStatsModel(
            candidates=stats.candidates,
            scanned=stats.scanned,
            filtered_out=stats.filtered_out,
            recoveries=stats.recoveries,
            failed=stats.failed,
            avg_filter_ms=stats.avg_filter_ms,
            avg_recovery_ms=stats.avg_recovery_ms,
        ),
        truncated=result.truncated,
    )


@router.post("/keys", response_model=KeysResponse)
def generate_keys(req: KeysRequest):
    """
    Generate a recipient key set for a protocol variant.
    The private keys are returned once; the service does not store them.
    """
    variant = get_variant(req.version)
    keys = RecipientKeys.generate(variant.spend_group)
    return KeysResponse(version=variant.name, **keys.to_hex())


@router.post("/send", response_model=SendResponse)
def send_output(req: SendRequest):
    """Derive one stealth output (R, identifier, optional view tag) for a recipient."""
    variant = get_variant(req.version)
    public_keys = RecipientPublicKeys.from_hex(
        req.spend_public_key, req.view_public_key, variant.spend_group
    )
    out = send(public_keys, variant, req.view_tag_version)
    return SendResponse(
        version=out.variant,
        R=out.ephemeral,
        public_key=out.identifier.public_key,
        address=out.identifier.address,
        view_tag=out.view_tag,
    )


@router.post("/scan", response_model=ScanResponse)
def scan_candidates(request: Request, req: ScanRequest):
    """
    Scan published ephemeral points with the recipient's private keys.
    Non-matching candidates are omitted; malformed ones are reported under `errors`
    unless the batch policy is `abort`.
    """
    variant = get_variant(req.version)
    scheme = parse_view_tag_scheme(req.view_tag_version)
    keys = RecipientKeys.from_hex(req.k, req.v, variant.spend_group)
    config = get_scan_config(request, req.on_error)

    result = Scanner(keys, variant, scheme, config=config).scan(req.candidates())
    logger.info(f"/scan: {len(result.matches)} match(es) out of {len(req.rs)} candidate(s)")
    return to_scan_response(req, result)
