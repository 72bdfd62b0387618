"""
ecpdksap: dual-key stealth addresses over BN254 pairings, with view tags.

Usage:
    from ecpdksap import Group, RecipientKeys, Scanner, send

    keys = RecipientKeys.generate(Group.SECP256K1)
    out = send(keys.public, "v2", "v0-1byte")
    result = Scanner(keys, "v2", "v0-1byte").scan([out.to_candidate()])
"""

from ecpdksap.core import (
    KeyPair,
    RecipientKeys,
    RecipientPublicKeys,
    ScanCandidate,
    ScanConfig,
    ScanResult,
    Scanner,
    SendResult,
    StealthIdentifier,
    scan,
    send,
)
from ecpdksap.crypto import DEFAULT_CONTEXT, CurveContext, Group, ViewTagScheme
from ecpdksap.errors import (
    InvalidTagLength,
    MalformedEncoding,
    PointNotOnCurve,
    StealthError,
    UnsupportedVariant,
)
from ecpdksap.protocol import VARIANTS, ProtocolVariant, get_variant

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_CONTEXT",
    "CurveContext",
    "Group",
    "InvalidTagLength",
    "KeyPair",
    "MalformedEncoding",
    "PointNotOnCurve",
    "ProtocolVariant",
    "RecipientKeys",
    "RecipientPublicKeys",
    "ScanCandidate",
    "ScanConfig",
    "ScanResult",
    "Scanner",
    "SendResult",
    "StealthError",
    "StealthIdentifier",
    "UnsupportedVariant",
    "VARIANTS",
    "ViewTagScheme",
    "get_variant",
    "scan",
    "send",
]
