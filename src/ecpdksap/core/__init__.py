"""core module init"""
# keys and models first: ecpdksap.protocol imports them while this package initialises
from ecpdksap.core.keys import KeyPair, RecipientKeys, RecipientPublicKeys
from ecpdksap.core.models import ScanCandidate, SendResult, StealthIdentifier
from ecpdksap.core.config import ScanConfig
from ecpdksap.core.sender import send
from ecpdksap.core.scanner import (
    CandidateError,
    CandidateOutcome,
    ScanMatch,
    ScanResult,
    Scanner,
    ScanStats,
    scan,
)

__all__ = [
    "CandidateError",
    "CandidateOutcome",
    "KeyPair",
    "RecipientKeys",
    "RecipientPublicKeys",
    "ScanCandidate",
    "ScanConfig",
    "ScanMatch",
    "ScanResult",
    "ScanStats",
    "Scanner",
    "SendResult",
    "StealthIdentifier",
    "scan",
    "send",
]
