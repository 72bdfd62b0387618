"""
ecpdksap.protocol — The closed set of protocol variants.

    v0  pairing-symmetric       P = e(V, K)^r = e(R, K)^v          (K on G2)
    v1  hash-to-scalar          P = H(v·R)·G1 + K                  (K on G1)
    v2  cross-curve address     P = coeff0(e(v·R, G2))·K           (K on secp256k1)

Callers choose a variant; this package does not pick one for them.
"""

from __future__ import annotations

from ecpdksap.errors import UnsupportedVariant
from ecpdksap.protocol.base import ProtocolVariant
from ecpdksap.protocol.v0 import V0
from ecpdksap.protocol.v1 import V1
from ecpdksap.protocol.v2 import V2, derive_b

VARIANTS: dict[str, ProtocolVariant] = {
    variant.name: variant for variant in (V0(), V1(), V2())
}


def get_variant(selector: str | ProtocolVariant) -> ProtocolVariant:
    """
    Resolve a variant by name ("v0", "v1", "v2"; case-insensitive).

    Raises:
        UnsupportedVariant: If the name is unknown.
    """
    if isinstance(selector, ProtocolVariant):
        return selector
    try:
        return VARIANTS[str(selector).strip().lower()]
    except KeyError:
        raise UnsupportedVariant(
            f"Unknown protocol variant {selector!r}; expected one of {sorted(VARIANTS)}"
        ) from None


__all__ = [
    "ProtocolVariant",
    "V0",
    "V1",
    "V2",
    "VARIANTS",
    "derive_b",
    "get_variant",
]
