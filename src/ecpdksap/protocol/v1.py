"""
Variant V1 — hash-to-scalar stealth public key.

Keys:
    K = k·G1, V = v·G1

Derivation:
    T = r·V (sender) = v·R (recipient)       Diffie–Hellman identity
    h = SHA-256(T.x || T.y) mod N
    P = h·G1 + K

The recipient also holds k, so it recovers the one-time spending scalar
s = h + k mod N, which satisfies s·G1 = h·G1 + k·G1 = P.
"""

from __future__ import annotations

from typing import Any

from ecpdksap.core.keys import RecipientKeys, RecipientPublicKeys
from ecpdksap.core.models import StealthIdentifier
from ecpdksap.crypto.curves import CurveContext, Group, add_g1, base_mul, hash_to_scalar
from ecpdksap.crypto.encoding import encode_g1, encode_scalar
from ecpdksap.protocol.base import ProtocolVariant


class V1(ProtocolVariant):
    name = "v1"
    spend_group = Group.G1
    description = "hash-to-scalar: P = H(v·R)·G1 + K"

    @staticmethod
    def _stealth_point(ctx: CurveContext, spend_public: Any, shared: Any) -> tuple[int, Any]:
        h = hash_to_scalar(ctx, shared)
        return h, add_g1(base_mul(ctx, h, Group.G1), spend_public)

    def publish(
        self,
        ctx: CurveContext,
        public_keys: RecipientPublicKeys,
        r: int,
        shared: Any,
    ) -> StealthIdentifier:
        _, P = self._stealth_point(ctx, public_keys.spend, shared)
        return StealthIdentifier(public_key=encode_g1(P))

    def recover(
        self,
        ctx: CurveContext,
        keys: RecipientKeys,
        ephemeral: Any,
        shared: Any,
    ) -> StealthIdentifier:
        h, P = self._stealth_point(ctx, keys.spend.public, shared)
        spending_key = (h + keys.spend.private) % ctx.bn254_order
        return StealthIdentifier(
            public_key=encode_g1(P),
            private_key=encode_scalar(spending_key),
        )
