"""
Variant V2 — cross-curve destination address.

Keys:
    V = v·G1          view key on BN254 G1
    K = k·G           spend key on secp256k1 (unrelated curve)

Derivation, with G2 the FIXED protocol-wide BN254 G2 generator:

    sender      T = r·V
    recipient   T = v·R                   equal: r·v·G1 on both sides
    both        S = e(T, G2)              = e(G1, G2)^(r·v)
                b = coeff0(S) mod n       n = secp256k1 order
                P = b·K                   one-time destination public key
                address = keccak256(P.x || P.y)[-20:]  (EIP-55)

The key-derived input is on the G1 side of the pairing and the G2 input is
fixed. Pairing R or V directly against G2 would give e(G1, G2)^r or
e(G1, G2)^v, which the other party cannot reproduce, so neither may be
swapped in for T.

coeff0(S) is the C0.B0.A0 component of S in the Fp2 -> Fp6 -> Fp12 tower
(c0 + 9·c6 over py_ecc's flat representation), the coordinate gnark exposes
first. Addresses match a gnark-based sender only if both pairings also
agree on the final-exponentiation normalisation, which is not checked here.

The recipient's one-time private key is sk = k·b mod n, and sk·G = b·K = P.
"""

from __future__ import annotations

from typing import Any

from ecpdksap.core.keys import RecipientKeys, RecipientPublicKeys
from ecpdksap.core.models import StealthIdentifier
from ecpdksap.crypto.address import address_from_public_key
from ecpdksap.crypto.curves import CurveContext, Group, gt_tower_constant, mul, pair
from ecpdksap.crypto.encoding import encode_scalar, encode_secp256k1
from ecpdksap.protocol.base import ProtocolVariant


def derive_b(ctx: CurveContext, shared: Any) -> int:
    """b = coeff0(e(T, G2)) reduced into the secp256k1 scalar field."""
    S = pair(shared, ctx.g2)
    return gt_tower_constant(S) % ctx.secp256k1_order


class V2(ProtocolVariant):
    name = "v2"
    spend_group = Group.SECP256K1
    description = "cross-curve: P = coeff0(e(v·R, G2))·K on secp256k1"

    def _destination(self, ctx: CurveContext, spend_public: Any, shared: Any) -> tuple[int, Any]:
        b = derive_b(ctx, shared)
        return b, mul(spend_public, b, Group.SECP256K1)

    def publish(
        self,
        ctx: CurveContext,
        public_keys: RecipientPublicKeys,
        r: int,
        shared: Any,
    ) -> StealthIdentifier:
        _, P = self._destination(ctx, public_keys.spend, shared)
        return StealthIdentifier(
            public_key=encode_secp256k1(P),
            address=address_from_public_key(P),
        )

    def recover(
        self,
        ctx: CurveContext,
        keys: RecipientKeys,
        ephemeral: Any,
        shared: Any,
    ) -> StealthIdentifier:
        b, P = self._destination(ctx, keys.spend.public, shared)
        sk = (keys.spend.private * b) % ctx.secp256k1_order
        return StealthIdentifier(
            public_key=encode_secp256k1(P),
            address=address_from_public_key(P),
            private_key=encode_scalar(sk),
        )
