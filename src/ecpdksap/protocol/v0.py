"""
Variant V0 — pairing-symmetric stealth public key.

Keys:
    K = k·G2   (spend key on BN254 G2)
    V = v·G1   (view key on BN254 G1)

Derivation:
    sender      P = e(V, K)^r
    recipient   P = e(R, K)^v

Both equal e(G1, K)^(r·v) by bilinearity, since R = r·G1 and V = v·G1.
P is a GT element and is the identifier itself. Recovery does not
re-verify it; with no view tag every candidate yields some P.
"""

from __future__ import annotations

from typing import Any

from ecpdksap.core.keys import RecipientKeys, RecipientPublicKeys
from ecpdksap.core.models import StealthIdentifier
from ecpdksap.crypto.curves import CurveContext, Group, gt_pow, pair
from ecpdksap.crypto.encoding import encode_gt
from ecpdksap.protocol.base import ProtocolVariant


class V0(ProtocolVariant):
    name = "v0"
    spend_group = Group.G2
    description = "pairing-symmetric: P = e(V, K)^r = e(R, K)^v"

    def publish(
        self,
        ctx: CurveContext,
        public_keys: RecipientPublicKeys,
        r: int,
        shared: Any,
    ) -> StealthIdentifier:
        # e(V, K)^r
        P = gt_pow(pair(public_keys.view, public_keys.spend), r)
        return StealthIdentifier(public_key=encode_gt(P))

    def recover(
        self,
        ctx: CurveContext,
        keys: RecipientKeys,
        ephemeral: Any,
        shared: Any,
    ) -> StealthIdentifier:
        # e(R, K)^v; the shared point v·R is only used for the view tag here
        P = gt_pow(pair(ephemeral, keys.spend.public), keys.view.private)
        return StealthIdentifier(public_key=encode_gt(P))
