"""
Sender: derive one stealth output for a recipient.

Each send draws a fresh ephemeral scalar r, publishes R = r·G1 and lets the
selected protocol variant derive the identifier from the recipient's public
keys. r is used only inside the call and is not returned.
"""

from __future__ import annotations

import logging

from ecpdksap.core.keys import RecipientPublicKeys
from ecpdksap.core.models import SendResult
from ecpdksap.crypto.curves import (
    DEFAULT_CONTEXT,
    CurveContext,
    Group,
    base_mul,
    random_scalar,
    validate_scalar,
)
from ecpdksap.crypto.encoding import encode_g1
from ecpdksap.crypto.view_tag import ViewTagScheme, parse_view_tag_scheme
from ecpdksap.protocol import ProtocolVariant, get_variant

logger = logging.getLogger("ecpdksap.sender")


def send(
    public_keys: RecipientPublicKeys,
    variant: str | ProtocolVariant,
    view_tag: str | ViewTagScheme | None = None,
    *,
    ephemeral_scalar: int | None = None,
    ctx: CurveContext = DEFAULT_CONTEXT,
) -> SendResult:
    """
    Create one stealth output for `public_keys`.

    Args:
        public_keys: Recipient's K (variant-dependent group) and V (G1).
        variant: "v0", "v1", "v2" or a ProtocolVariant instance.
        view_tag: Tag scheme selector ("none", "v0-1byte", ...) or None.
        ephemeral_scalar: Fixed r for reproducible outputs; random if omitted.
        ctx: Curve parameters.

    Returns:
        SendResult with R, the identifier and the view tag (if requested).

    Raises:
        UnsupportedVariant: If the variant or tag scheme is unknown, or K is
                            in the wrong group for the variant.
        InvalidTagLength: If the tag scheme names a length outside {1, 2}.
        ValueError: If ephemeral_scalar is outside [1, N-1].
    """
    protocol = get_variant(variant)
    scheme = parse_view_tag_scheme(view_tag)
    protocol.check_spend_group(public_keys.spend_group)

    if ephemeral_scalar is None:
        r = random_scalar(ctx.bn254_order)
    else:
        r = validate_scalar(ephemeral_scalar, ctx.bn254_order, "ephemeral_scalar")

    R = base_mul(ctx, r, Group.G1)
    shared = protocol.shared_point_sender(ctx, public_keys, r)
    identifier = protocol.publish(ctx, public_keys, r, shared)
    tag = scheme.compute(shared).hex() if scheme else None

    logger.debug(
        f"Sent {protocol.name} output R={encode_g1(R)[:16]}... "
        f"tag={tag or '-'} ({scheme.name if scheme else 'none'})"
    )
    return SendResult(
        variant=protocol.name,
        ephemeral=encode_g1(R),
        identifier=identifier,
        view_tag=tag,
    )
