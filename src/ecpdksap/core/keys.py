"""
Recipient key material.

A recipient holds two independent key pairs:

    k, K   spend / destination key   (group depends on the protocol variant)
    v, V   view / scan key           (always BN254 G1)

Invariant for every KeyPair: public == private · generator(group).
Key pairs are created once and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ecpdksap.crypto.curves import (
    DEFAULT_CONTEXT,
    CurveContext,
    Group,
    base_mul,
    random_scalar,
    validate_scalar,
)
from ecpdksap.crypto.encoding import decode_point, decode_scalar, encode_point, encode_scalar


@dataclass(frozen=True)
class KeyPair:
    """A private scalar and its public point in one group."""
    private: int = field(repr=False)
    public: Any
    group: Group

    @classmethod
    def from_private(
        cls, private: int, group: Group, ctx: CurveContext = DEFAULT_CONTEXT
    ) -> KeyPair:
        """
        Derive the public point for `private`.

        Raises:
            ValueError: If private is outside [1, N-1] for the group.
        """
        validate_scalar(private, ctx.order(group), "private key")
        return cls(private=private, public=base_mul(ctx, private, group), group=group)

    @classmethod
    def generate(cls, group: Group, ctx: CurveContext = DEFAULT_CONTEXT) -> KeyPair:
        """Fresh random key pair."""
        return cls.from_private(random_scalar(ctx.order(group)), group, ctx)

    @classmethod
    def from_hex(
        cls, private_hex: str, group: Group, ctx: CurveContext = DEFAULT_CONTEXT
    ) -> KeyPair:
        """
        Decode a hex private scalar and derive its public point.

        Raises:
            MalformedEncoding: If the scalar is malformed or out of range.
        """
        private = decode_scalar(private_hex, ctx.order(group), f"{group.value} private key")
        return cls(private=private, public=base_mul(ctx, private, group), group=group)

    @property
    def private_hex(self) -> str:
        return encode_scalar(self.private)

    @property
    def public_hex(self) -> str:
        return encode_point(self.public, self.group)


@dataclass(frozen=True)
class RecipientPublicKeys:
    """
    What a sender needs: the recipient's spend and view public keys.

    Attributes:
        spend: K, in `spend_group`.
        view: V, in BN254 G1.
        spend_group: Group of K (variant-dependent).
    """
    spend: Any
    view: Any
    spend_group: Group

    @classmethod
    def from_hex(cls, spend_hex: str, view_hex: str, spend_group: Group) -> RecipientPublicKeys:
        """
        Decode K and V from their wire encodings.

        Raises:
            MalformedEncoding: If either encoding is malformed.
            PointNotOnCurve: If either point fails validation.
        """
        return cls(
            spend=decode_point(spend_hex, spend_group, "spend public key K"),
            view=decode_point(view_hex, Group.G1, "view public key V"),
            spend_group=spend_group,
        )

    def to_hex(self) -> dict[str, str]:
        return {
            "K": encode_point(self.spend, self.spend_group),
            "V": encode_point(self.view, Group.G1),
        }


@dataclass(frozen=True)
class RecipientKeys:
    """Both recipient key pairs; `view` is always on G1."""
    spend: KeyPair
    view: KeyPair

    def __post_init__(self) -> None:
        if self.view.group is not Group.G1:
            raise ValueError(f"View key must be on G1, got {self.view.group.value}")

    @classmethod
    def generate(cls, spend_group: Group, ctx: CurveContext = DEFAULT_CONTEXT) -> RecipientKeys:
        return cls(spend=KeyPair.generate(spend_group, ctx), view=KeyPair.generate(Group.G1, ctx))

    @classmethod
    def from_private(
        cls, k: int, v: int, spend_group: Group, ctx: CurveContext = DEFAULT_CONTEXT
    ) -> RecipientKeys:
        return cls(
            spend=KeyPair.from_private(k, spend_group, ctx),
            view=KeyPair.from_private(v, Group.G1, ctx),
        )

    @classmethod
    def from_hex(
        cls, k_hex: str, v_hex: str, spend_group: Group, ctx: CurveContext = DEFAULT_CONTEXT
    ) -> RecipientKeys:
        """
        Rebuild both key pairs from hex private scalars; public keys are derived.

        Raises:
            MalformedEncoding: If either scalar is malformed or out of range.
        """
        return cls(
            spend=KeyPair.from_hex(k_hex, spend_group, ctx),
            view=KeyPair.from_hex(v_hex, Group.G1, ctx),
        )

    @property
    def public(self) -> RecipientPublicKeys:
        return RecipientPublicKeys(
            spend=self.spend.public,
            view=self.view.public,
            spend_group=self.spend.group,
        )

    def to_hex(self) -> dict[str, str]:
        """Private scalars and public points, hex encoded."""
        return {
            "k": self.spend.private_hex,
            "v": self.view.private_hex,
            **self.public.to_hex(),
        }
