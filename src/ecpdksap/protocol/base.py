"""
ProtocolVariant — the interface shared by the V0, V1 and V2 derivations.

Every variant publishes R = r·G1 and derives its identifier from values
the sender and the recipient compute from different inputs:

    sender     (r, K, V)     ──publish──▶  identifier
    recipient  (k, v, R)     ──recover──▶  identifier (+ one-time private key)

All three share the Diffie–Hellman point used for view tags:

    T = r·V  (sender)   ==   v·R  (recipient)

The orchestration (Sender / Scanner) computes T once and hands it to
publish / recover so the scalar multiplication done for filtering is reused.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ecpdksap.core.keys import RecipientKeys, RecipientPublicKeys
from ecpdksap.core.models import StealthIdentifier
from ecpdksap.crypto.curves import CurveContext, Group, mul
from ecpdksap.errors import UnsupportedVariant


class ProtocolVariant(ABC):
    """A sender-side `publish` and a recipient-side `recover` that must agree."""

    name: ClassVar[str]
    spend_group: ClassVar[Group]
    description: ClassVar[str] = ""

    def check_spend_group(self, group: Group) -> None:
        """
        Raises:
            UnsupportedVariant: If the spend key lives in the wrong group for this variant.
        """
        if group is not self.spend_group:
            raise UnsupportedVariant(
                f"Variant {self.name} needs a {self.spend_group.value} spend key, "
                f"got {group.value}"
            )

    def shared_point_sender(self, ctx: CurveContext, public_keys: RecipientPublicKeys, r: int) -> Any:
        """T = r·V."""
        return mul(public_keys.view, r, Group.G1)

    def shared_point_recipient(self, ctx: CurveContext, keys: RecipientKeys, ephemeral: Any) -> Any:
        """T = v·R."""
        return mul(ephemeral, keys.view.private, Group.G1)

    @abstractmethod
    def publish(
        self,
        ctx: CurveContext,
        public_keys: RecipientPublicKeys,
        r: int,
        shared: Any,
    ) -> StealthIdentifier:
        """Sender side: derive the identifier for ephemeral scalar r."""

    @abstractmethod
    def recover(
        self,
        ctx: CurveContext,
        keys: RecipientKeys,
        ephemeral: Any,
        shared: Any,
    ) -> StealthIdentifier:
        """Recipient side: rebuild the identifier from R and the private keys."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
