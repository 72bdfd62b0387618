"""
Wire-level data models shared by the sender, the scanner and the API.
All points, scalars and tags are carried as lowercase hex strings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StealthIdentifier(BaseModel):
    """
    A one-time identifier derived for the recipient.

    V0: public_key is a GT element.
    V1: public_key is a G1 point; private_key is the one-time spending scalar.
    V2: public_key is a secp256k1 point, address its Ethereum address;
        private_key is the one-time secp256k1 key controlling the address.

    private_key is only ever filled in on the recipient side.
    """
    model_config = ConfigDict(frozen=True)

    public_key: str
    address: str | None = None
    private_key: str | None = None

    def same_destination(self, other: StealthIdentifier) -> bool:
        """True if both identify the same one-time destination (keys ignored)."""
        return self.public_key == other.public_key and self.address == other.address


class ScanCandidate(BaseModel):
    """One published ephemeral point R, with the sender's view tag if any."""
    model_config = ConfigDict(frozen=True)

    ephemeral: str
    view_tag: str | None = None


class SendResult(BaseModel):
    """Everything a sender publishes or hands to the payer for one output."""
    model_config = ConfigDict(frozen=True)

    variant: str
    ephemeral: str
    identifier: StealthIdentifier
    view_tag: str | None = None

    def to_candidate(self) -> ScanCandidate:
        """The ScanCandidate a recipient would see for this output."""
        return ScanCandidate(ephemeral=self.ephemeral, view_tag=self.view_tag)
