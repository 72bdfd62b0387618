"""
Ethereum-style destination addresses for secp256k1 public keys.

Address = last 20 bytes of Keccak-256 over the 64-byte uncompressed public
key (X || Y, no 04 prefix), rendered with the EIP-55 mixed-case checksum.

Reference: https://eips.ethereum.org/EIPS/eip-55
"""

from __future__ import annotations

import ecdsa.ellipticcurve as ec
from Crypto.Hash import keccak

from ecpdksap.errors import MalformedEncoding


def keccak256(data: bytes) -> bytes:
    """Keccak-256 (the pre-standard SHA-3 padding used by Ethereum)."""
    return keccak.new(data=data, digest_bits=256).digest()


def to_checksum_address(address_bytes: bytes) -> str:
    """Render 20 address bytes with the EIP-55 checksum casing."""
    lower = address_bytes.hex()
    digest = keccak256(lower.encode("ascii")).hex()
    return "0x" + "".join(
        ch.upper() if ch.isalpha() and int(digest[i], 16) >= 8 else ch
        for i, ch in enumerate(lower)
    )


def address_from_public_key(point: ec.AbstractPoint) -> str:
    """
    Derive the checksummed address controlled by a secp256k1 public key.

    Raises:
        ValueError: If the point is the identity (point at infinity).
    """
    if point == ec.INFINITY:
        raise ValueError("The point at infinity has no address")
    raw = point.x().to_bytes(32, "big") + point.y().to_bytes(32, "big")
    return to_checksum_address(keccak256(raw)[-20:])


def validate_address(address: str) -> bool:
    """
    Validate an address (length, hex and, for mixed case, the EIP-55 checksum).

    Returns:
        True if valid

    Raises:
        MalformedEncoding: if the address is malformed or has a bad checksum
    """
    if not address.startswith("0x") or len(address) != 42:
        raise MalformedEncoding(f"Address must be 0x + 40 hex chars, got {address!r}")
    try:
        raw = bytes.fromhex(address[2:])
    except ValueError:
        raise MalformedEncoding(f"Address is not valid hex: {address!r}") from None

    body = address[2:]
    if body != body.lower() and body != body.upper():
        expected = to_checksum_address(raw)
        if address != expected:
            raise MalformedEncoding(f"Checksum mismatch: got {address}, expected {expected}")
    return True


def is_valid_address(address: str) -> bool:
    """
    Check if an address is valid without raising exceptions.

    Returns:
        bool: True if valid, False otherwise
    """
    try:
        return validate_address(address)
    except MalformedEncoding:
        return False
