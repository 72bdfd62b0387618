"""
Hex wire codecs for scalars and points.

Formats (lowercase hex on output; an optional "0x" prefix is accepted on input):

    scalar      32-byte big-endian                           (64 hex chars)
    G1          X || Y, 32-byte big-endian affine coords     (128 hex chars)
    G2          X.c0 || X.c1 || Y.c0 || Y.c1                  (256 hex chars)
    GT          12 base-field coefficients x 32 bytes         (768 hex chars)
    secp256k1   X || Y (128 hex chars); the 33-byte compressed form
                (02/03 prefix + X) is accepted on input

Decoding validates eagerly: bad hex or wrong length raises MalformedEncoding,
coordinates that fail the curve equation raise PointNotOnCurve.
"""

from __future__ import annotations

import re
from typing import Any

import ecdsa
import ecdsa.ellipticcurve as ec
from py_ecc import optimized_bn128 as bn254

from ecpdksap.crypto.curves import (
    BN254_N,
    BN254_P,
    SECP256K1_N,
    SECP256K1_P,
    Group,
    g1_affine,
    gt_coefficients,
)
from ecpdksap.errors import MalformedEncoding, PointNotOnCurve

_CURVE = ecdsa.SECP256k1.curve

_HEX = re.compile(r"[0-9a-fA-F]*")


# ==============================================================================
# Raw hex
# ==============================================================================


def hex_to_bytes(value: str, name: str = "value") -> bytes:
    """
    Decode a hex string, tolerating a 0x prefix and surrounding whitespace.

    Whitespace between digits is rejected.

    Raises:
        MalformedEncoding: If the string is not valid hex.
    """
    if not isinstance(value, str):
        raise MalformedEncoding(f"{name} must be a hex string, got {type(value).__name__}")
    text = value.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    if not _HEX.fullmatch(text):
        raise MalformedEncoding(f"{name} is not valid hex: unexpected characters in {value!r}")
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise MalformedEncoding(f"{name} is not valid hex: {e}") from None


def _fixed_width(value: str, size: int, name: str) -> bytes:
    raw = hex_to_bytes(value, name)
    if len(raw) != size:
        raise MalformedEncoding(f"{name}: expected {size} bytes, got {len(raw)}")
    return raw


def _field_elements(raw: bytes, modulus: int, name: str) -> list[int]:
    values = [int.from_bytes(raw[i:i + 32], "big") for i in range(0, len(raw), 32)]
    for value in values:
        if value >= modulus:
            raise MalformedEncoding(f"{name}: coordinate 0x{value:064x} exceeds the field modulus")
    return values


# ==============================================================================
# Scalars
# ==============================================================================


def encode_scalar(value: int) -> str:
    """Encode a scalar as 32-byte big-endian hex."""
    return value.to_bytes(32, "big").hex()


def decode_scalar(value: str, order: int, name: str = "scalar") -> int:
    """
    Decode a big-endian hex scalar and check it lies in [1, order-1].

    Inputs shorter than 32 bytes are accepted (leading zeros implied).

    Raises:
        MalformedEncoding: On bad hex, more than 32 bytes, or an out-of-range value.
    """
    raw = hex_to_bytes(value, name)
    if not raw or len(raw) > 32:
        raise MalformedEncoding(f"{name}: expected 1..32 bytes, got {len(raw)}")
    scalar = int.from_bytes(raw, "big")
    if scalar <= 0 or scalar >= order:
        raise MalformedEncoding(f"{name} must be in [1, N-1]")
    return scalar


# ==============================================================================
# BN254 G1 / G2 / GT
# ==============================================================================


def encode_g1(point: Any) -> str:
    """
    Encode a G1 point as X || Y hex.

    Raises:
        ValueError: If the point is the identity (point at infinity).
    """
    x, y = g1_affine(point)
    return (x.to_bytes(32, "big") + y.to_bytes(32, "big")).hex()


def decode_g1(value: str, name: str = "G1 point") -> Any:
    """
    Decode X || Y hex into a G1 point.

    BN254 G1 has cofactor 1, so the curve equation check is sufficient.

    Raises:
        MalformedEncoding: If the hex is malformed or the wrong length.
        PointNotOnCurve: If (X, Y) does not satisfy y² = x³ + 3.
    """
    raw = _fixed_width(value, 64, name)
    x, y = _field_elements(raw, BN254_P, name)
    point = (bn254.FQ(x), bn254.FQ(y), bn254.FQ.one())
    if not bn254.is_on_curve(point, bn254.b):
        raise PointNotOnCurve(f"{name}: ({x:#x}, {y:#x}) is not on BN254 G1")
    return point


def encode_g2(point: Any) -> str:
    """Encode a G2 point as X.c0 || X.c1 || Y.c0 || Y.c1 hex."""
    if bn254.is_inf(point):
        raise ValueError("Cannot encode the point at infinity")
    x, y = bn254.normalize(point)
    coords = [int(c) % BN254_P for c in (*x.coeffs, *y.coeffs)]
    return b"".join(c.to_bytes(32, "big") for c in coords).hex()


def decode_g2(value: str, name: str = "G2 point") -> Any:
    """
    Decode a G2 point and check both the twist equation and subgroup membership.

    Raises:
        MalformedEncoding: If the hex is malformed or the wrong length.
        PointNotOnCurve: If the point is off the twist or outside the order-N subgroup.
    """
    raw = _fixed_width(value, 128, name)
    x0, x1, y0, y1 = _field_elements(raw, BN254_P, name)
    point = (bn254.FQ2([x0, x1]), bn254.FQ2([y0, y1]), bn254.FQ2.one())
    if not bn254.is_on_curve(point, bn254.b2):
        raise PointNotOnCurve(f"{name} is not on the BN254 G2 twist")
    # The twist has a large cofactor; reject points outside the prime-order subgroup
    if not bn254.is_inf(bn254.multiply(point, BN254_N)):
        raise PointNotOnCurve(f"{name} is not in the BN254 G2 subgroup")
    return point


def encode_gt(value: Any) -> str:
    """Encode a GT (FQ12) element as its 12 coefficients, 32 bytes each."""
    return b"".join(c.to_bytes(32, "big") for c in gt_coefficients(value)).hex()


# ==============================================================================
# secp256k1
# ==============================================================================


def encode_secp256k1(point: ec.AbstractPoint) -> str:
    """
    Encode a secp256k1 point as uncompressed X || Y hex (no 04 prefix).

    Raises:
        ValueError: If the point is the identity (point at infinity).
    """
    if point == ec.INFINITY:
        raise ValueError("Cannot encode the point at infinity")
    return (point.x().to_bytes(32, "big") + point.y().to_bytes(32, "big")).hex()


def decode_secp256k1(value: str, name: str = "secp256k1 point") -> ec.PointJacobi:
    """
    Decode a secp256k1 point from X || Y (64 bytes) or compressed (33 bytes) hex.

    Raises:
        MalformedEncoding: If the hex is malformed, the wrong length, or has a bad prefix.
        PointNotOnCurve: If the coordinates do not satisfy y² = x³ + 7.
    """
    raw = hex_to_bytes(value, name)
    if len(raw) == 64:
        x, y = _field_elements(raw, SECP256K1_P, name)
        if not _CURVE.contains_point(x, y):
            raise PointNotOnCurve(f"{name}: ({x:#x}, {y:#x}) is not on secp256k1")
        return ec.PointJacobi(_CURVE, x, y, 1, SECP256K1_N)

    if len(raw) != 33:
        raise MalformedEncoding(f"{name}: expected 64 or 33 bytes, got {len(raw)}")
    prefix = raw[0]
    if prefix not in (0x02, 0x03):
        raise MalformedEncoding(f"{name}: invalid prefix byte 0x{prefix:02x}")

    (x,) = _field_elements(raw[1:], SECP256K1_P, name)
    y_sq = (pow(x, 3, SECP256K1_P) + 7) % SECP256K1_P
    y = pow(y_sq, (SECP256K1_P + 1) // 4, SECP256K1_P)

    # Verify it's actually a quadratic residue (point is on curve)
    if (y * y) % SECP256K1_P != y_sq:
        raise PointNotOnCurve(f"{name}: X coordinate 0x{x:064x} does not correspond to a curve point")

    is_even = (prefix == 0x02)
    if (y % 2 == 0) != is_even:
        y = SECP256K1_P - y

    return ec.PointJacobi(_CURVE, x, y, 1, SECP256K1_N)


# ==============================================================================
# Group dispatch
# ==============================================================================


def encode_point(point: Any, group: Group) -> str:
    if group is Group.G1:
        return encode_g1(point)
    if group is Group.G2:
        return encode_g2(point)
    return encode_secp256k1(point)


def decode_point(value: str, group: Group, name: str | None = None) -> Any:
    """Decode `value` as a point of `group`."""
    label = name or f"{group.value} point"
    if group is Group.G1:
        return decode_g1(value, label)
    if group is Group.G2:
        return decode_g2(value, label)
    return decode_secp256k1(value, label)
