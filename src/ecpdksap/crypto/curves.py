"""
Curve context and group arithmetic helpers.

Two unrelated curves are involved:

* BN254 (alt_bn128), pairing-friendly: groups G1, G2 and the target group
  GT, with the optimal ate pairing e: G2 x G1 -> GT. Arithmetic comes from
  py_ecc.optimized_bn128.
* secp256k1, used only for destination addresses (variant V2). Arithmetic
  comes from the ecdsa library.

Generators and orders are carried in an explicit, immutable CurveContext
that every operation receives, instead of being read from module globals.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Any

import ecdsa
import ecdsa.ellipticcurve as ec
from py_ecc import optimized_bn128 as bn254

# ==============================================================================
# secp256k1 curve constants
# ==============================================================================

# Field prime
SECP256K1_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F

# Group order
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# ==============================================================================
# BN254 curve constants
# ==============================================================================

BN254_P = bn254.field_modulus
BN254_N = bn254.curve_order


class Group(str, Enum):
    """The curve groups key material can live in."""

    G1 = "g1"
    G2 = "g2"
    SECP256K1 = "secp256k1"


@dataclass(frozen=True)
class CurveContext:
    """
    Immutable bundle of curve parameters used by every protocol operation.

    Attributes:
        g1: BN254 G1 generator (py_ecc projective point).
        g2: BN254 G2 generator; also the fixed protocol-wide G2 point of V2.
        bn254_order: Order of G1, G2 and GT.
        bn254_modulus: BN254 base field prime.
        secp256k1_generator: secp256k1 generator (ecdsa PointJacobi).
        secp256k1_order: secp256k1 group order.
    """
    g1: Any
    g2: Any
    bn254_order: int
    bn254_modulus: int
    secp256k1_generator: Any
    secp256k1_order: int

    @classmethod
    def default(cls) -> CurveContext:
        return cls(
            g1=bn254.G1,
            g2=bn254.G2,
            bn254_order=BN254_N,
            bn254_modulus=BN254_P,
            secp256k1_generator=ecdsa.SECP256k1.generator,
            secp256k1_order=SECP256K1_N,
        )

    def order(self, group: Group) -> int:
        """Scalar field order for `group`."""
        if group is Group.SECP256K1:
            return self.secp256k1_order
        return self.bn254_order

    def generator(self, group: Group) -> Any:
        """Base generator for `group`."""
        if group is Group.G1:
            return self.g1
        if group is Group.G2:
            return self.g2
        return self.secp256k1_generator


DEFAULT_CONTEXT = CurveContext.default()


# ==============================================================================
# Scalars
# ==============================================================================


def random_scalar(order: int) -> int:
    """Uniform scalar in [1, order-1]."""
    return secrets.randbelow(order - 1) + 1


def validate_scalar(value: int, order: int, name: str = "scalar") -> int:
    """
    Check that `value` is a usable private scalar.

    Raises:
        ValueError: If value is outside [1, order-1].
    """
    if value <= 0 or value >= order:
        raise ValueError(f"{name} must be in [1, N-1], got {value}")
    return value


# ==============================================================================
# Group operations
# ==============================================================================


def mul(point: Any, scalar: int, group: Group) -> Any:
    """Scalar multiplication `scalar · point` in `group`."""
    if group is Group.SECP256K1:
        return scalar * point
    return bn254.multiply(point, scalar)


def base_mul(ctx: CurveContext, scalar: int, group: Group) -> Any:
    """Fixed-base multiplication `scalar · generator(group)`."""
    return mul(ctx.generator(group), scalar, group)


def add_g1(p: Any, q: Any) -> Any:
    return bn254.add(p, q)


def points_equal(p: Any, q: Any, group: Group) -> bool:
    """Group equality that ignores the projective representation."""
    if group is Group.SECP256K1:
        if p == ec.INFINITY or q == ec.INFINITY:
            return p == q
        return p.x() == q.x() and p.y() == q.y()
    return bn254.eq(p, q)


def g1_affine(point: Any) -> tuple[int, int]:
    """
    Affine (x, y) integer coordinates of a G1 point.

    Raises:
        ValueError: If the point is the identity.
    """
    if bn254.is_inf(point):
        raise ValueError("The point at infinity has no affine coordinates")
    x, y = bn254.normalize(point)
    return int(x), int(y)


def g1_coordinate_bytes(point: Any) -> tuple[bytes, bytes]:
    """Fixed-width 32-byte big-endian encodings of the affine X and Y."""
    x, y = g1_affine(point)
    return x.to_bytes(32, "big"), y.to_bytes(32, "big")


def hash_to_scalar(ctx: CurveContext, point: Any) -> int:
    """
    h = SHA-256(X || Y) reduced into the BN254 scalar field.

    X and Y are the 32-byte big-endian affine coordinates of a G1 point.
    """
    x_bytes, y_bytes = g1_coordinate_bytes(point)
    digest = hashlib.sha256(x_bytes + y_bytes).digest()
    return int.from_bytes(digest, "big") % ctx.bn254_order


# ==============================================================================
# Pairing
# ==============================================================================


def pair(g1_point: Any, g2_point: Any) -> Any:
    """Optimal ate pairing e(P, Q) for P in G1 and Q in G2, in GT (FQ12)."""
    return bn254.pairing(g2_point, g1_point)


def gt_pow(value: Any, exponent: int) -> Any:
    return value ** exponent


def gt_coefficients(value: Any) -> tuple[int, ...]:
    """The 12 base-field coefficients of a GT element."""
    return tuple(int(c) % BN254_P for c in value.coeffs)


def gt_tower_constant(value: Any) -> int:
    """
    Constant Fp term of a GT element in the Fp2 -> Fp6 -> Fp12 tower.

    py_ecc stores FQ12 flat over w with w^6 = 9 + u, so the tower's
    C0.B0.A0 component is c0 + 9·c6 and C0.B0.A1 is c6. This is the value
    gnark-style implementations read as the first coordinate of GT.
    """
    c = gt_coefficients(value)
    return (c[0] + 9 * c[6]) % BN254_P
