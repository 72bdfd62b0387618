"""
ecpdksap.crypto — Curve context, wire codecs and view tags.

Provides:
- CurveContext with BN254 (G1, G2, GT) and secp256k1 parameters
- Hex codecs for scalars, G1/G2/GT and secp256k1 points
- Ethereum-style destination addresses (Keccak-256 + EIP-55)
- View-tag constructions (hash and coordinate) for candidate pre-filtering
"""

from ecpdksap.crypto.address import (
    address_from_public_key,
    is_valid_address,
    keccak256,
    validate_address,
)
from ecpdksap.crypto.curves import (
    BN254_N,
    BN254_P,
    DEFAULT_CONTEXT,
    SECP256K1_N,
    SECP256K1_P,
    CurveContext,
    Group,
    hash_to_scalar,
    pair,
    random_scalar,
)
from ecpdksap.crypto.encoding import (
    decode_g1,
    decode_g2,
    decode_point,
    decode_scalar,
    decode_secp256k1,
    encode_g1,
    encode_g2,
    encode_gt,
    encode_point,
    encode_scalar,
    encode_secp256k1,
)
from ecpdksap.crypto.view_tag import (
    ViewTagScheme,
    coordinate_view_tag,
    hash_view_tag,
    parse_view_tag_scheme,
)

__all__ = [
    # Curves
    "BN254_N",
    "BN254_P",
    "SECP256K1_N",
    "SECP256K1_P",
    "DEFAULT_CONTEXT",
    "CurveContext",
    "Group",
    "hash_to_scalar",
    "pair",
    "random_scalar",
    # Encoding
    "decode_g1",
    "decode_g2",
    "decode_point",
    "decode_scalar",
    "decode_secp256k1",
    "encode_g1",
    "encode_g2",
    "encode_gt",
    "encode_point",
    "encode_scalar",
    "encode_secp256k1",
    # Addresses
    "address_from_public_key",
    "is_valid_address",
    "keccak256",
    "validate_address",
    # View tags
    "ViewTagScheme",
    "coordinate_view_tag",
    "hash_view_tag",
    "parse_view_tag_scheme",
]
