"""
Unit tests for ecpdksap.protocol — the V0 / V1 / V2 derivations.

Each variant is checked for sender/recipient agreement with fixed scalars,
plus the one-time private key relation where the variant has one.
Pairing-based checks are kept to a handful since they are slow in pure Python.
"""

import pytest
from py_ecc import optimized_bn128 as bn254

from ecpdksap.core.keys import RecipientKeys
from ecpdksap.crypto.curves import (
    BN254_N,
    BN254_P,
    DEFAULT_CONTEXT,
    SECP256K1_N,
    Group,
    base_mul,
    gt_coefficients,
    gt_tower_constant,
    hash_to_scalar,
    pair,
)
from ecpdksap.crypto.encoding import decode_g1, decode_scalar, decode_secp256k1, encode_g1, encode_gt
from ecpdksap.crypto.address import address_from_public_key
from ecpdksap.errors import UnsupportedVariant
from ecpdksap.protocol import V0, V1, V2, VARIANTS, derive_b, get_variant

CTX = DEFAULT_CONTEXT

# ==============================================================================
# Helpers
# ==============================================================================


def _sender_and_recipient(variant, keys, r):
    """Run publish and recover for ephemeral scalar r, each with its own shared point."""
    R = base_mul(CTX, r, Group.G1)
    sent = variant.publish(CTX, keys.public, r, variant.shared_point_sender(CTX, keys.public, r))
    got = variant.recover(CTX, keys, R, variant.shared_point_recipient(CTX, keys, R))
    return sent, got


# ==============================================================================
# Registry
# ==============================================================================


class TestRegistry:

    def test_closed_set(self):
        assert sorted(VARIANTS) == ["v0", "v1", "v2"]

    @pytest.mark.parametrize("selector", ["v2", "V2", " v2 "])
    def test_lookup(self, selector):
        assert get_variant(selector).name == "v2"

    def test_instance_passes_through(self):
        variant = V1()
        assert get_variant(variant) is variant

    def test_unknown(self):
        with pytest.raises(UnsupportedVariant, match="v3"):
            get_variant("v3")

    @pytest.mark.parametrize(
        "name, group",
        [("v0", Group.G2), ("v1", Group.G1), ("v2", Group.SECP256K1)],
    )
    def test_spend_groups(self, name, group):
        assert VARIANTS[name].spend_group is group

    def test_wrong_spend_group(self):
        with pytest.raises(UnsupportedVariant, match="secp256k1"):
            V2().check_spend_group(Group.G1)


# ==============================================================================
# Diffie–Hellman point
# ==============================================================================


class TestSharedPoint:

    def test_sender_equals_recipient(self):
        keys = RecipientKeys.from_private(1111, 2222, Group.G1)
        r = 3333
        R = base_mul(CTX, r, Group.G1)
        variant = V1()
        sender = variant.shared_point_sender(CTX, keys.public, r)
        recipient = variant.shared_point_recipient(CTX, keys, R)
        assert bn254.eq(sender, recipient)
        assert bn254.eq(sender, base_mul(CTX, r * 2222, Group.G1))


# ==============================================================================
# V0
# ==============================================================================


class TestV0:

    def test_sender_and_recipient_agree(self):
        keys = RecipientKeys.from_private(0x1357, 0x2468, Group.G2)
        sent, got = _sender_and_recipient(V0(), keys, 0x9999)
        assert sent.public_key == got.public_key
        assert len(sent.public_key) == 768
        assert got.address is None
        assert got.private_key is None

    def test_equals_base_pairing_power(self):
        """P = e(G1, K)^(r·v)."""
        k, v, r = 5, 7, 11
        keys = RecipientKeys.from_private(k, v, Group.G2)
        sent, _ = _sender_and_recipient(V0(), keys, r)
        expected = pair(bn254.G1, keys.spend.public) ** (r * v)
        assert sent.public_key == encode_gt(expected)


# ==============================================================================
# V1
# ==============================================================================


class TestV1:

    @pytest.mark.parametrize("k, v, r", [(3, 5, 7), (2**200 + 1, 2**190 + 3, 2**180 + 5)])
    def test_sender_and_recipient_agree(self, k, v, r):
        keys = RecipientKeys.from_private(k, v, Group.G1)
        sent, got = _sender_and_recipient(V1(), keys, r)
        assert sent.public_key == got.public_key
        assert sent.private_key is None

    def test_spending_key_controls_stealth_point(self):
        keys = RecipientKeys.from_private(0xABCDEF, 0x123456, Group.G1)
        _, got = _sender_and_recipient(V1(), keys, 0x777)
        s = decode_scalar(got.private_key, BN254_N)
        assert encode_g1(base_mul(CTX, s, Group.G1)) == got.public_key

    def test_stealth_point_formula(self):
        """P = H(v·R)·G1 + K."""
        k, v, r = 17, 19, 23
        keys = RecipientKeys.from_private(k, v, Group.G1)
        _, got = _sender_and_recipient(V1(), keys, r)
        h = hash_to_scalar(CTX, base_mul(CTX, v * r, Group.G1))
        assert bn254.eq(decode_g1(got.public_key), base_mul(CTX, (h + k) % BN254_N, Group.G1))

    def test_different_r_different_point(self):
        keys = RecipientKeys.from_private(3, 5, Group.G1)
        a, _ = _sender_and_recipient(V1(), keys, 7)
        b, _ = _sender_and_recipient(V1(), keys, 8)
        assert a.public_key != b.public_key


# ==============================================================================
# V2
# ==============================================================================


class TestV2:

    def test_sender_and_recipient_agree(self):
        keys = RecipientKeys.from_private(0xC0FFEE, 0xBEEF, Group.SECP256K1)
        sent, got = _sender_and_recipient(V2(), keys, 0xFACE)
        assert sent.public_key == got.public_key
        assert sent.address == got.address
        assert sent.private_key is None

        # sk·G = P and the address is derived from P
        sk = decode_scalar(got.private_key, SECP256K1_N)
        P = base_mul(CTX, sk, Group.SECP256K1)
        assert P.x() == decode_secp256k1(got.public_key).x()
        assert address_from_public_key(P) == got.address

    def test_b_depends_only_on_shared_point(self):
        """b from (r·v)·G1 reached via r·V or v·R is the same value."""
        T1 = bn254.multiply(base_mul(CTX, 13, Group.G1), 29)
        T2 = bn254.multiply(base_mul(CTX, 29, Group.G1), 13)
        b = derive_b(CTX, T1)
        assert b == derive_b(CTX, T2)
        assert 0 <= b < SECP256K1_N

    def test_b_is_tower_constant_of_pairing(self):
        """b is C0.B0.A0 of e(T, G2), i.e. c0 + 9·c6 of the flat FQ12 form."""
        T = base_mul(CTX, 31, Group.G1)
        c = gt_coefficients(pair(T, CTX.g2))
        assert derive_b(CTX, T) == (c[0] + 9 * c[6]) % BN254_P % SECP256K1_N


class TestTowerConstant:

    def test_one(self):
        assert gt_tower_constant(bn254.FQ12.one()) == 1

    def test_w6_maps_to_nine(self):
        """w^6 = 9 + u, so a lone c6 = 1 contributes 9 to C0.B0.A0."""
        w6 = bn254.FQ12([0] * 6 + [1] + [0] * 5)
        assert gt_tower_constant(w6) == 9

    def test_other_coefficients_ignored(self):
        value = bn254.FQ12([5, 1, 2, 3, 4, 6, 0, 7, 8, 10, 11, 12])
        assert gt_tower_constant(value) == 5

    def test_reduced_mod_p(self):
        value = bn254.FQ12([BN254_P - 1] + [0] * 5 + [1] + [0] * 5)
        assert gt_tower_constant(value) == 8
