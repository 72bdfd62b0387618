"""
Unit tests for ecpdksap.core.keys and ecpdksap.core.config.
"""

import pytest

from ecpdksap.core.config import ScanConfig
from ecpdksap.core.keys import KeyPair, RecipientKeys, RecipientPublicKeys
from ecpdksap.crypto.curves import (
    BN254_N,
    DEFAULT_CONTEXT,
    SECP256K1_N,
    Group,
    base_mul,
    points_equal,
)
from ecpdksap.crypto.encoding import encode_scalar
from ecpdksap.errors import MalformedEncoding, PointNotOnCurve


# ==============================================================================
# KeyPair
# ==============================================================================


class TestKeyPair:

    @pytest.mark.parametrize("group", [Group.G1, Group.G2, Group.SECP256K1])
    def test_public_is_private_times_generator(self, group):
        pair = KeyPair.from_private(42, group)
        assert points_equal(pair.public, base_mul(DEFAULT_CONTEXT, 42, group), group)

    def test_generate_in_range(self):
        pair = KeyPair.generate(Group.SECP256K1)
        assert 1 <= pair.private < SECP256K1_N

    def test_generate_distinct(self):
        assert KeyPair.generate(Group.G1).private != KeyPair.generate(Group.G1).private

    @pytest.mark.parametrize("private", [0, -1, BN254_N])
    def test_out_of_range_rejected(self, private):
        with pytest.raises(ValueError):
            KeyPair.from_private(private, Group.G1)

    def test_hex_roundtrip(self):
        pair = KeyPair.from_private(0xDEADBEEF, Group.G1)
        again = KeyPair.from_hex(pair.private_hex, Group.G1)
        assert again.private == pair.private
        assert again.public_hex == pair.public_hex

    def test_from_hex_rejects_zero(self):
        with pytest.raises(MalformedEncoding):
            KeyPair.from_hex("00" * 32, Group.SECP256K1)

    def test_private_not_in_repr(self):
        pair = KeyPair.from_private(0x1234567, Group.G1)
        assert "1234567" not in repr(pair)
        assert str(0x1234567) not in repr(pair)

    def test_immutable(self):
        pair = KeyPair.from_private(5, Group.G1)
        with pytest.raises(Exception):
            pair.private = 6


# ==============================================================================
# RecipientKeys / RecipientPublicKeys
# ==============================================================================


class TestRecipientKeys:

    def test_view_key_must_be_g1(self):
        with pytest.raises(ValueError, match="G1"):
            RecipientKeys(
                spend=KeyPair.from_private(3, Group.SECP256K1),
                view=KeyPair.from_private(4, Group.SECP256K1),
            )

    @pytest.mark.parametrize("group", [Group.G1, Group.G2, Group.SECP256K1])
    def test_generate(self, group):
        keys = RecipientKeys.generate(group)
        assert keys.spend.group is group
        assert keys.view.group is Group.G1

    def test_to_hex_fields(self):
        keys = RecipientKeys.from_private(11, 13, Group.SECP256K1)
        out = keys.to_hex()
        assert set(out) == {"k", "v", "K", "V"}
        assert out["k"] == encode_scalar(11)
        assert len(out["K"]) == 128
        assert len(out["V"]) == 128

    def test_from_hex_matches_from_private(self):
        keys = RecipientKeys.from_private(11, 13, Group.G2)
        again = RecipientKeys.from_hex(encode_scalar(11), encode_scalar(13), Group.G2)
        assert again.to_hex() == keys.to_hex()

    def test_public_keys_roundtrip(self):
        keys = RecipientKeys.from_private(21, 22, Group.SECP256K1)
        hexed = keys.public.to_hex()
        pub = RecipientPublicKeys.from_hex(hexed["K"], hexed["V"], Group.SECP256K1)
        assert pub.to_hex() == hexed
        assert pub.spend_group is Group.SECP256K1

    def test_public_keys_invalid_point(self):
        keys = RecipientKeys.from_private(21, 22, Group.G1)
        hexed = keys.public.to_hex()
        bad_v = hexed["V"][:-2] + ("00" if hexed["V"][-2:] != "00" else "01")
        with pytest.raises(PointNotOnCurve):
            RecipientPublicKeys.from_hex(hexed["K"], bad_v, Group.G1)

    def test_public_keys_wrong_group_encoding(self):
        """A G1 encoding has the wrong length for a G2 spend key."""
        keys = RecipientKeys.from_private(21, 22, Group.G1)
        hexed = keys.public.to_hex()
        with pytest.raises(MalformedEncoding):
            RecipientPublicKeys.from_hex(hexed["K"], hexed["V"], Group.G2)


# ==============================================================================
# ScanConfig
# ==============================================================================


class TestScanConfig:

    def test_defaults(self):
        config = ScanConfig()
        assert config.on_error == "skip"
        assert not config.abort_on_error
        assert config.max_workers == 1
        assert config.time_budget is None

    def test_abort(self):
        assert ScanConfig(on_error="abort").abort_on_error

    @pytest.mark.parametrize(
        "kwargs",
        [{"on_error": "ignore"}, {"max_workers": 0}, {"time_budget": 0}, {"time_budget": -1.0}],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ScanConfig(**kwargs)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ECPDKSAP_SCAN_ON_ERROR", " ABORT ")
        monkeypatch.setenv("ECPDKSAP_SCAN_WORKERS", "4")
        monkeypatch.setenv("ECPDKSAP_SCAN_TIME_BUDGET", "2.5")
        config = ScanConfig.from_env()
        assert config == ScanConfig(on_error="abort", max_workers=4, time_budget=2.5)

    def test_from_env_unset(self, monkeypatch):
        for name in ("ON_ERROR", "WORKERS", "TIME_BUDGET"):
            monkeypatch.delenv(f"ECPDKSAP_SCAN_{name}", raising=False)
        assert ScanConfig.from_env() == ScanConfig()

    def test_from_env_bad_value(self, monkeypatch):
        monkeypatch.setenv("ECPDKSAP_SCAN_WORKERS", "many")
        with pytest.raises(ValueError):
            ScanConfig.from_env()
