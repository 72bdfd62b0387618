"""
View tags: short, non-secret hints derived from the shared point v·R = r·V.

A recipient compares its own tag for each candidate against the one the
sender published and only runs the expensive recovery on a match. The tag is
never part of the security-critical derivation.

Two constructions, selected by name:

    v0  hash         SHA-256(X || Y)[:n]
    v1  coordinate   X[:n]

where X, Y are the 32-byte big-endian affine coordinates of the G1 point and
n is 1 or 2.

False-positive rate per non-matching candidate is about 1/256**n for the
hash construction. The coordinate construction inherits the range of X:
BN254's field prime starts with 0x30, so the first byte of X only takes
values 0x00..0x30 and a 1-byte coordinate tag rejects roughly 48 out of 49
decoys rather than 255 out of 256.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Any

from ecpdksap.crypto.curves import g1_coordinate_bytes
from ecpdksap.crypto.encoding import hex_to_bytes
from ecpdksap.errors import InvalidTagLength, UnsupportedVariant

TAG_LENGTHS = (1, 2)

HASH = "v0"
COORDINATE = "v1"

_SELECTOR = re.compile(r"^(?P<construction>[a-z0-9]+)-(?P<n>\d+)bytes?$")


def _check_length(num_bytes: int) -> None:
    if num_bytes not in TAG_LENGTHS:
        raise InvalidTagLength(f"View tag length must be 1 or 2 bytes, got {num_bytes}")


def hash_view_tag(point: Any, num_bytes: int) -> bytes:
    """First `num_bytes` of SHA-256 over the point's X || Y encoding."""
    _check_length(num_bytes)
    x_bytes, y_bytes = g1_coordinate_bytes(point)
    return hashlib.sha256(x_bytes + y_bytes).digest()[:num_bytes]


def coordinate_view_tag(point: Any, num_bytes: int) -> bytes:
    """First `num_bytes` of the point's X coordinate, no hashing."""
    _check_length(num_bytes)
    x_bytes, _ = g1_coordinate_bytes(point)
    return x_bytes[:num_bytes]


_CONSTRUCTIONS = {
    HASH: hash_view_tag,
    COORDINATE: coordinate_view_tag,
}


@dataclass(frozen=True)
class ViewTagScheme:
    """
    A view-tag construction paired with a tag length.

    Attributes:
        construction: "v0" (hash) or "v1" (coordinate).
        num_bytes: Tag length, 1 or 2.
    """
    construction: str
    num_bytes: int

    def __post_init__(self) -> None:
        if self.construction not in _CONSTRUCTIONS:
            raise UnsupportedVariant(f"Unknown view tag construction: {self.construction!r}")
        _check_length(self.num_bytes)

    @property
    def name(self) -> str:
        """Selector string, e.g. "v0-1byte" or "v0-2bytes"."""
        suffix = "byte" if self.num_bytes == 1 else "bytes"
        return f"{self.construction}-{self.num_bytes}{suffix}"

    @property
    def false_positive_rate(self) -> float:
        """Nominal filter pass rate for a non-matching candidate."""
        return 1 / 256 ** self.num_bytes

    def compute(self, point: Any) -> bytes:
        """Tag for a shared G1 point."""
        return _CONSTRUCTIONS[self.construction](point, self.num_bytes)

    def decode(self, value: str) -> bytes:
        """
        Decode a published hex tag and check it has this scheme's length.

        Raises:
            MalformedEncoding: If the tag is not valid hex.
            InvalidTagLength: If the decoded tag length differs from num_bytes.
        """
        raw = hex_to_bytes(value, "view tag")
        if len(raw) != self.num_bytes:
            raise InvalidTagLength(
                f"View tag for {self.name} must be {self.num_bytes} byte(s), got {len(raw)}"
            )
        return raw

    def matches(self, point: Any, published: bytes) -> bool:
        return self.compute(point) == published


def parse_view_tag_scheme(selector: str | ViewTagScheme | None) -> ViewTagScheme | None:
    """
    Resolve a selector such as "none", "v0-1byte", "v0-2bytes" or "v1-1byte".

    Returns:
        The scheme, or None when no filtering is requested.

    Raises:
        UnsupportedVariant: If the selector is not recognised.
        InvalidTagLength: If the selector names a length other than 1 or 2.
    """
    if selector is None or isinstance(selector, ViewTagScheme):
        return selector
    text = selector.strip().lower()
    if text in ("", "none"):
        return None
    m = _SELECTOR.match(text)
    if not m:
        raise UnsupportedVariant(f"Unknown view tag scheme: {selector!r}")
    return ViewTagScheme(m.group("construction"), int(m.group("n")))
