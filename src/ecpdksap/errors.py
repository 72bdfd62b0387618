"""
Error kinds raised by the stealth-address core.

All of them are caller input errors: they are detected eagerly while
decoding or validating inputs and are never retried. A view-tag mismatch
during scanning is the normal filtering outcome and is not an error.
"""

from __future__ import annotations


class StealthError(ValueError):
    """Base class for all ecpdksap input errors."""

    kind = "stealth_error"


class MalformedEncoding(StealthError):
    """Raised when a hex/byte encoding of a point, scalar or tag cannot be decoded."""

    kind = "malformed_encoding"


class PointNotOnCurve(StealthError):
    """Raised when decoded coordinates do not satisfy the curve equation."""

    kind = "point_not_on_curve"


class InvalidTagLength(StealthError):
    """Raised when a view tag length is outside {1, 2} bytes."""

    kind = "invalid_tag_length"


class UnsupportedVariant(StealthError):
    """Raised for an unknown protocol variant or view-tag scheme selector."""

    kind = "unsupported_variant"
