"""
API module for ecpdksap.

Provides FastAPI routes and models for exposing send / scan as a REST API.
"""

from ecpdksap.api.models import (
    KeysRequest,
    KeysResponse,
    ScanRequest,
    ScanResponse,
    SendRequest,
    SendResponse,
)

__all__ = [
    "KeysRequest",
    "KeysResponse",
    "ScanRequest",
    "ScanResponse",
    "SendRequest",
    "SendResponse",
]
