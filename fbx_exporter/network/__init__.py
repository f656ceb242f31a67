"""
Network module: pinned-TLS HTTP transport and API URL helpers.
"""

from fbx_exporter.network.client import (
    PinnedTLSAdapter,
    Transport,
    api_url,
    build_ssl_context,
    decode_response,
)

__all__ = [
    "PinnedTLSAdapter",
    "Transport",
    "api_url",
    "build_ssl_context",
    "decode_response",
]
