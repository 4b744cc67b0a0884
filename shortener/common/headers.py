"""Header parsing utilities for URL shortener."""

from typing import Dict, Optional


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.

    Args:
        headers: Request headers dictionary

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def get_client_ip(
    headers: Dict[str, str],
    peer_host: Optional[str] = None,
    trust_forwarded: bool = True,
) -> Optional[str]:
    """Get the originating client IP.

    When forwarded headers are trusted the first X-Forwarded-For hop wins;
    otherwise the socket peer address.

    Args:
        headers: Request headers
        peer_host: Host of the directly connected peer
        trust_forwarded: Whether X-Forwarded-For comes from a trusted proxy

    Returns:
        Client IP or None if unknown
    """
    forwarded_for = extract_forwarded_headers(headers)["forwarded_for"]
    if trust_forwarded and forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return peer_host or None
