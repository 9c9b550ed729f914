"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Token generation (cryptographic)
- HTTP request helpers (client IP extraction)

Usage:
    from core.helpers import generate_token, get_client_ip

    token = generate_token(32)
    ip = get_client_ip(request)
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.http import HttpRequest


def generate_token(length: int = 32) -> str:
    """
    Generate a cryptographically secure random token.

    Args:
        length: Number of bytes (resulting string is 2x length in hex)

    Returns:
        Hexadecimal token string
    """
    return secrets.token_hex(length)


def get_client_ip(request: HttpRequest | None) -> str | None:
    """
    Extract client IP from request, handling proxies.

    Checks X-Forwarded-For header for proxy chains and takes the first
    (original client) address.

    Args:
        request: Django HTTP request, or None outside a request cycle

    Returns:
        Client IP address string, or None if there is no request
    """
    if request is None:
        return None
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        ip = x_forwarded_for.split(",")[0].strip()
    else:
        ip = request.META.get("REMOTE_ADDR", "")
    return ip or None
