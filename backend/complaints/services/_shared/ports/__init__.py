"""
complaints.services._shared.ports
=================================

Ports (hexagonal interfaces) for token infrastructure. Services depend on
these Protocols; the Flask-JWT-Extended adapters live under
:mod:`complaints.infra.jwt`.
"""

from __future__ import annotations

from .token_provider import TokenIssuer, TokenVerifier

__all__ = ["TokenIssuer", "TokenVerifier"]
