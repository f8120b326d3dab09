"""Signing key material for access tokens.

Exactly one scheme is active per deployment and it is chosen once, at
startup, from ``JWT_SIGNING_SCHEME``:

* ``rsa``  -> :class:`AsymmetricKeyPair` (RS256; private key signs, public key verifies)
* ``hmac`` -> :class:`SymmetricKey` (HS512; one shared secret for both)

The loaded material is immutable and stored on ``app.extensions`` so request
handlers can read it concurrently without locking. Any failure to load or
parse the material aborts application startup.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, ClassVar

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from flask import Flask, current_app

from complaints.core.config import SCHEME_HMAC, SCHEME_RSA

log = logging.getLogger(__name__)

EXTENSION_KEY = "signing_keys"

# HS512 needs a key at least as long as the hash output (512 bits)
MIN_HMAC_SECRET_BYTES = 64


class SecurityConfigError(RuntimeError):
    """Raised when security-related settings are unusable at startup."""


class KeyMaterialError(SecurityConfigError):
    """Raised when signing/verification keys cannot be loaded or parsed."""


@dataclass(frozen=True, slots=True)
class SymmetricKey:
    """Shared HMAC secret used both to sign and to verify tokens."""

    secret: str
    algorithm: ClassVar[str] = "HS512"

    def __repr__(self) -> str:
        return "SymmetricKey(secret=***)"


@dataclass(frozen=True, slots=True)
class AsymmetricKeyPair:
    """RSA key pair in normalised PEM form (PKCS#8 private, X.509 public)."""

    private_key_pem: str
    public_key_pem: str
    algorithm: ClassVar[str] = "RS256"

    def __repr__(self) -> str:
        return "AsymmetricKeyPair(private_key=***, public_key=...)"


SigningKeyMaterial = SymmetricKey | AsymmetricKeyPair


# --------------------------------------------------------------------------- #
# PEM handling
# --------------------------------------------------------------------------- #


def _read_der(location: str, *, kind: str) -> bytes:
    """Read a PEM file and return the base64-decoded body.

    Armour lines (``-----BEGIN ...-----``) and all whitespace are stripped
    before decoding.
    """
    path = Path(location).expanduser()
    try:
        raw = path.read_text(encoding="ascii")
    except (OSError, UnicodeDecodeError) as exc:
        raise KeyMaterialError(f"Unable to read {kind} key at {str(path)!r}") from exc

    body = "".join(
        line.strip()
        for line in raw.splitlines()
        if line.strip() and not line.strip().startswith("-----")
    )
    if not body:
        raise KeyMaterialError(f"{kind.capitalize()} key file {str(path)!r} is empty")
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise KeyMaterialError(f"{kind.capitalize()} key at {str(path)!r} is not valid base64") from exc


def load_private_key(location: str) -> rsa.RSAPrivateKey:
    """Parse a PKCS#8 RSA private key from ``location``."""
    der = _read_der(location, kind="private")
    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError) as exc:
        raise KeyMaterialError(f"Private key at {location!r} is not a PKCS#8 key") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyMaterialError(f"Private key at {location!r} is not an RSA key")
    return key


def load_public_key(location: str) -> rsa.RSAPublicKey:
    """Parse an X.509 (SubjectPublicKeyInfo) RSA public key from ``location``."""
    der = _read_der(location, kind="public")
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, TypeError) as exc:
        raise KeyMaterialError(f"Public key at {location!r} is not an X.509 key") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyMaterialError(f"Public key at {location!r} is not an RSA key")
    return key


def load_asymmetric_pair(private_location: str, public_location: str) -> AsymmetricKeyPair:
    """Load and cross-check an RSA key pair."""
    private_key = load_private_key(private_location)
    public_key = load_public_key(public_location)
    if private_key.public_key().public_numbers() != public_key.public_numbers():
        raise KeyMaterialError("Configured public key does not match the private key")

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    public_pem = public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    return AsymmetricKeyPair(private_key_pem=private_pem, public_key_pem=public_pem)


def load_symmetric_key(secret: str | None) -> SymmetricKey:
    """Validate a shared secret for HS512 signing."""
    if not secret or not secret.strip():
        raise KeyMaterialError("JWT_SECRET must be set when JWT_SIGNING_SCHEME is 'hmac'")
    if len(secret.encode("utf-8")) < MIN_HMAC_SECRET_BYTES:
        raise KeyMaterialError(
            f"JWT_SECRET must be at least {MIN_HMAC_SECRET_BYTES} bytes for HS512"
        )
    return SymmetricKey(secret=secret)


def load_key_material(config: Mapping[str, Any]) -> SigningKeyMaterial:
    """Build the configured key material.

    :param config: Flask config (or any mapping exposing the ``JWT_*`` keys).
    :returns: The single active signing scheme.
    :raises KeyMaterialError: When the scheme is unknown or the material is unusable.
    """
    scheme = str(config.get("JWT_SIGNING_SCHEME") or SCHEME_RSA).strip().lower()
    if scheme == SCHEME_RSA:
        return load_asymmetric_pair(
            str(config.get("JWT_PRIVATE_KEY_LOCATION") or ""),
            str(config.get("JWT_PUBLIC_KEY_LOCATION") or ""),
        )
    if scheme == SCHEME_HMAC:
        return load_symmetric_key(config.get("JWT_SECRET"))
    raise KeyMaterialError(f"Unsupported JWT_SIGNING_SCHEME {scheme!r}")


def token_lifetimes(config: Mapping[str, Any]) -> tuple[timedelta, timedelta]:
    """Return ``(access, refresh)`` lifetimes, validating their relationship."""
    try:
        access_ms = int(config.get("JWT_EXPIRATION_MS", 0))
        refresh_ms = int(config.get("JWT_REFRESH_EXPIRATION_MS", 0))
    except (TypeError, ValueError) as exc:
        raise SecurityConfigError("Token lifetimes must be integers (milliseconds)") from exc
    if access_ms <= 0:
        raise SecurityConfigError("JWT_EXPIRATION_MS must be positive")
    if refresh_ms <= access_ms:
        raise SecurityConfigError("JWT_REFRESH_EXPIRATION_MS must exceed JWT_EXPIRATION_MS")
    return timedelta(milliseconds=access_ms), timedelta(milliseconds=refresh_ms)


# --------------------------------------------------------------------------- #
# Flask wiring
# --------------------------------------------------------------------------- #


def init_app(app: Flask) -> None:
    """Load key material once and hand it to flask-jwt-extended.

    Must run before any request is served; errors propagate out of
    ``create_app`` so a misconfigured process never starts.
    """
    access_ttl, refresh_ttl = token_lifetimes(app.config)
    material = load_key_material(app.config)

    app.config["JWT_ALGORITHM"] = material.algorithm
    app.config["JWT_DECODE_ALGORITHMS"] = [material.algorithm]
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = access_ttl
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = refresh_ttl

    if isinstance(material, AsymmetricKeyPair):
        app.config["JWT_PRIVATE_KEY"] = material.private_key_pem
        app.config["JWT_PUBLIC_KEY"] = material.public_key_pem
        app.config.pop("JWT_SECRET_KEY", None)
    else:
        app.config["JWT_SECRET_KEY"] = material.secret
        app.config.pop("JWT_PRIVATE_KEY", None)
        app.config.pop("JWT_PUBLIC_KEY", None)

    app.extensions[EXTENSION_KEY] = material
    log.info(
        "Loaded %s signing key material (access_ttl=%ss, refresh_ttl=%ss)",
        material.algorithm,
        int(access_ttl.total_seconds()),
        int(refresh_ttl.total_seconds()),
    )


def get_key_material(app: Flask | None = None) -> SigningKeyMaterial:
    """Return the key material loaded for ``app`` (defaults to ``current_app``)."""
    target = app or current_app
    material = target.extensions.get(EXTENSION_KEY)
    if material is None:
        raise KeyMaterialError("Signing keys are not initialized. Call init_app() first.")
    return material


def generate_rsa_pair(bits: int = 2048) -> tuple[bytes, bytes]:
    """Create a fresh RSA key pair as ``(pkcs8_private_pem, x509_public_pem)``."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


__all__ = [
    "AsymmetricKeyPair",
    "KeyMaterialError",
    "SecurityConfigError",
    "SigningKeyMaterial",
    "SymmetricKey",
    "generate_rsa_pair",
    "get_key_material",
    "init_app",
    "load_key_material",
    "token_lifetimes",
]
