"""Bearer token helpers (HMAC-signed JWT issue and verification)."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Optional

from ..domain.profiles import MAX_USER_ID
from .errors import UnauthenticatedError

_DIGESTS = {
    "HS256": hashlib.sha256,
    "HS384": hashlib.sha384,
    "HS512": hashlib.sha512,
}


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _json_segment(payload: dict) -> str:
    return _b64_url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))


class TokenVerifier:
    """Verifies bearer tokens and extracts the subject user id.

    Only HMAC algorithms are accepted; a token whose header names anything
    else (``none``, RS256, ...) is rejected before the signature is checked.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        if algorithm not in _DIGESTS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        self._secret = (secret or "").encode("utf-8")
        self.algorithm = algorithm

    def _sign(self, signing_input: bytes, algorithm: str) -> bytes:
        return hmac.new(self._secret, signing_input, _DIGESTS[algorithm]).digest()

    def issue_token(
        self,
        subject: int,
        *,
        email: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> str:
        """Sign a token for ``subject``. Used by admin scripts and tests."""
        if not self._secret:
            raise ValueError("JWT secret is not configured")
        claims: dict[str, Any] = {"sub": int(subject)}
        if email:
            claims["userEmail"] = email
        if expires_in is not None:
            claims["exp"] = int(time.time()) + int(expires_in)
        header = {"alg": self.algorithm, "typ": "JWT"}
        signing_input = f"{_json_segment(header)}.{_json_segment(claims)}"
        signature = self._sign(signing_input.encode("ascii"), self.algorithm)
        return f"{signing_input}.{_b64_url_encode(signature)}"

    def decode(self, token: str) -> dict:
        """Return the verified claims of ``token``."""
        if not self._secret:
            raise UnauthenticatedError("Token verification is not configured")
        parts = (token or "").split(".")
        if len(parts) != 3:
            raise UnauthenticatedError("Malformed token")
        header_b64, payload_b64, signature_b64 = parts
        try:
            header = json.loads(_b64_url_decode(header_b64))
            claims = json.loads(_b64_url_decode(payload_b64))
            signature = _b64_url_decode(signature_b64)
        except (ValueError, TypeError) as exc:
            raise UnauthenticatedError("Malformed token") from exc
        if not isinstance(header, dict) or not isinstance(claims, dict):
            raise UnauthenticatedError("Malformed token")

        algorithm = header.get("alg")
        if algorithm not in _DIGESTS:
            raise UnauthenticatedError(f"Unexpected signing method: {algorithm}")
        expected = self._sign(f"{header_b64}.{payload_b64}".encode("ascii"), algorithm)
        if not hmac.compare_digest(expected, signature):
            raise UnauthenticatedError("Invalid token signature")

        exp = claims.get("exp")
        if exp is not None:
            try:
                expired = float(exp) < time.time()
            except (TypeError, ValueError) as exc:
                raise UnauthenticatedError("Invalid exp claim") from exc
            if expired:
                raise UnauthenticatedError("Token expired")
        return claims

    def verify(self, token: str) -> int:
        """Return the subject user id carried by ``token``."""
        claims = self.decode(token)
        sub = claims.get("sub")
        if isinstance(sub, bool):
            raise UnauthenticatedError("Invalid sub claim")
        try:
            user_id = int(sub)
        except (TypeError, ValueError) as exc:
            raise UnauthenticatedError("Invalid sub claim") from exc
        if not 1 <= user_id <= MAX_USER_ID:
            raise UnauthenticatedError("Invalid sub claim")
        return user_id


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    value = (authorization or "").strip()
    if not value.startswith("Bearer "):
        raise UnauthenticatedError("Invalid Auth header")
    token = value[len("Bearer "):].strip()
    if not token:
        raise UnauthenticatedError("Invalid Auth header")
    return token
