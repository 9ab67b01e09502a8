"""HMAC signatures over RFC 8785 canonical JSON."""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any

from ..config import ConfigError
from ..transport.canonical_json import CanonicalizationError, canonical_dumps

logger = logging.getLogger(__name__)


class SigningError(ValueError):
    """Raised when a payload cannot be canonicalized for signing."""


class HmacSigning:
    """Sign and verify JSON payloads with a shared secret.

    Signatures are lowercase hex digests of ``HMAC(secret, canonical_json)``;
    key order in the payload never affects the result.
    """

    def __init__(self, secret: str, algorithm: str = "sha256") -> None:
        if not secret:
            raise ConfigError("signing secret missing")
        try:
            digest_size = hashlib.new(algorithm).digest_size
        except (ValueError, TypeError) as exc:
            raise ConfigError(f"unsupported hash algorithm {algorithm!r}") from exc
        self._secret = secret.encode("utf-8")
        self._algorithm = algorithm
        self._hex_length = digest_size * 2

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def signature_length(self) -> int:
        return self._hex_length

    def sign(self, payload: Any) -> str:
        try:
            canonical = canonical_dumps(payload)
        except CanonicalizationError as exc:
            raise SigningError(f"signing failed: {exc}") from exc
        return hmac.new(self._secret, canonical, self._algorithm).hexdigest()

    def verify(self, payload: Any, signature: str) -> bool:
        """Return True only when ``signature`` matches; never raises."""
        if not isinstance(signature, str) or not signature:
            return False
        if len(signature) != self._hex_length:
            return False
        try:
            provided = bytes.fromhex(signature)
        except ValueError:
            return False
        try:
            expected = bytes.fromhex(self.sign(payload))
        except SigningError:
            logger.debug("verification payload could not be canonicalized", exc_info=True)
            return False
        return hmac.compare_digest(provided, expected)
