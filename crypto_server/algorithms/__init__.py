"""Encoding and signing algorithm factory."""

from __future__ import annotations

from typing import Any, Protocol

from ..config import ConfigError, ServerConfig
from .base64_encoding import Base64Encoding
from .hmac_signing import HmacSigning, SigningError


class EncodingAlgorithm(Protocol):
    name: str

    def encode(self, text: str) -> str: ...

    def decode(self, token: str) -> str: ...


class SigningAlgorithm(Protocol):
    @property
    def algorithm(self) -> str: ...

    @property
    def signature_length(self) -> int: ...

    def sign(self, payload: Any) -> str: ...

    def verify(self, payload: Any, signature: str) -> bool: ...


def build_encoder(config: ServerConfig) -> EncodingAlgorithm:
    name = config.encoding.algorithm
    if name == "base64":
        return Base64Encoding()
    raise ConfigError(f"unknown encoding algorithm {name}")


def build_signer(config: ServerConfig) -> SigningAlgorithm:
    return HmacSigning(config.signing.secret, config.signing.algorithm)


__all__ = [
    "Base64Encoding",
    "EncodingAlgorithm",
    "HmacSigning",
    "SigningAlgorithm",
    "SigningError",
    "build_encoder",
    "build_signer",
]
