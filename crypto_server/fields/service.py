"""Field-level payload encoding, decoding and signing."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping

import orjson

from ..algorithms import EncodingAlgorithm, SigningAlgorithm
from ..transport.canonical_json import (
    CanonicalizationError,
    JsonType,
    canonical_number,
    compact_dumps,
    loads,
)

logger = logging.getLogger(__name__)


class FieldEncodingError(ValueError):
    """Raised when a field value cannot be turned into text for encoding."""


def stringify_field(value: Any) -> str:
    """Render a single field value as the text that gets encoded."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, (int, float)):
        try:
            return canonical_number(value)
        except CanonicalizationError as exc:
            raise FieldEncodingError(str(exc)) from exc
    if isinstance(value, (dict, list, tuple)):
        try:
            return compact_dumps(value)
        except (TypeError, ValueError) as exc:
            raise FieldEncodingError(str(exc)) from exc
    raise FieldEncodingError(f"unsupported field type {type(value).__name__}")


def restore_field(text: str) -> JsonType:
    """Recover the typed value of decoded field text.

    Objects and arrays come back from their JSON text. A number comes back
    only when its canonical rendering is exactly ``text``, so ``"1.50"`` or
    ``" 30"`` stay strings. ``"true"``, ``"false"`` and ``"null"`` come back
    as their JSON values.
    """
    try:
        parsed = loads(text)
    except orjson.JSONDecodeError:
        return text
    if parsed is None or isinstance(parsed, (dict, list, bool)):
        return parsed
    if isinstance(parsed, (int, float)):
        try:
            if canonical_number(parsed) == text:
                return parsed
        except CanonicalizationError:
            return text
    return text


@dataclass
class FieldTransformService:
    """Apply an encoding per field and a signature over whole payloads."""

    encoder: EncodingAlgorithm
    signer: SigningAlgorithm

    def encode_fields(self, payload: Mapping[str, Any]) -> dict[str, str]:
        return {key: self.encoder.encode(stringify_field(value)) for key, value in payload.items()}

    def decode_fields(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        decoded: dict[str, Any] = {}
        for key, value in payload.items():
            if isinstance(value, str):
                decoded[key] = restore_field(self.encoder.decode(value))
            else:
                # not encoded; pass through
                decoded[key] = value
        return decoded

    def sign(self, payload: Mapping[str, Any]) -> dict[str, str]:
        return {"signature": self.signer.sign(payload)}

    def verify(self, payload: Mapping[str, Any], signature: str) -> bool:
        valid = self.signer.verify(payload, signature)
        if not valid:
            logger.info("signature verification failed")
        return valid
