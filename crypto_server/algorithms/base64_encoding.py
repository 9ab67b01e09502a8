"""Keyless, reversible base64 field encoding."""

from __future__ import annotations

import base64
import binascii


def _utf8(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates become U+FFFD
        repaired = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
        return repaired.encode("utf-8")


class Base64Encoding:
    """Encode text to standard base64 and back.

    ``decode`` never fails: a token that is not valid base64, is not UTF-8
    once decoded, or does not re-encode to exactly the same token is returned
    unchanged. The re-encode check keeps plain strings that merely happen to
    be valid base64 (``"abcd"``, ``"test"``) from being corrupted. Unpaired
    surrogates in ``encode`` input are written as U+FFFD.
    """

    name = "base64"

    def encode(self, text: str) -> str:
        if not text:
            return text
        return base64.b64encode(_utf8(text)).decode("ascii")

    def decode(self, token: str) -> str:
        if not token:
            return token
        try:
            candidate = base64.b64decode(token, validate=True).decode("utf-8")
        except (binascii.Error, ValueError):
            return token
        if self.encode(candidate) != token:
            return token
        return candidate
