"""
Token Codec - Reversible URL-safe base64 used by AnimeKai's AJAX layer.

AnimeKai authenticates its AJAX calls with a ``_`` query parameter that is
the URL-safe base64 form of the id being requested, and wraps the payloads
of its link and media endpoints the same way. The transform is applied to
the UTF-8 bytes of the text, which is what percent-escaping the text and
turning each ``%XX`` pair into a raw byte amounts to.
"""

import base64
import logging
import re


logger = logging.getLogger(__name__)

# URL-safe base64 alphabet, padding optional
TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]*={0,2}")


class KaiCodec:
    """Encoder/decoder for AnimeKai tokens and payloads."""

    @staticmethod
    def encode(text: str) -> str:
        """
        Encode text into a URL-safe, unpadded base64 token.

        Args:
            text: Arbitrary Unicode text

        Returns:
            Token string, or an empty string if the text cannot be encoded
        """
        if not text or not isinstance(text, str):
            return ""

        try:
            raw = text.encode("utf-8")
        except UnicodeEncodeError as e:
            # Lone surrogates have no UTF-8 form
            logger.debug(f"Token encode failed: {e}")
            return ""

        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    @staticmethod
    def decode(token: str) -> str:
        """
        Decode a URL-safe base64 token back into text.

        Args:
            token: Token produced by ``encode`` or returned by the site

        Returns:
            Decoded text, or an empty string for malformed input
        """
        if not token or not isinstance(token, str):
            return ""

        if not TOKEN_PATTERN.fullmatch(token):
            logger.debug(f"Token decode failed: invalid characters in {token[:20]!r}")
            return ""

        stripped = token.rstrip("=")
        padded = stripped + "=" * (-len(stripped) % 4)

        try:
            raw = base64.urlsafe_b64decode(padded)
            return raw.decode("utf-8")
        except ValueError as e:
            # binascii.Error and UnicodeDecodeError are both ValueErrors
            logger.debug(f"Token decode failed: {e}")
            return ""

    @classmethod
    def decode_mega(cls, token: str) -> str:
        """
        Decode a media-provider payload.

        Media payloads currently share the link payload scheme.
        """
        return cls.decode(token)


encode = KaiCodec.encode
decode = KaiCodec.decode
decode_mega = KaiCodec.decode_mega


__all__ = ["KaiCodec", "encode", "decode", "decode_mega"]
