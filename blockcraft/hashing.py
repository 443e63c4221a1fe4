"""Digest helpers used by the session handshake."""

from __future__ import annotations

import base64
import binascii

SHA1_DIGEST_LENGTH = 20


def _check_digest(digest: bytes) -> bytes:
    data = bytes(digest)
    if len(data) != SHA1_DIGEST_LENGTH:
        raise ValueError(
            f"sha1 digest must be {SHA1_DIGEST_LENGTH} bytes, got {len(data)}"
        )
    return data


def base64_decode(message: str | bytes) -> bytes:
    """Decode a single-line base64 message into raw bytes.

    Raises ValueError when the message is not valid base64.
    """
    try:
        data = message.encode("ascii") if isinstance(message, str) else bytes(message)
        return base64.b64decode(data, validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"invalid base64 data: {exc}") from exc


def sha1_twos_complement(digest: bytes) -> bytes:
    """Return the two's complement of a 20 byte sha1 digest.

    Every byte is inverted and one is added to the lowest byte; an overflow
    of that byte wraps to zero without carrying into the byte before it.
    """
    inverted = bytearray(~byte & 0xFF for byte in _check_digest(digest))
    inverted[-1] = (inverted[-1] + 1) & 0xFF
    return bytes(inverted)


def sha1_hex_digest(digest: bytes) -> str:
    """Return the signed hex form of a sha1 digest, without leading zeros.

    Digests with the top bit set are treated as negative numbers and are
    written as a minus sign followed by their two's complement.
    """
    data = _check_digest(digest)
    negative = bool(data[0] & 0x80)
    if negative:
        data = sha1_twos_complement(data)
    result = data.hex().lstrip("0")
    return "-" + result if negative else result