import base64
import binascii
from typing import TypeAlias

from proton_srp.config import BCRYPT_ALPHABET

PaddedBytes: TypeAlias = bytes

_STANDARD_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_TO_BCRYPT = bytes.maketrans(_STANDARD_ALPHABET, BCRYPT_ALPHABET)
_FROM_BCRYPT = bytes.maketrans(BCRYPT_ALPHABET, _STANDARD_ALPHABET)


def padded_length(N: int) -> int:
    """L = ceil(bitlength(N) / 8)"""
    return (N.bit_length() + 7) // 8


def padded_bytes(value: int, N: int) -> PaddedBytes:
    """
    Serialize value for hashing: exactly padded_length(N) bytes, least
    significant byte first, zero-extended on the high end.
    """
    if value < 0:
        raise ValueError("Cannot encode a negative integer")
    length = padded_length(N)
    try:
        return value.to_bytes(length, "little")
    except OverflowError as e:
        raise ValueError(f"Integer does not fit in {length} bytes") from e


def int_from_digest(digest: bytes) -> int:
    """Reverse the digest bytes and read them as a positive big-endian integer."""
    return int.from_bytes(digest[::-1], "big")


def int_from_bytes(b: bytes) -> int:
    return int.from_bytes(b, "little")


def bcrypt_b64encode(data: bytes) -> bytes:
    """base64 with bcrypt's ./A-Za-z0-9 alphabet and no padding."""
    return base64.b64encode(data).rstrip(b"=").translate(_TO_BCRYPT)


def bcrypt_b64decode(data: bytes) -> bytes:
    if len(data) % 4 == 1:
        raise ValueError("Invalid bcrypt base64 length")
    if data.translate(None, BCRYPT_ALPHABET):
        raise ValueError("Invalid character in bcrypt base64")
    standard = data.translate(_FROM_BCRYPT)
    standard += b"=" * (-len(standard) % 4)
    try:
        return base64.b64decode(standard, validate=True)
    except binascii.Error as e:
        raise ValueError("Invalid bcrypt base64") from e
