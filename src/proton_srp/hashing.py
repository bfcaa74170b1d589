"""
Digests used by the SRP core.

Both digests are incremental (update/digest) so the padded-hash routine
can feed operands one by one. The expanded hash is the protocol default:

    H(m) = SHA512(m || 0x00) || SHA512(m || 0x01) || ... || SHA512(m || n-1)

truncated to EXPANDED_DIGEST_SIZE bytes.
"""
from collections.abc import Callable
from typing import Protocol, Self, TypeAlias

from nacl.encoding import RawEncoder
from nacl.hash import sha512

from proton_srp.config import BASE_DIGEST_SIZE, EXPANDED_DIGEST_SIZE, EXPANSION_FACTOR


class Digest(Protocol):
    digest_size: int

    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...

    def copy(self) -> Self: ...


DigestFactory: TypeAlias = Callable[[], Digest]


def base_digest(data: bytes) -> bytes:
    result: bytes = sha512(data, encoder=RawEncoder)
    return result


class SHA512Digest:
    digest_size = BASE_DIGEST_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._chunks: list[bytes] = [data] if data else []

    def update(self, data: bytes) -> None:
        self._chunks.append(bytes(data))

    def digest(self) -> bytes:
        return base_digest(b"".join(self._chunks))

    def copy(self) -> "SHA512Digest":
        return SHA512Digest(b"".join(self._chunks))


def expanded_hash(message: bytes) -> bytes:
    blocks = (
        base_digest(message + bytes([i]))
        for i in range(EXPANSION_FACTOR)
    )
    return b"".join(blocks)[:EXPANDED_DIGEST_SIZE]


class ExpandedHashDigest:
    digest_size = EXPANDED_DIGEST_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._chunks: list[bytes] = [data] if data else []

    def update(self, data: bytes) -> None:
        self._chunks.append(bytes(data))

    def digest(self) -> bytes:
        return expanded_hash(b"".join(self._chunks))

    def copy(self) -> "ExpandedHashDigest":
        return ExpandedHashDigest(b"".join(self._chunks))
