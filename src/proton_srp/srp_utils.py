"""
Stateless SRP-6a arithmetic.

Every value that goes through a hash is serialized with padded_bytes() and
every digest is read back with int_from_digest(); padded_hash() is the one
place where both happen.

    k  = H(g, N)
    u  = H(A, B)
    v  = g^x mod N
    M1 = H(A, B, S)
    M2 = H(A, M1, S)
    K  = H(S)
"""
import logging
import secrets
from collections.abc import Callable
from typing import TypeAlias

from nacl.bindings import sodium_memcmp

from proton_srp.config import PRIVATE_VALUE_MAX_BITS
from proton_srp.encoding import int_from_digest, padded_bytes, padded_length
from proton_srp.errors import InvalidPublicValue
from proton_srp.hashing import DigestFactory, ExpandedHashDigest
from proton_srp.password import derive_x

logger = logging.getLogger(__name__)

# (low, high) -> uniform integer in [low, high]
RandomSource: TypeAlias = Callable[[int, int], int]


def secure_randint(low: int, high: int) -> int:
    if high < low:
        raise ValueError("Empty range")
    return low + secrets.randbelow(high - low + 1)


def padded_hash(N: int, *values: int, digest_factory: DigestFactory = ExpandedHashDigest) -> int:
    digest = digest_factory()
    for value in values:
        digest.update(padded_bytes(value, N))
    return int_from_digest(digest.digest())


def compute_k(g: int, N: int, digest_factory: DigestFactory = ExpandedHashDigest) -> int:
    return padded_hash(N, g, N, digest_factory=digest_factory)


def compute_u(A: int, B: int, N: int, digest_factory: DigestFactory = ExpandedHashDigest) -> int:
    return padded_hash(N, A, B, digest_factory=digest_factory)


def compute_verifier(
    N: int,
    g: int,
    salt: bytes,
    identity: bytes,
    password: bytes,
    digest_factory: DigestFactory = ExpandedHashDigest,
) -> int:
    x = derive_x(N, salt, identity, password, digest_factory=digest_factory)
    return pow(g, x, N)


def generate_private_value(N: int, random_source: RandomSource = secure_randint) -> int:
    min_bits = min(PRIVATE_VALUE_MAX_BITS, N.bit_length() // 2)
    low = 1 << (min_bits - 1)
    return random_source(low, N - 1)


def validate_public_value(N: int, value: int) -> int:
    """
    Reduce a peer's public value mod N. A value congruent to 0 would force
    the shared secret to 0, so it is rejected.
    """
    value = value % N
    if value == 0:
        logger.warning("Rejected public value congruent to 0 mod N")
        raise InvalidPublicValue("Invalid public value: 0")
    return value


def compute_m1(N: int, A: int, B: int, S: int, digest_factory: DigestFactory = ExpandedHashDigest) -> int:
    return padded_hash(N, A, B, S, digest_factory=digest_factory)


def compute_m2(N: int, A: int, M1: int, S: int, digest_factory: DigestFactory = ExpandedHashDigest) -> int:
    return padded_hash(N, A, M1, S, digest_factory=digest_factory)


def compute_session_key(N: int, S: int, digest_factory: DigestFactory = ExpandedHashDigest) -> int:
    return padded_hash(N, S, digest_factory=digest_factory)


def evidence_matches(N: int, expected: int, received: int) -> bool:
    """Constant-time comparison of two evidence values."""
    if not 0 <= received < 1 << (8 * padded_length(N)):
        return False
    return bool(sodium_memcmp(padded_bytes(expected, N), padded_bytes(received, N)))
