"""
Password to exponent derivation.

    es = salt || "proton"
    h  = bcrypt(password || 0x00, es, cost=10)
    x  = int(H("$2y$10$" || b64(es) || b64(h[:23]) || pad(N)))

The framing string is exactly the modular-crypt bcrypt hash of the
password, so it matches what any bcrypt implementation prints for the
same salt.

The identity is accepted for interface symmetry with the rest of the
protocol but is not mixed into x: two accounts sharing salt and password
share a verifier.
"""
import logging
import secrets

import bcrypt

from proton_srp.config import (
    BCRYPT_COST,
    BCRYPT_MAX_PASSWORD_LENGTH,
    BCRYPT_PREFIX,
    BCRYPT_SALT_LENGTH,
    BCRYPT_VERSION,
    SALT_LENGTH,
    SALT_SUFFIX,
)
from proton_srp.encoding import bcrypt_b64decode, bcrypt_b64encode, int_from_digest, padded_bytes
from proton_srp.errors import DerivationFailure
from proton_srp.hashing import DigestFactory, ExpandedHashDigest

logger = logging.getLogger(__name__)

# bcrypt's raw output is 24 bytes; modular-crypt strings carry the first 23
BCRYPT_HASH_LENGTH = 23
_BCRYPT_HASH_CHARS = 31


def generate_salt() -> bytes:
    return secrets.token_bytes(SALT_LENGTH)


def extend_salt(salt: bytes) -> bytes:
    return salt + SALT_SUFFIX


def bcrypt_hash(password: bytes, salt: bytes, cost: int = BCRYPT_COST) -> bytes:
    """
    Raw bcrypt of password under a 16-byte salt, minus the final output
    byte. The NUL terminator is appended by bcrypt itself.
    """
    if len(salt) != BCRYPT_SALT_LENGTH:
        raise ValueError(f"bcrypt salt must be {BCRYPT_SALT_LENGTH} bytes, got {len(salt)}")
    if len(password) + 1 > BCRYPT_MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password longer than {BCRYPT_MAX_PASSWORD_LENGTH - 1} bytes")

    setting = b"$" + BCRYPT_VERSION + b"$" + b"%02d" % cost + b"$" + bcrypt_b64encode(salt)
    hashed: bytes = bcrypt.hashpw(password, setting)
    return bcrypt_b64decode(hashed[-_BCRYPT_HASH_CHARS:])


def format_bcrypt_message(extended_salt: bytes, hashed: bytes) -> bytes:
    return BCRYPT_PREFIX + bcrypt_b64encode(extended_salt) + bcrypt_b64encode(hashed[:BCRYPT_HASH_LENGTH])


def derive_x(
    N: int,
    salt: bytes,
    identity: bytes,
    password: bytes,
    digest_factory: DigestFactory = ExpandedHashDigest,
) -> int:
    extended_salt = extend_salt(salt)
    try:
        hashed = bcrypt_hash(password, extended_salt)
        message = format_bcrypt_message(extended_salt, hashed)

        digest = digest_factory()
        digest.update(message)
        digest.update(padded_bytes(N, N))
        output = digest.digest()
    except (ValueError, TypeError) as e:
        logger.warning("Password derivation failed: %s", e)
        raise DerivationFailure("Failed to derive x from password") from e

    return int_from_digest(output)
