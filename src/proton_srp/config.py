"""
Protocol constants for the Proton SRP variant.

Changing any value here is a protocol-breaking change: both peers must
agree on every one of them or the exchange fails silently.
"""

# bcrypt password hardening
BCRYPT_VERSION = b"2y"
BCRYPT_COST = 10
BCRYPT_PREFIX = b"$" + BCRYPT_VERSION + b"$" + b"%02d" % BCRYPT_COST + b"$"  # b"$2y$10$"
BCRYPT_SALT_LENGTH = 16
BCRYPT_MAX_PASSWORD_LENGTH = 72  # includes the NUL terminator
BCRYPT_ALPHABET = b"./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

SALT_SUFFIX = b"proton"
SALT_LENGTH = BCRYPT_SALT_LENGTH - len(SALT_SUFFIX)

# Expanded hash: SHA-512 run EXPANSION_FACTOR times
BASE_DIGEST_SIZE = 64
EXPANSION_FACTOR = 4
EXPANDED_DIGEST_SIZE = BASE_DIGEST_SIZE * EXPANSION_FACTOR

# Group and ephemeral values
PRIVATE_VALUE_MAX_BITS = 256
MIN_MODULUS_BITS = 2048
DEFAULT_GENERATOR = 2
