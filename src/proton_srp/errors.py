from enum import Enum


class SRPError(ValueError):
    """Base class for every fault raised by the SRP core."""


class InvalidPublicValue(SRPError):
    """The peer's public value is congruent to 0 mod N."""


class DerivationFailure(SRPError):
    """bcrypt, the encoder or the hash failed while deriving x."""


class InvalidStateTransition(SRPError):
    """A session method was called out of order, or after the session failed."""


def ensure_state(current: Enum, expected: Enum, operation: str) -> None:
    if current != expected:
        raise InvalidStateTransition(
            f"{operation}() requires state {expected.name}, session is {current.name}"
        )
