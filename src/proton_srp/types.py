import base64
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, model_validator

from proton_srp.config import DEFAULT_GENERATOR, MIN_MODULUS_BITS
from proton_srp.encoding import int_from_bytes, padded_length


class SRPGroup(BaseModel):  # type: ignore
    """Group parameters shared by client and server. Both sides must use the same N and g."""

    N: int = Field(..., gt=0)
    g: int = Field(default=DEFAULT_GENERATOR, gt=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_group(self) -> "SRPGroup":
        if self.N % 2 == 0:
            raise ValueError("Modulus N must be odd")
        if self.N.bit_length() < MIN_MODULUS_BITS:
            raise ValueError(f"Modulus N must have at least {MIN_MODULUS_BITS} bits")
        if self.g >= self.N:
            raise ValueError("Generator g must be smaller than N")
        return self

    @property
    def padded_length(self) -> int:
        return padded_length(self.N)

    @classmethod
    def from_base64_modulus(cls, encoded: str, g: int = DEFAULT_GENERATOR) -> "SRPGroup":
        """Modulus as transmitted by the server: base64 of the little-endian bytes."""
        return cls(N=int_from_bytes(base64.b64decode(encoded, validate=True)), g=g)


class ClientState(Enum):
    CREATED = "created"
    CREDENTIALS_GENERATED = "credentials_generated"
    SECRET_COMPUTED = "secret_computed"
    CLIENT_EVIDENCE_COMPUTED = "client_evidence_computed"
    SERVER_EVIDENCE_VERIFIED = "server_evidence_verified"
    FAILED = "failed"


class ServerState(Enum):
    CREATED = "created"
    CREDENTIALS_GENERATED = "credentials_generated"
    SECRET_COMPUTED = "secret_computed"
    CLIENT_EVIDENCE_VERIFIED = "client_evidence_verified"
    SERVER_EVIDENCE_COMPUTED = "server_evidence_computed"
    FAILED = "failed"


class SRPParty(Protocol):
    """What client and server sessions both offer."""

    group: SRPGroup

    @property
    def state(self) -> Enum: ...

    def compute_secret(self, peer_public_value: int) -> int: ...

    def session_key(self) -> int: ...
