"""
Wire forms of the values exchanged during a run.

On the wire every integer is its little-endian padded encoding (L bytes),
usually carried as base64 text. Transport is up to the caller.
"""
import base64
import binascii
from typing import Self

from pydantic import BaseModel, Field

from proton_srp.encoding import int_from_bytes, padded_bytes
from proton_srp.types import SRPGroup


class WireValue(BaseModel):  # type: ignore
    value: bytes = Field(..., min_length=1)

    @classmethod
    def from_int(cls, value: int, group: SRPGroup) -> Self:
        return cls(value=padded_bytes(value, group.N))

    def to_int(self) -> int:
        return int_from_bytes(self.value)

    def to_base64(self) -> str:
        return base64.b64encode(self.value).decode("ascii")

    @classmethod
    def from_base64(cls, data: str | bytes) -> Self:
        if isinstance(data, str):
            data = data.strip().encode("ascii")
        try:
            raw = base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise ValueError("Invalid base64 encoding") from e
        return cls(value=raw)


class ClientPublicValue(WireValue):
    """A = g^a mod N"""
    ...


class ServerPublicValue(WireValue):
    """B = k*v + g^b mod N"""
    ...


class ClientEvidence(WireValue):
    """M1 = H(A, B, S)"""
    ...


class ServerEvidence(WireValue):
    """M2 = H(A, M1, S)"""
    ...
