import pytest
from pydantic import ValidationError

from proton_srp.messages import ClientEvidence, ClientPublicValue, ServerEvidence, ServerPublicValue, WireValue
from proton_srp.types import SRPGroup
from srp_vectors import CLIENT_EVIDENCE_B64, MODULUS_B64, SERVER_PUBLIC_VALUE_B64, wire_int


@pytest.fixture(scope="module")  # type: ignore
def group() -> SRPGroup:
    return SRPGroup.from_base64_modulus(MODULUS_B64)


class TestWireValue:
    def test_from_int_is_padded_little_endian(self, group: SRPGroup) -> None:
        wire = ClientPublicValue.from_int(0x0102, group)
        assert len(wire.value) == 256
        assert wire.value[:3] == b"\x02\x01\x00"
        assert wire.to_int() == 0x0102

    def test_from_int_too_large(self, group: SRPGroup) -> None:
        with pytest.raises(ValueError):
            ServerEvidence.from_int(2**2048, group)

    @pytest.mark.parametrize("encoded", [SERVER_PUBLIC_VALUE_B64, CLIENT_EVIDENCE_B64])  # type: ignore
    def test_base64(self, encoded: str) -> None:
        wire = ServerPublicValue.from_base64(encoded)
        assert wire.to_int() == wire_int(encoded)
        assert wire.to_base64() == encoded

    def test_base64_bytes_input(self) -> None:
        wire = ClientEvidence.from_base64(CLIENT_EVIDENCE_B64.encode())
        assert wire.to_int() == wire_int(CLIENT_EVIDENCE_B64)

    def test_invalid_base64(self) -> None:
        with pytest.raises(ValueError, match="Invalid base64"):
            WireValue.from_base64("***")

    def test_empty_value(self) -> None:
        with pytest.raises(ValidationError):
            ClientPublicValue(value=b"")
        with pytest.raises(ValidationError):
            ClientPublicValue.from_base64("")

    def test_model_dump(self, group: SRPGroup) -> None:
        wire = ServerEvidence.from_int(7, group)
        assert ServerEvidence(**wire.model_dump()) == wire
