import pytest

from proton_srp.client import ClientSession
from proton_srp.hashing import SHA512Digest
from proton_srp.messages import ClientEvidence, ClientPublicValue, ServerEvidence, ServerPublicValue
from proton_srp.server import ServerSession
from proton_srp.srp_utils import compute_verifier
from proton_srp.types import ClientState, ServerState, SRPGroup
from srp_vectors import (
    CLIENT_EVIDENCE_B64,
    CLIENT_PRIVATE_VALUE,
    IDENTITY,
    MODULUS_B64,
    PASSWORD,
    SALT,
    SERVER_EVIDENCE_B64,
    SERVER_PUBLIC_VALUE_B64,
    wire_int,
)


@pytest.fixture(scope="module")  # type: ignore
def group() -> SRPGroup:
    return SRPGroup.from_base64_modulus(MODULUS_B64)


def run_exchange(
    group: SRPGroup,
    salt: bytes,
    identity: bytes,
    client_password: bytes,
    enrolled_password: bytes,
    **session_kwargs,
) -> tuple[ClientSession, ServerSession, bool, bool]:
    verifier = compute_verifier(group.N, group.g, salt, identity, enrolled_password, **session_kwargs)
    client = ClientSession(group, **session_kwargs)
    server = ServerSession(group, verifier, **session_kwargs)

    A = ClientPublicValue.from_int(client.generate_credentials(salt, identity, client_password), group)
    B = ServerPublicValue.from_int(server.generate_credentials(), group)

    server.compute_secret(A.to_int())
    client.compute_secret(B.to_int())

    M1 = ClientEvidence.from_int(client.compute_client_evidence(), group)
    client_ok = server.verify_client_evidence(M1.to_int())
    if not client_ok:
        return client, server, False, False

    M2 = ServerEvidence.from_int(server.compute_server_evidence(), group)
    server_ok = client.verify_server_evidence(M2.to_int())
    return client, server, client_ok, server_ok


class TestKnownAnswer:
    """Recorded Proton client transcript."""

    @pytest.fixture  # type: ignore
    def client(self, group: SRPGroup) -> ClientSession:
        client = ClientSession(group)
        client.generate_credentials(SALT, IDENTITY, PASSWORD, private_value=CLIENT_PRIVATE_VALUE)
        client.compute_secret(wire_int(SERVER_PUBLIC_VALUE_B64))
        return client

    def test_client_evidence(self, client: ClientSession) -> None:
        assert client.compute_client_evidence() == wire_int(CLIENT_EVIDENCE_B64)

    def test_client_evidence_wire_form(self, client: ClientSession, group: SRPGroup) -> None:
        M1 = ClientEvidence.from_int(client.compute_client_evidence(), group)
        assert M1.to_base64() == CLIENT_EVIDENCE_B64

    def test_server_evidence(self, client: ClientSession) -> None:
        client.compute_client_evidence()
        assert client.verify_server_evidence(wire_int(SERVER_EVIDENCE_B64)) is True
        assert client.state == ClientState.SERVER_EVIDENCE_VERIFIED

    def test_swapped_evidence_rejected(self, client: ClientSession) -> None:
        client.compute_client_evidence()
        assert client.verify_server_evidence(wire_int(CLIENT_EVIDENCE_B64)) is False
        assert client.state == ClientState.FAILED


class TestFullExchange:
    @pytest.mark.parametrize(  # type: ignore
        "identity,password,salt",
        [
            (b"ivanov", b"qwerty", b"some bytes"),
            (IDENTITY, PASSWORD, SALT),
            (b"", b"", bytes(10)),
            ("пользователь".encode(), "пароль".encode(), b"\xff" * 10),
        ],
    )
    def test_keys_agree(self, group: SRPGroup, identity: bytes, password: bytes, salt: bytes) -> None:
        client, server, client_ok, server_ok = run_exchange(group, salt, identity, password, password)

        assert client_ok and server_ok
        assert client.state == ClientState.SERVER_EVIDENCE_VERIFIED
        assert server.state == ServerState.SERVER_EVIDENCE_COMPUTED
        assert client.session_key() == server.session_key()

    def test_sha512_digest(self, group: SRPGroup) -> None:
        client, server, client_ok, server_ok = run_exchange(
            group, SALT, IDENTITY, PASSWORD, PASSWORD, digest_factory=SHA512Digest
        )
        assert client_ok and server_ok
        assert client.session_key() == server.session_key()
        assert client.session_key() < 2**512

    def test_wrong_password(self, group: SRPGroup) -> None:
        client, server, client_ok, server_ok = run_exchange(group, SALT, IDENTITY, b"abc124", PASSWORD)

        assert not client_ok
        assert not server_ok
        assert server.state == ServerState.FAILED
        assert not server.client_authenticated

    def test_keys_differ_between_runs(self, group: SRPGroup) -> None:
        first, _, _, _ = run_exchange(group, SALT, IDENTITY, PASSWORD, PASSWORD)
        second, _, _, _ = run_exchange(group, SALT, IDENTITY, PASSWORD, PASSWORD)
        assert first.session_key() != second.session_key()

    def test_server_evidence_from_other_run_rejected(self, group: SRPGroup) -> None:
        verifier = compute_verifier(group.N, group.g, SALT, IDENTITY, PASSWORD)
        _, other_server, _, _ = run_exchange(group, SALT, IDENTITY, PASSWORD, PASSWORD)

        client = ClientSession(group)
        server = ServerSession(group, verifier)
        A = client.generate_credentials(SALT, IDENTITY, PASSWORD)
        B = server.generate_credentials()
        server.compute_secret(A)
        client.compute_secret(B)
        assert server.verify_client_evidence(client.compute_client_evidence())
        server.compute_server_evidence()

        assert other_server.M2 is not None
        assert client.verify_server_evidence(other_server.M2) is False
