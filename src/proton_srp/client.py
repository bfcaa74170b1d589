import logging

from proton_srp.errors import SRPError, ensure_state
from proton_srp.hashing import DigestFactory, ExpandedHashDigest
from proton_srp.password import derive_x
from proton_srp.srp_utils import (
    RandomSource,
    compute_k,
    compute_m1,
    compute_m2,
    compute_session_key,
    compute_u,
    evidence_matches,
    generate_private_value,
    secure_randint,
    validate_public_value,
)
from proton_srp.types import ClientState, SRPGroup

logger = logging.getLogger(__name__)


class ClientSession:
    """
    Client side of one SRP run.

        A = generate_credentials(salt, identity, password)   -> send A
        compute_secret(B)                                    <- receive B
        M1 = compute_client_evidence()                       -> send M1
        verify_server_evidence(M2)                           <- receive M2
        K = session_key()

    Methods must be called in this order. A session is single use: after
    any error (or a failed verification) it is FAILED for good.
    """

    def __init__(
        self,
        group: SRPGroup,
        digest_factory: DigestFactory = ExpandedHashDigest,
        random_source: RandomSource = secure_randint,
    ) -> None:
        self.group = group
        self.digest_factory = digest_factory
        self.random_source = random_source
        self._state = ClientState.CREATED

        self._a: int | None = None
        self._x: int | None = None
        self.A: int | None = None
        self.B: int | None = None
        self._S: int | None = None
        self.M1: int | None = None
        self.M2: int | None = None

    @property
    def state(self) -> ClientState:
        return self._state

    def _advance(self, expected: ClientState, operation: str) -> None:
        ensure_state(self._state, expected, operation)
        logger.debug("Client %s in state %s", operation, self._state.name)

    def _fail(self, reason: str) -> None:
        logger.warning("Client session failed: %s", reason)
        self._state = ClientState.FAILED

    def generate_credentials(
        self,
        salt: bytes,
        identity: bytes,
        password: bytes,
        private_value: int | None = None,
    ) -> int:
        """
        Derive x from the password and pick the ephemeral a. Returns A = g^a mod N.
        private_value fixes a instead of drawing it from the random source,
        for reproducing known test vectors.
        """
        self._advance(ClientState.CREATED, "generate_credentials")
        N, g = self.group.N, self.group.g
        try:
            self._x = derive_x(N, salt, identity, password, digest_factory=self.digest_factory)
        except SRPError as e:
            self._fail(str(e))
            raise

        if private_value is None:
            private_value = generate_private_value(N, self.random_source)
        self._a = private_value
        self.A = pow(g, self._a, N)

        self._state = ClientState.CREDENTIALS_GENERATED
        return self.A

    def compute_secret(self, peer_public_value: int) -> int:
        """S = (B - k * g^x) ^ (a + u * x) mod N"""
        self._advance(ClientState.CREDENTIALS_GENERATED, "compute_secret")
        assert self._a is not None and self._x is not None and self.A is not None
        N, g = self.group.N, self.group.g
        try:
            self.B = validate_public_value(N, peer_public_value)
        except SRPError as e:
            self._fail(str(e))
            raise

        k = compute_k(g, N, digest_factory=self.digest_factory)
        u = compute_u(self.A, self.B, N, digest_factory=self.digest_factory)
        base = (self.B - k * pow(g, self._x, N)) % N
        self._S = pow(base, self._a + u * self._x, N)

        self._state = ClientState.SECRET_COMPUTED
        return self._S

    def compute_client_evidence(self) -> int:
        self._advance(ClientState.SECRET_COMPUTED, "compute_client_evidence")
        assert self.A is not None and self.B is not None and self._S is not None
        self.M1 = compute_m1(self.group.N, self.A, self.B, self._S, digest_factory=self.digest_factory)
        self._state = ClientState.CLIENT_EVIDENCE_COMPUTED
        return self.M1

    def verify_server_evidence(self, server_evidence: int) -> bool:
        """
        Check M2 from the server. A mismatch is a normal authentication
        failure: it returns False (and fails the session) instead of raising.
        """
        self._advance(ClientState.CLIENT_EVIDENCE_COMPUTED, "verify_server_evidence")
        assert self.A is not None and self.M1 is not None and self._S is not None
        N = self.group.N
        expected = compute_m2(N, self.A, self.M1, self._S, digest_factory=self.digest_factory)
        if not evidence_matches(N, expected, server_evidence):
            self._fail("server evidence mismatch")
            return False

        self.M2 = server_evidence
        self._state = ClientState.SERVER_EVIDENCE_VERIFIED
        return True

    def session_key(self) -> int:
        ensure_state(self._state, ClientState.SERVER_EVIDENCE_VERIFIED, "session_key")
        assert self._S is not None
        return compute_session_key(self.group.N, self._S, digest_factory=self.digest_factory)
