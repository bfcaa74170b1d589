import logging

from proton_srp.errors import SRPError, ensure_state
from proton_srp.hashing import DigestFactory, ExpandedHashDigest
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
from proton_srp.types import ServerState, SRPGroup

logger = logging.getLogger(__name__)


class ServerSession:
    """
    Server side of one SRP run, holding the verifier v enrolled for the user.

        B = generate_credentials()             -> send B (with the salt)
        compute_secret(A)                      <- receive A
        verify_client_evidence(M1)             <- receive M1
        M2 = compute_server_evidence()         -> send M2
        K = session_key()
    """

    def __init__(
        self,
        group: SRPGroup,
        verifier: int,
        digest_factory: DigestFactory = ExpandedHashDigest,
        random_source: RandomSource = secure_randint,
    ) -> None:
        self.group = group
        self.verifier = verifier
        self.digest_factory = digest_factory
        self.random_source = random_source
        self._state = ServerState.CREATED

        self._b: int | None = None
        self.A: int | None = None
        self.B: int | None = None
        self._S: int | None = None
        self.M1: int | None = None
        self.M2: int | None = None

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def client_authenticated(self) -> bool:
        return self._state in (ServerState.CLIENT_EVIDENCE_VERIFIED, ServerState.SERVER_EVIDENCE_COMPUTED)

    def _advance(self, expected: ServerState, operation: str) -> None:
        ensure_state(self._state, expected, operation)
        logger.debug("Server %s in state %s", operation, self._state.name)

    def _fail(self, reason: str) -> None:
        logger.warning("Server session failed: %s", reason)
        self._state = ServerState.FAILED

    def generate_credentials(self, private_value: int | None = None) -> int:
        """B = (k * v + g^b) mod N"""
        self._advance(ServerState.CREATED, "generate_credentials")
        N, g = self.group.N, self.group.g
        if private_value is None:
            private_value = generate_private_value(N, self.random_source)
        self._b = private_value

        k = compute_k(g, N, digest_factory=self.digest_factory)
        self.B = (k * self.verifier + pow(g, self._b, N)) % N

        self._state = ServerState.CREDENTIALS_GENERATED
        return self.B

    def compute_secret(self, peer_public_value: int) -> int:
        """S = (A * v^u) ^ b mod N"""
        self._advance(ServerState.CREDENTIALS_GENERATED, "compute_secret")
        assert self._b is not None and self.B is not None
        N = self.group.N
        try:
            self.A = validate_public_value(N, peer_public_value)
        except SRPError as e:
            self._fail(str(e))
            raise

        u = compute_u(self.A, self.B, N, digest_factory=self.digest_factory)
        self._S = pow(self.A * pow(self.verifier, u, N) % N, self._b, N)

        self._state = ServerState.SECRET_COMPUTED
        return self._S

    def verify_client_evidence(self, client_evidence: int) -> bool:
        """
        Check M1 from the client. On success the client is authenticated and
        compute_server_evidence() becomes available; a mismatch returns False
        and fails the session.
        """
        self._advance(ServerState.SECRET_COMPUTED, "verify_client_evidence")
        assert self.A is not None and self.B is not None and self._S is not None
        N = self.group.N
        expected = compute_m1(N, self.A, self.B, self._S, digest_factory=self.digest_factory)
        if not evidence_matches(N, expected, client_evidence):
            self._fail("client evidence mismatch")
            return False

        self.M1 = client_evidence
        self._state = ServerState.CLIENT_EVIDENCE_VERIFIED
        return True

    def compute_server_evidence(self) -> int:
        self._advance(ServerState.CLIENT_EVIDENCE_VERIFIED, "compute_server_evidence")
        assert self.A is not None and self.M1 is not None and self._S is not None
        self.M2 = compute_m2(self.group.N, self.A, self.M1, self._S, digest_factory=self.digest_factory)
        self._state = ServerState.SERVER_EVIDENCE_COMPUTED
        return self.M2

    def session_key(self) -> int:
        ensure_state(self._state, ServerState.SERVER_EVIDENCE_COMPUTED, "session_key")
        assert self._S is not None
        return compute_session_key(self.group.N, self._S, digest_factory=self.digest_factory)
