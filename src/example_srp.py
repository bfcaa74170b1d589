import logging

from proton_srp.client import ClientSession
from proton_srp.encoding import padded_bytes
from proton_srp.messages import ClientEvidence, ClientPublicValue, ServerEvidence, ServerPublicValue
from proton_srp.password import generate_salt
from proton_srp.server import ServerSession
from proton_srp.srp_utils import compute_verifier
from proton_srp.types import SRPGroup

MODULUS = (
    "W2z5HBi8RvsfYzZTS7qBaUxxPhsfHJFZpu3Kd6s1JafNrCCH9rfvPLrfuqocxWPgWDH2R8neK7PkNvjxto9TStuY5z7jAzWR"
    "vFWN9cQhAKkdWgy0JY6ywVn22+HFpF4cYesHrqFIKUPDMSSIlWjBVmEJZ/MusD44ZT29xcPrOqeZvwtCffKtGAIjLYPZIEbZ"
    "KnDM1Dm3q2K/xS5h+xdhjnndhsrkwm9U9oyA2wxzSXFL+pdfj2fOdRwuR5nW0J2NFrq3kJjkRmpO/Genq1UW+TEknIWAb6Vz"
    "JJJA244K/H8cnSx2+nSNZO3bbo6Ys228ruV9A8m6DhxmS+bihN3ttQ=="
)

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    group = SRPGroup.from_base64_modulus(MODULUS)
    identity = b"alice@example.com"
    password = b"correct horse battery staple"

    # Enrollment: the server keeps (salt, verifier), never the password
    salt = generate_salt()
    verifier = compute_verifier(group.N, group.g, salt, identity, password)

    client = ClientSession(group)
    server = ServerSession(group, verifier)

    pub_a = ClientPublicValue.from_int(client.generate_credentials(salt, identity, password), group)
    pub_b = ServerPublicValue.from_int(server.generate_credentials(), group)

    server.compute_secret(pub_a.to_int())
    client.compute_secret(pub_b.to_int())

    m1 = ClientEvidence.from_int(client.compute_client_evidence(), group)
    client_ok = server.verify_client_evidence(m1.to_int())

    m2 = ServerEvidence.from_int(server.compute_server_evidence(), group)
    server_ok = client.verify_server_evidence(m2.to_int())

    client_key = client.session_key()
    server_key = server.session_key()

    print(f"Client authenticated: {client_ok}")
    print(f"Server authenticated: {server_ok}")
    print(f"Session keys match: {client_key == server_key}")
    print(f"Session key: {padded_bytes(client_key, group.N).hex()[:64]}...")
