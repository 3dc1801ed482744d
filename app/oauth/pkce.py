"""PKCE (RFC 7636) and anti-CSRF state generation.

All values come from the ``secrets`` module. Encoded values use the URL-safe
base64 alphabet with padding stripped.
"""

import base64
import hashlib
import secrets

STATE_BYTES = 16
CODE_VERIFIER_BYTES = 32
CODE_CHALLENGE_METHOD = "S256"


def _base64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def generate_state() -> str:
    return secrets.token_hex(STATE_BYTES)


def generate_code_verifier() -> str:
    # 32 bytes -> 43 chars, the RFC minimum
    return _base64url_encode(secrets.token_bytes(CODE_VERIFIER_BYTES))


def generate_code_challenge(code_verifier: str) -> str:
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return _base64url_encode(digest)


def create_authorization_request_values() -> tuple[str, str, str]:
    """Return a fresh ``(state, code_verifier, code_challenge)`` triple."""
    code_verifier = generate_code_verifier()
    return generate_state(), code_verifier, generate_code_challenge(code_verifier)
