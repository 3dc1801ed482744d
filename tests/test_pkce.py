import base64
import hashlib
import re

from app.oauth.pkce import (
    create_authorization_request_values,
    generate_code_challenge,
    generate_code_verifier,
    generate_state,
)

URL_SAFE_ALPHABET = re.compile(r"^[A-Za-z0-9_-]+$")


class TestState:
    def test_state_is_32_lowercase_hex_chars(self):
        for _ in range(50):
            assert re.fullmatch(r"[0-9a-f]{32}", generate_state())

    def test_state_is_random(self):
        assert len({generate_state() for _ in range(100)}) == 100


class TestCodeVerifier:
    def test_verifier_length_within_rfc_bounds(self):
        for _ in range(50):
            verifier = generate_code_verifier()
            assert 43 <= len(verifier) <= 128

    def test_verifier_uses_url_safe_alphabet_without_padding(self):
        for _ in range(50):
            verifier = generate_code_verifier()
            assert URL_SAFE_ALPHABET.match(verifier)
            assert "+" not in verifier
            assert "/" not in verifier
            assert "=" not in verifier

    def test_verifier_is_random(self):
        assert generate_code_verifier() != generate_code_verifier()


class TestCodeChallenge:
    def test_rfc7636_appendix_b_vector(self):
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        assert generate_code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_challenge_is_deterministic(self):
        verifier = generate_code_verifier()
        assert generate_code_challenge(verifier) == generate_code_challenge(verifier)

    def test_distinct_verifiers_give_distinct_challenges(self):
        assert generate_code_challenge(generate_code_verifier()) != generate_code_challenge(
            generate_code_verifier()
        )

    def test_challenge_is_sha256_base64url_of_verifier(self):
        verifier = generate_code_verifier()
        digest = hashlib.sha256(verifier.encode()).digest()
        expected = base64.urlsafe_b64encode(digest).rstrip(b"=").decode()
        challenge = generate_code_challenge(verifier)
        assert challenge == expected
        assert "=" not in challenge
        assert len(challenge) == 43


def test_authorization_request_values_are_consistent():
    state, verifier, challenge = create_authorization_request_values()
    assert len(state) == 32
    assert challenge == generate_code_challenge(verifier)
