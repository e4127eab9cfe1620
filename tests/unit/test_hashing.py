"""
Unit tests for credential hashing
"""

from services.hashing import DIGEST_LENGTH, hash_credential


class TestHashCredential:

    def test_is_deterministic(self):
        assert hash_credential("Quarry#2024") == hash_credential("Quarry#2024")

    def test_digest_length_is_constant(self):
        for plaintext in ["", "a", "x" * 10, "long passphrase " * 100]:
            assert len(hash_credential(plaintext)) == DIGEST_LENGTH

    def test_matches_legacy_sha1_hex(self):
        # Digest already stored for existing users
        assert hash_credential("password") == "5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8"

    def test_digest_is_lowercase_hex(self):
        digest = hash_credential("Mixed Case Input")
        assert digest == digest.lower()
        int(digest, 16)

    def test_different_inputs_differ(self):
        assert hash_credential("a") != hash_credential("b")
