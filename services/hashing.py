"""
Credential hashing.

Stored credentials use the legacy unsalted SHA-1 hex digest. It is not a
strong password hash; moving to a salted scheme needs every stored value
re-hashed at once and is tracked separately.
"""

from passlib.hash import hex_sha1

DIGEST_LENGTH = 40


def hash_credential(plaintext: str) -> str:
    """Return the 40-character lowercase hex digest of `plaintext`"""
    return hex_sha1.hash(plaintext)
