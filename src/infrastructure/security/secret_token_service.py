"""Secret token generation and hashing service.

Token Strategy:
    - 32-byte random hex string (64 characters) from the secrets module
    - Stored only as a SHA-256 hex digest
    - Hash lookup is an indexed equality match; the digest of a 256-bit
      random secret is not brute-forceable, so no per-token salt is needed
"""

import hashlib
import secrets

from src.core.constants import TOKEN_BYTES


class SecretTokenService:
    """Implements SecretTokenServiceProtocol.

    Usage:
        service = SecretTokenService()
        plaintext = service.generate_token()
        token_hash = service.hash_token(plaintext)
    """

    def generate_token(self) -> str:
        """Generate an unguessable token.

        Returns:
            64-character lowercase hex string.

        Example:
            >>> len(SecretTokenService().generate_token())
            64
        """
        return secrets.token_hex(TOKEN_BYTES)

    def hash_token(self, plaintext: str) -> str:
        """SHA-256 hex digest of a presented token (surrounding whitespace ignored)."""
        return hashlib.sha256(plaintext.strip().encode("utf-8")).hexdigest()
