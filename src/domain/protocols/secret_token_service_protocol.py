"""SecretTokenServiceProtocol - generation and hashing of single-use secrets.

Implementations:
    - SecretTokenService: src/infrastructure/security/secret_token_service.py
"""

from typing import Protocol


class SecretTokenServiceProtocol(Protocol):
    """Protocol for secret token generation."""

    def generate_token(self) -> str:
        """Generate a plaintext token (64-character hex string)."""
        ...

    def hash_token(self, plaintext: str) -> str:
        """Deterministic one-way hash used as the lookup key."""
        ...
