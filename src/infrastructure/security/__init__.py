"""Security infrastructure adapters.

- Password hashing (bcrypt)
- Secret token generation and hashing (secrets + SHA-256)
"""

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from src.infrastructure.security.secret_token_service import SecretTokenService

__all__ = [
    "BcryptPasswordService",
    "SecretTokenService",
]
