"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol (structural typing, no inheritance).

Security:
    - Adaptive cost factor from Settings.bcrypt_rounds (12 in production)
    - Random salt per hash
    - bcrypt only considers the first 72 bytes of a password
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service = BcryptPasswordService(cost_factor=settings.bcrypt_rounds)
        password_hash = password_service.hash_password("correct horse battery")
        password_service.verify_password("correct horse battery", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (log2 rounds). Each +1 doubles
                computation time; 4 is the bcrypt minimum and only suitable
                for tests.

        Raises:
            ValueError: If cost_factor is outside 4..31.
        """
        if not 4 <= cost_factor <= 31:
            msg = "Cost factor must be between 4 and 31"
            raise ValueError(msg)
        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a password in constant time.

        Returns:
            True on match; False on mismatch or malformed hash.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
