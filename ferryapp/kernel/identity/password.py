"""
Password hashing utilities using bcrypt.
"""

import asyncio

import bcrypt

from ferryapp.kernel.errors import HashingError

# Number of rounds for bcrypt hashing (12 is secure default)
BCRYPT_ROUNDS = 12

# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Password hashing service."""

    @staticmethod
    def _truncate_password(password: str) -> bytes:
        """Encode and cut the password to bcrypt's 72-byte limit."""
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    @staticmethod
    def hash(password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string

        Raises:
            HashingError: If bcrypt cannot produce a salt or hash
        """
        pwd_bytes = PasswordHasher._truncate_password(password)
        try:
            salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
            hashed = bcrypt.hashpw(pwd_bytes, salt)
        except (OSError, ValueError) as exc:
            raise HashingError("Error procesando contraseña") from exc
        return hashed.decode("utf-8")

    @staticmethod
    def verify(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored hashed password

        Returns:
            True if password matches, False otherwise (including a
            malformed stored hash)
        """
        pwd_bytes = PasswordHasher._truncate_password(plain_password)
        try:
            return bcrypt.checkpw(pwd_bytes, hashed_password.encode("utf-8"))
        except ValueError:
            return False

    @staticmethod
    def needs_rehash(hashed_password: str) -> bool:
        """
        Check if a password hash was made with a different cost factor.

        Format: $2b$XX$... where XX is the rounds.
        """
        parts = hashed_password.split("$")
        if len(parts) < 3 or not parts[2].isdigit():
            return True
        return int(parts[2]) != BCRYPT_ROUNDS


# Convenience functions
def hash_password(password: str) -> str:
    """Hash a password."""
    return PasswordHasher.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password."""
    return PasswordHasher.verify(plain_password, hashed_password)


async def hash_password_async(password: str) -> str:
    """Hash on a worker thread; bcrypt would otherwise stall the event loop."""
    return await asyncio.to_thread(PasswordHasher.hash, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify on a worker thread."""
    return await asyncio.to_thread(PasswordHasher.verify, plain_password, hashed_password)
