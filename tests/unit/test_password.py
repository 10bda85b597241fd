"""Unit tests for password hashing."""

import bcrypt
import pytest

from ferryapp.kernel.errors import HashingError
from ferryapp.kernel.identity import password as password_module
from ferryapp.kernel.identity.password import (
    PasswordHasher,
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_hash_creates_different_hashes(self):
        """Same password should create different hashes (due to salt)."""
        password = "secretpw"
        hash1 = PasswordHasher.hash(password)
        hash2 = PasswordHasher.hash(password)

        assert hash1 != hash2
        assert hash1.startswith("$2b$")  # bcrypt prefix

    def test_verify_correct_password(self):
        hashed = PasswordHasher.hash("secretpw")

        assert PasswordHasher.verify("secretpw", hashed) is True

    def test_verify_wrong_password(self):
        hashed = PasswordHasher.hash("secretpw")

        assert PasswordHasher.verify("secretpx", hashed) is False

    def test_malformed_stored_hash_does_not_verify(self):
        assert PasswordHasher.verify("secretpw", "not-a-bcrypt-hash") is False

    def test_only_first_72_bytes_count(self):
        base = "a" * 72
        hashed = PasswordHasher.hash(base + "tail")

        assert PasswordHasher.verify(base + "other", hashed) is True

    def test_needs_rehash_on_cost_change(self, monkeypatch):
        hashed = PasswordHasher.hash("secretpw")
        assert PasswordHasher.needs_rehash(hashed) is False

        monkeypatch.setattr(password_module, "BCRYPT_ROUNDS", 5)
        assert PasswordHasher.needs_rehash(hashed) is True
        assert PasswordHasher.needs_rehash("garbage") is True

    def test_hash_failure_raises_hashing_error(self, monkeypatch):
        def broken_gensalt(rounds):
            raise ValueError("no salt")

        monkeypatch.setattr(bcrypt, "gensalt", broken_gensalt)

        with pytest.raises(HashingError):
            PasswordHasher.hash("secretpw")

    def test_convenience_functions(self):
        hashed = hash_password("secretpw")

        assert verify_password("secretpw", hashed) is True
        assert verify_password("wrong", hashed) is False


class TestAsyncHashing:
    """Hashing on worker threads."""

    @pytest.mark.asyncio
    async def test_async_round_trip(self):
        hashed = await hash_password_async("secretpw")

        assert await verify_password_async("secretpw", hashed) is True
        assert await verify_password_async("secretpx", hashed) is False
