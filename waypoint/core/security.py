"""Password hashing utilities."""
import uuid

import argon2

# Argon2 hasher for user passwords
ph = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16
)


def get_password_hash(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its Argon2 hash.

    Malformed or non-Argon2 hashes never verify.
    """
    try:
        ph.verify(password_hash, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def new_id() -> str:
    """Mint a new string identifier for persisted records."""
    return str(uuid.uuid4())
