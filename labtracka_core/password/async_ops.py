"""
Async Password Hashing
======================
Async-safe password hashing and verification using Argon2id.
"""

import asyncio
from typing import Tuple, Optional

from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from .hasher import get_cached_hasher
from .utils import needs_rehash


async def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: Plain text password to hash

    Returns:
        Argon2id hash string (includes parameters, salt, and hash)
    """
    if not password:
        raise ValueError("Password cannot be empty")

    hasher = get_cached_hasher()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, hasher.hash, password)


async def verify_password(password: str, hash: str) -> bool:
    """
    Verify a password against an Argon2id hash.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    if not password or not hash or not hash.startswith("$argon2"):
        return False

    hasher = get_cached_hasher()

    def _verify() -> bool:
        try:
            return hasher.verify(hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _verify)


async def verify_and_upgrade(
    password: str,
    hash: str,
) -> Tuple[bool, Optional[str]]:
    """
    Verify password and return a new hash if the stored one is outdated.

    This is the function login flows should use.

    Returns:
        Tuple of (is_valid, new_hash_or_none)
    """
    is_valid = await verify_password(password, hash)
    if not is_valid:
        return False, None

    if needs_rehash(hash):
        return True, await hash_password(password)

    return True, None
