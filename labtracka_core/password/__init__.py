"""
Password Hashing
================
Async-safe Argon2id password hashing for account credentials.

Hashing runs in the default thread pool executor so request handlers never
block the event loop on a memory-hard hash.
"""

from .hasher import get_cached_hasher
from .async_ops import hash_password, verify_password, verify_and_upgrade
from .utils import needs_rehash

__all__ = [
    "get_cached_hasher",
    "hash_password",
    "verify_password",
    "verify_and_upgrade",
    "needs_rehash",
]
