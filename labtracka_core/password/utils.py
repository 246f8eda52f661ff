"""
Password Utilities
==================
Helpers for keeping stored hashes current.
"""

from argon2.exceptions import InvalidHashError

from .hasher import get_cached_hasher


def needs_rehash(hash: str) -> bool:
    """
    Check whether a stored hash should be recomputed.

    True for empty or non-Argon2 hashes and for Argon2 hashes made with
    parameters other than the current ones.
    """
    if not hash or not hash.startswith("$argon2"):
        return True
    try:
        return get_cached_hasher().check_needs_rehash(hash)
    except InvalidHashError:
        return True
