"""
Secure Random Values
====================
Numeric codes and hex tokens drawn from the OS CSPRNG.
"""

import secrets

from .exceptions import TokenGenerationError


def random_code(length: int) -> str:
    """
    Generate a numeric code of exactly ``length`` digits.

    Args:
        length: Number of digits

    Returns:
        Zero-padded decimal string

    Raises:
        TokenGenerationError: If the entropy source fails
    """
    if length < 1:
        raise ValueError("length must be at least 1")
    try:
        code = secrets.randbelow(10 ** length)
    except OSError as e:
        raise TokenGenerationError(f"random code generation failed: {e}") from e
    return str(code).zfill(length)


def random_bytes(length: int) -> bytes:
    """Return ``length`` bytes from the secure random source."""
    try:
        return secrets.token_bytes(length)
    except OSError as e:
        raise TokenGenerationError(f"random bytes generation failed: {e}") from e


def random_hex_token(byte_length: int) -> str:
    """
    Generate a hex token carrying ``byte_length`` bytes of entropy.

    Validation tokens should use at least 16 bytes (32 hex characters).
    """
    return random_bytes(byte_length).hex()
