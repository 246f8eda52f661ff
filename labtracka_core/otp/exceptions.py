"""
OTP Exceptions
==============
Hard failures raised by the OTP manager.

Logical verification failures (expired, mismatched, already used) are not
exceptions; they come back as an empty token or False.
"""


class OTPError(Exception):
    """Base class for OTP manager errors."""
    pass


class TokenGenerationError(OTPError):
    """Raised when the secure random source fails."""
    pass


class OTPDeliveryError(OTPError):
    """Raised when the injected sender could not deliver an OTP."""

    def __init__(self, entity: str, cause: Exception):
        self.entity = entity
        self.cause = cause
        super().__init__(f"OTP delivery failed: {cause}")
