"""
Auth Flow Errors
================
Errors raised by the auth flows, each carrying a stable code and a message
safe to show to end users.

Never put internal error details in ``message``; chain the cause instead.
"""

from typing import Optional


class AuthError(Exception):
    """Base class for auth flow errors."""
    code = "auth_error"
    default_message = "request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(AuthError):
    """Missing or malformed request fields."""
    code = "invalid_request"
    default_message = "missing required field(s)"


class InvalidCredentialsError(AuthError):
    code = "invalid_credentials"
    default_message = "incorrect email or password"


class OTPRequiredError(AuthError):
    """Login from an unrecognized device without OTP proof."""
    code = "otp_required"
    default_message = "otp required"


class InvalidOTPError(AuthError):
    """
    Any OTP or validation token failure.

    Absent, expired, wrong and already used all map to this one error.
    """
    code = "invalid_otp"
    default_message = "invalid OTP"


class OTPResendTooSoonError(AuthError):
    code = "otp_resend_too_soon"

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            f"you have previously requested for an OTP, please wait for "
            f"{retry_after} seconds to request another one"
        )


class AccountExistsError(AuthError):
    code = "account_exists"
    default_message = "an account with this email already exists"


class ServiceError(AuthError):
    """Unexpected server-side failure. The cause is chained, not shown."""
    code = "server_error"
    default_message = "something went wrong, please try again later"
