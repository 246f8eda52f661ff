"""
Auth Flows
==========
Login, account creation and password reset gated by OTP validation tokens.
"""

from .accounts import Account, AccountStore, InMemoryAccountStore, DuplicateAccountError
from .exceptions import (
    AuthError,
    InvalidRequestError,
    InvalidCredentialsError,
    OTPRequiredError,
    InvalidOTPError,
    OTPResendTooSoonError,
    AccountExistsError,
    ServiceError,
)
from .schemas import (
    SendOTPRequest,
    ValidateOTPRequest,
    LoginRequest,
    CreateAccountRequest,
    ResetPasswordRequest,
    parse_request,
)
from .service import AuthService

__all__ = [
    # Accounts
    "Account",
    "AccountStore",
    "InMemoryAccountStore",
    "DuplicateAccountError",
    # Errors
    "AuthError",
    "InvalidRequestError",
    "InvalidCredentialsError",
    "OTPRequiredError",
    "InvalidOTPError",
    "OTPResendTooSoonError",
    "AccountExistsError",
    "ServiceError",
    # Schemas
    "SendOTPRequest",
    "ValidateOTPRequest",
    "LoginRequest",
    "CreateAccountRequest",
    "ResetPasswordRequest",
    "parse_request",
    # Service
    "AuthService",
]
