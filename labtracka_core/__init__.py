"""
LabTracka Core Library
======================
OTP issuance, device trust elevation and the auth flows built on them.
"""

__version__ = "0.1.0"

# Logging
from labtracka_core.logs import setup_logging, mask_value

# Background work
from labtracka_core.background import BackgroundTasks

# Validation
from labtracka_core.validation import (
    any_value_empty,
    is_email,
    is_password_valid,
)

# OTP
from labtracka_core.otp import (
    TimedValue,
    OTPRecord,
    OTPConfig,
    OTPError,
    TokenGenerationError,
    OTPDeliveryError,
    random_code,
    random_hex_token,
    OTPManager,
    OTPRecordSweeper,
)

# Password Hashing
from labtracka_core.password import (
    hash_password,
    verify_password,
    verify_and_upgrade,
    needs_rehash,
)

# Mail
from labtracka_core.mail import (
    MailConfig,
    EmailClient,
    EmailOTPSender,
    MailError,
)

# Auth
from labtracka_core.auth import (
    AuthService,
    AccountStore,
    InMemoryAccountStore,
    AuthError,
)

__all__ = [
    # Logging
    "setup_logging",
    "mask_value",
    # Background work
    "BackgroundTasks",
    # Validation
    "any_value_empty",
    "is_email",
    "is_password_valid",
    # OTP
    "TimedValue",
    "OTPRecord",
    "OTPConfig",
    "OTPError",
    "TokenGenerationError",
    "OTPDeliveryError",
    "random_code",
    "random_hex_token",
    "OTPManager",
    "OTPRecordSweeper",
    # Password Hashing
    "hash_password",
    "verify_password",
    "verify_and_upgrade",
    "needs_rehash",
    # Mail
    "MailConfig",
    "EmailClient",
    "EmailOTPSender",
    "MailError",
    # Auth
    "AuthService",
    "AccountStore",
    "InMemoryAccountStore",
    "AuthError",
]
