"""
Mail Delivery
=============
Transactional email client and the OTP email sender built on it.
"""

from .config import MailConfig
from .client import EmailClient
from .otp_sender import EmailOTPSender
from .exceptions import MailError, MailServiceUnavailable, MailTimeoutError, MailRejectedError

__all__ = [
    "MailConfig",
    "EmailClient",
    "EmailOTPSender",
    "MailError",
    "MailServiceUnavailable",
    "MailTimeoutError",
    "MailRejectedError",
]
