"""
OTP / Device Trust
==================
One-time passcodes per device and the validation tokens minted from them.
"""

from .models import TimedValue, OTPRecord
from .config import OTPConfig
from .exceptions import OTPError, TokenGenerationError, OTPDeliveryError
from .secure_random import random_code, random_hex_token, random_bytes
from .store import OTPRecordStore
from .manager import OTPManager, OTPSender
from .sweeper import OTPRecordSweeper

__all__ = [
    # Models
    "TimedValue",
    "OTPRecord",
    "OTPConfig",
    # Errors
    "OTPError",
    "TokenGenerationError",
    "OTPDeliveryError",
    # Secure random
    "random_code",
    "random_hex_token",
    "random_bytes",
    # Manager
    "OTPRecordStore",
    "OTPManager",
    "OTPSender",
    "OTPRecordSweeper",
]
