"""
OTP Configuration
=================
Timing and sizing knobs for the OTP manager.
"""

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    return float(os.environ.get(name, default))


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


@dataclass
class OTPConfig:
    """Configuration for OTP issuance and validation."""
    otp_ttl: float = _env_float("OTP_TTL_SECONDS", 600)  # 10 minutes
    resend_cooldown: float = _env_float("OTP_RESEND_COOLDOWN_SECONDS", 60)
    code_length: int = _env_int("OTP_CODE_LENGTH", 4)
    validation_token_bytes: int = _env_int("OTP_VALIDATION_TOKEN_BYTES", 32)
    sweep_interval: float = _env_float("OTP_SWEEP_INTERVAL_SECONDS", 300)

    def __post_init__(self):
        if self.otp_ttl <= 0:
            raise ValueError("otp_ttl must be positive")
        if self.resend_cooldown < 0:
            raise ValueError("resend_cooldown cannot be negative")
        if self.code_length < 1:
            raise ValueError("code_length must be at least 1")
        if self.validation_token_bytes < 16:
            raise ValueError("validation_token_bytes must be at least 16")
        if self.sweep_interval <= 0:
            raise ValueError("sweep_interval must be positive")

    @property
    def dev_mode_code(self) -> str:
        """Fixed code handed out in dev mode, e.g. "1234" for 4 digits."""
        digits = "1234567890"
        return (digits * (self.code_length // len(digits) + 1))[:self.code_length]

    @staticmethod
    def dev_mode_from_env() -> bool:
        return os.environ.get("OTP_DEV_MODE", "").lower() in ("1", "true", "yes")
