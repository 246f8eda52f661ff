"""
OTP Models
==========
Data models for one-time passcodes and the validation tokens minted from them.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimedValue:
    """A value stamped with the time it was issued and how long it lives."""
    value: str = ""
    issued_at: float = 0.0
    ttl: float = 0.0  # seconds

    def is_expired(self, now: float) -> bool:
        return now - self.issued_at > self.ttl

    @property
    def ttl_minutes(self) -> int:
        return int(self.ttl // 60)


@dataclass
class OTPRecord:
    """Verification state for a single device."""
    entity: str
    otp: TimedValue
    validation_token: TimedValue = field(default_factory=TimedValue)

    @property
    def is_validated(self) -> bool:
        return self.validation_token.value != ""

    def is_dead(self, now: float) -> bool:
        """
        A record is dead once the stage it is in has expired.

        Pending records die with their OTP, validated records die with
        their validation token.
        """
        if self.is_validated:
            return self.validation_token.is_expired(now)
        return self.otp.is_expired(now)
