import pytest

from labtracka_core.otp import OTPConfig, OTPManager


class FakeClock:
    """Manually advanced clock for deterministic TTL tests."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSender:
    """OTP sender that keeps every delivered code."""

    def __init__(self):
        self.sent = []

    def __call__(self, entity, otp):
        self.sent.append((entity, otp))

    @property
    def last_code(self) -> str:
        return self.sent[-1][1].value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def otp_config():
    return OTPConfig(otp_ttl=600, resend_cooldown=60, code_length=4, validation_token_bytes=32)


@pytest.fixture
def manager(clock, otp_config):
    return OTPManager(dev_mode=True, config=otp_config, clock=clock)


@pytest.fixture
def random_manager(clock, otp_config):
    """Manager that hands out real random codes."""
    return OTPManager(dev_mode=False, config=otp_config, clock=clock)


@pytest.fixture
def sender():
    return RecordingSender()
