"""
Concurrency tests for the OTP manager.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from labtracka_core.otp import OTPManager

WORKERS = 32


def test_concurrent_validation_mints_one_token(sender):
    """Racing validations of the same OTP yield exactly one token."""
    manager = OTPManager(dev_mode=True)
    manager.send_otp("d1", "a@x.com", sender)
    barrier = threading.Barrier(WORKERS)

    def validate():
        barrier.wait()
        return manager.validate_otp("d1", "1234", "a@x.com")

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(lambda _: validate(), range(WORKERS)))

    tokens = [token for token in results if token]
    assert len(tokens) == 1
    assert manager.validate_otp_validation_token("d1", tokens[0], "a@x.com") is True


def test_concurrent_sends_leave_one_record_per_device(sender):
    manager = OTPManager(dev_mode=True)
    barrier = threading.Barrier(WORKERS)

    def send(i):
        barrier.wait()
        manager.send_otp(f"d{i % 4}", f"user{i}@x.com", sender)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(send, range(WORKERS)))

    assert manager.record_count == 4
    assert len(sender.sent) == WORKERS


def test_concurrent_devices_are_independent(sender):
    manager = OTPManager(dev_mode=True)
    devices = [f"device-{i}" for i in range(WORKERS)]
    for device in devices:
        manager.send_otp(device, "a@x.com", sender)
    barrier = threading.Barrier(WORKERS)

    def validate(device):
        barrier.wait()
        return manager.validate_otp(device, "1234", "a@x.com")

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(validate, devices))

    assert all(results)
    assert len(set(results)) == WORKERS
