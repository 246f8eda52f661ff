"""
OTP Manager
===========
Issues one-time passcodes per device, validates them, and mints the
validation tokens that privileged flows (login on a new device, account
creation, password reset) accept as proof of a prior successful OTP check.

The manager does not log. Callers own observability and the translation of
empty/False results into user-facing errors.
"""

import hmac
import math
import time
from dataclasses import replace
from typing import Callable, Optional

from .config import OTPConfig
from .exceptions import OTPDeliveryError
from .models import OTPRecord, TimedValue
from .secure_random import random_code, random_hex_token
from .store import OTPRecordStore

# deliver(entity, otp) sends the code over some channel and raises on failure.
OTPSender = Callable[[str, TimedValue], None]
Clock = Callable[[], float]


class OTPManager:
    """
    In-memory OTP and validation token manager.

    Example:
        manager = OTPManager(dev_mode=False)

        manager.send_otp(device_id, email, email_sender)
        token = manager.validate_otp(device_id, code, email)
        ...
        if manager.validate_otp_validation_token(device_id, token, email):
            do_privileged_change()
            manager.delete_otp_record(device_id)
    """

    def __init__(
        self,
        dev_mode: bool = False,
        config: Optional[OTPConfig] = None,
        clock: Optional[Clock] = None,
    ):
        self.dev_mode = dev_mode
        self.config = config or OTPConfig()
        self._clock = clock or time.time
        self._store = OTPRecordStore()

    def send_otp(self, device_id: str, entity: str, deliver: OTPSender) -> None:
        """
        Generate an OTP for ``entity`` and deliver it with ``deliver``.

        The record is only written after delivery succeeds, so a failed
        send never clobbers an existing record. A successful send replaces
        whatever the device had before, even for another entity.

        Callers should check ``secs_till_can_resend_otp`` first.

        Raises:
            TokenGenerationError: If the random source fails
            OTPDeliveryError: If ``deliver`` raised
        """
        code = random_code(self.config.code_length)
        if self.dev_mode:
            code = self.config.dev_mode_code

        otp = TimedValue(value=code, issued_at=self._clock(), ttl=self.config.otp_ttl)

        try:
            deliver(entity, otp)
        except Exception as e:
            raise OTPDeliveryError(entity, e) from e

        # The TTL window starts once the record is committed.
        self.record_otp_for_device(
            device_id,
            OTPRecord(entity=entity, otp=replace(otp, issued_at=self._clock())),
        )

    def record_otp_for_device(self, device_id: str, record: OTPRecord) -> None:
        """Save ``record`` for the device, overriding any previous record."""
        self._store.put(device_id, record)

    def secs_till_can_resend_otp(self, device_id: str, entity: str) -> int:
        """
        Seconds the caller must wait before another OTP may be sent for
        this device and entity. 0 means a send is allowed right away.

        Pending OTPs for a different entity and already validated records
        do not block; a new send simply overrides them.
        """
        with self._store.transaction() as store:
            now = self._clock()
            record = store.get_live(device_id, now)
            if record is None or record.entity != entity or record.is_validated:
                return 0

            elapsed = now - record.otp.issued_at
            if elapsed >= self.config.resend_cooldown:
                return 0
            return int(math.ceil(self.config.resend_cooldown - elapsed))

    def is_valid_otp(self, device_id: str, code: str, entity: str) -> bool:
        """
        Check ``code`` against the device's pending OTP without consuming it.

        Keeps returning True until the OTP expires or a validation token is
        issued for it.
        """
        with self._store.transaction() as store:
            return self._is_valid_otp(store, device_id, code, entity)

    def _is_valid_otp(
        self,
        store: OTPRecordStore,
        device_id: str,
        code: str,
        entity: str,
    ) -> bool:
        # Caller must hold the store transaction.
        record = store.get_live(device_id, self._clock())
        if record is None or record.is_validated:
            return False
        code_matches = hmac.compare_digest(record.otp.value.encode(), code.encode())
        return code_matches and record.entity == entity

    def validate_otp(self, device_id: str, code: str, entity: str) -> str:
        """
        Validate ``code`` and mint a validation token for the device.

        Returns:
            The validation token, or "" if the OTP is absent, expired,
            wrong, for another entity, or was already used.

        Raises:
            TokenGenerationError: If the random source fails
        """
        with self._store.transaction() as store:
            if not self._is_valid_otp(store, device_id, code, entity):
                return ""

            token = random_hex_token(self.config.validation_token_bytes)
            record = store.get(device_id)
            store.put(device_id, replace(
                record,
                validation_token=TimedValue(
                    value=token,
                    issued_at=self._clock(),
                    ttl=self.config.otp_ttl,
                ),
            ))
            return token

    def validate_otp_validation_token(self, device_id: str, token: str, entity: str) -> bool:
        """
        Check a validation token previously returned by ``validate_otp``.

        The token is not consumed. It stays valid until it expires or the
        caller deletes the record with ``delete_otp_record``.
        """
        if not token:
            return False

        with self._store.transaction() as store:
            record = store.get_live(device_id, self._clock())
            if record is None or not record.is_validated:
                return False
            token_matches = hmac.compare_digest(
                record.validation_token.value.encode(), token.encode()
            )
            return token_matches and record.entity == entity

    def delete_otp_record(self, device_id: str) -> None:
        self._store.delete(device_id)

    def sweep_expired(self) -> int:
        """Drop every dead record. Returns the number removed."""
        return self._store.purge_dead(self._clock())

    @property
    def record_count(self) -> int:
        return len(self._store)
