"""
Auth Service
============
OTP-backed auth flows: requesting and validating OTPs, login with new-device
trust elevation, account creation and password reset.

Every privileged flow follows the same pattern: verify the OTP validation
token, perform the change, then delete the device's OTP record. The OTP
manager only supplies the proof; the changes happen here.
"""

import asyncio
import math
import threading
from datetime import datetime, timezone
from typing import Optional, Set, Tuple
import structlog

from labtracka_core.background import BackgroundTasks
from labtracka_core.logs import mask_value
from labtracka_core.otp import OTPDeliveryError, OTPManager, OTPSender, TokenGenerationError
from labtracka_core.password import hash_password, verify_and_upgrade
from labtracka_core.validation import (
    PASSWORD_ERROR_MESSAGE,
    any_value_empty,
    is_email,
    is_password_valid,
)

from .accounts import Account, AccountStore, DuplicateAccountError
from .exceptions import (
    AccountExistsError,
    InvalidCredentialsError,
    InvalidOTPError,
    InvalidRequestError,
    OTPRequiredError,
    OTPResendTooSoonError,
    ServiceError,
)
from .schemas import (
    CreateAccountRequest,
    LoginRequest,
    ResetPasswordRequest,
    SendOTPRequest,
    ValidateOTPRequest,
)

logger = structlog.get_logger(__name__)


class AuthService:
    """
    Auth flows on top of an ``OTPManager`` and an ``AccountStore``.

    By default OTP delivery runs in the background so the request returns
    before the email goes out; pass ``send_in_background=False`` to wait
    for delivery and surface its failures.
    """

    def __init__(
        self,
        otp_manager: OTPManager,
        accounts: AccountStore,
        otp_sender: OTPSender,
        background: Optional[BackgroundTasks] = None,
        send_in_background: bool = True,
    ):
        self.otp_manager = otp_manager
        self.accounts = accounts
        self.otp_sender = otp_sender
        self.background = background or BackgroundTasks()
        self.send_in_background = send_in_background
        # (device_id, receiver) pairs whose delivery has not finished yet.
        self._in_flight: Set[Tuple[str, str]] = set()
        self._in_flight_lock = threading.Lock()

    async def request_otp(self, req: SendOTPRequest) -> None:
        """
        Send an OTP to ``req.receiver`` for ``req.device_id``.

        Raises:
            InvalidRequestError: Missing device id or invalid email
            OTPResendTooSoonError: The resend cooldown has not elapsed
            ServiceError: Inline delivery failed
        """
        if any_value_empty(req.receiver, req.device_id):
            raise InvalidRequestError()

        if not is_email(req.receiver):
            raise InvalidRequestError("a valid email is required to send OTP")

        key = (req.device_id, req.receiver)
        log = logger.bind(device=mask_value(req.device_id), receiver=mask_value(req.receiver))

        # The manager only records the OTP once delivery returns, so pending
        # deliveries are throttled here.
        with self._in_flight_lock:
            if key in self._in_flight:
                log.info("otp_send_in_flight")
                raise OTPResendTooSoonError(
                    int(math.ceil(self.otp_manager.config.resend_cooldown)) or 1
                )

            secs = self.otp_manager.secs_till_can_resend_otp(req.device_id, req.receiver)
            if secs > 0:
                raise OTPResendTooSoonError(secs)

            self._in_flight.add(key)

        if self.send_in_background:
            try:
                task = self.background.run(
                    "otp_manager.send_otp",
                    self.otp_manager.send_otp,
                    req.device_id,
                    req.receiver,
                    self.otp_sender,
                )
            except Exception:
                self._release_in_flight(key)
                raise
            task.add_done_callback(lambda _: self._release_in_flight(key))
            log.info("otp_send_scheduled")
            return

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                self.otp_manager.send_otp,
                req.device_id,
                req.receiver,
                self.otp_sender,
            )
        except (OTPDeliveryError, TokenGenerationError) as e:
            log.error("otp_send_failed", error=str(e), error_type=type(e).__name__)
            raise ServiceError() from e
        finally:
            self._release_in_flight(key)
        log.info("otp_sent")

    def _release_in_flight(self, key: Tuple[str, str]) -> None:
        with self._in_flight_lock:
            self._in_flight.discard(key)

    async def validate_otp(self, req: ValidateOTPRequest) -> str:
        """
        Validate an OTP and return the validation token for later flows.

        Raises:
            InvalidRequestError: Missing fields or invalid email
            InvalidOTPError: The OTP is wrong, expired, used or absent
            ServiceError: Token generation failed
        """
        if any_value_empty(req.receiver, req.device_id, req.otp):
            raise InvalidRequestError()

        if not is_email(req.receiver):
            raise InvalidRequestError("a valid email is required to validate OTP")

        if len(req.otp) != self.otp_manager.config.code_length:
            raise InvalidOTPError()

        try:
            token = self.otp_manager.validate_otp(req.device_id, req.otp, req.receiver)
        except TokenGenerationError as e:
            logger.error("otp_validation_token_generation_failed", error=str(e))
            raise ServiceError() from e

        if not token:
            logger.warning("otp_validation_failed", device=mask_value(req.device_id))
            raise InvalidOTPError()

        logger.info("otp_validated", device=mask_value(req.device_id))
        return token

    def _require_validation_token(self, device_id: str, token: str, email: str) -> None:
        if not self.otp_manager.validate_otp_validation_token(device_id, token, email):
            logger.warning("otp_validation_token_rejected", device=mask_value(device_id))
            raise InvalidOTPError()

    async def login(self, req: LoginRequest) -> Account:
        """
        Log a user in.

        A device other than the account's trusted device needs
        ``email_validation_token``; it then becomes the trusted device.

        Raises:
            InvalidRequestError: Missing or malformed fields
            InvalidOTPError: A validation token was given but is not valid
            InvalidCredentialsError: Unknown email or wrong password
            OTPRequiredError: New device and no validation token
        """
        if any_value_empty(req.device_id, req.email, req.password):
            raise InvalidRequestError()

        if not is_email(req.email) or not is_password_valid(req.password):
            raise InvalidRequestError("invalid email or password")

        trust_new_device = False
        if req.email_validation_token:
            self._require_validation_token(req.device_id, req.email_validation_token, req.email)
            trust_new_device = True

        log = logger.bind(email=mask_value(req.email), device=mask_value(req.device_id))

        account = self.accounts.get_by_email(req.email)
        if account is None:
            log.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError()

        is_valid, new_hash = await verify_and_upgrade(req.password, account.password_hash)
        if not is_valid:
            log.info("login_failed", reason="bad_password")
            raise InvalidCredentialsError()

        if account.device_id != req.device_id:
            if not trust_new_device:
                log.info("login_otp_required")
                raise OTPRequiredError()
            self.accounts.save_trusted_device(account.id, req.device_id)
            account.device_id = req.device_id
            log.info("device_trusted")

        if new_hash:
            self.accounts.update_password_hash(account.email, new_hash)
            account.password_hash = new_hash

        if trust_new_device:
            self.otp_manager.delete_otp_record(req.device_id)

        now = datetime.now(timezone.utc)
        self.accounts.record_login(account.id, now)
        account.last_login_at = now

        log.info("login_succeeded", account_id=account.id)
        return account

    async def create_account(self, req: CreateAccountRequest) -> Account:
        """
        Create an account whose email was proven with an OTP.

        The requesting device becomes the account's trusted device.
        """
        if any_value_empty(req.email, req.device_id, req.password, req.email_validation_token):
            raise InvalidRequestError()

        if not is_email(req.email):
            raise InvalidRequestError("invalid email")

        if not is_password_valid(req.password):
            raise InvalidRequestError(PASSWORD_ERROR_MESSAGE)

        self._require_validation_token(req.device_id, req.email_validation_token, req.email)

        password_hash = await hash_password(req.password)
        try:
            account = self.accounts.create(Account(
                email=req.email,
                password_hash=password_hash,
                device_id=req.device_id,
                name=req.name,
            ))
        except DuplicateAccountError as e:
            raise AccountExistsError() from e

        self.otp_manager.delete_otp_record(req.device_id)

        logger.info("account_created", account_id=account.id, email=mask_value(req.email))
        return account

    async def reset_password(self, req: ResetPasswordRequest) -> None:
        """Reset the password of an account whose email was proven with an OTP."""
        if any_value_empty(req.email, req.device_id, req.new_password, req.email_validation_token):
            raise InvalidRequestError()

        if not is_email(req.email):
            raise InvalidRequestError("invalid email")

        if not is_password_valid(req.new_password):
            raise InvalidRequestError(PASSWORD_ERROR_MESSAGE)

        self._require_validation_token(req.device_id, req.email_validation_token, req.email)

        password_hash = await hash_password(req.new_password)
        if not self.accounts.update_password_hash(req.email, password_hash):
            raise InvalidRequestError("email is not tied to an existing account")

        self.otp_manager.delete_otp_record(req.device_id)

        logger.info("password_reset", email=mask_value(req.email))

    async def shutdown(self) -> None:
        """Wait for pending background OTP deliveries."""
        await self.background.wait()
