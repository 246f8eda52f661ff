"""
Email OTP Sender
================
Delivers OTP codes by email. Instances are passed to
``OTPManager.send_otp`` as the ``deliver`` callable.
"""

from labtracka_core.otp.models import TimedValue

from .client import EmailClient

OTP_SUBJECT = "Your LabTracka verification code"

OTP_TEXT_TEMPLATE = (
    "Your verification code is {otp}. It expires in {expiry} minutes.\n"
    "If you did not request this code, you can ignore this email."
)

OTP_HTML_TEMPLATE = (
    "<p>Your verification code is <strong>{otp}</strong>.</p>"
    "<p>It expires in {expiry} minutes.</p>"
    "<p>If you did not request this code, you can ignore this email.</p>"
)


class EmailOTPSender:
    """Formats an OTP email and sends it through an ``EmailClient``."""

    def __init__(self, client: EmailClient):
        self.client = client

    def __call__(self, entity: str, otp: TimedValue) -> None:
        context = {"otp": otp.value, "expiry": otp.ttl_minutes}
        self.client.send(
            to_email=entity,
            subject=OTP_SUBJECT,
            text=OTP_TEXT_TEMPLATE.format(**context),
            html=OTP_HTML_TEMPLATE.format(**context),
        )
