"""
Tests for the mail client and the email OTP sender.
"""

import json

import httpx
import pytest

from labtracka_core.mail import (
    EmailClient,
    EmailOTPSender,
    MailConfig,
    MailRejectedError,
    MailServiceUnavailable,
    MailTimeoutError,
)
from labtracka_core.otp import OTPDeliveryError, OTPManager, TimedValue

API_URL = "https://mail.test/v3/smtp/email"


def make_client(handler, max_attempts=3):
    config = MailConfig(
        api_url=API_URL,
        api_key="test-key",
        sender_email="no-reply@labtracka.test",
        sender_name="LabTracka",
        max_attempts=max_attempts,
        retry_min_wait=0,
        retry_max_wait=0,
    )
    return EmailClient(config, transport=httpx.MockTransport(handler))


class TestEmailClient:

    def test_send_payload(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(201, json={"messageId": "m-1"})

        make_client(handler).send("a@x.com", "Hello", "plain body", html="<p>body</p>")

        assert len(requests) == 1
        request = requests[0]
        assert str(request.url) == API_URL
        assert request.headers["api-key"] == "test-key"
        payload = json.loads(request.content)
        assert payload["to"] == [{"email": "a@x.com"}]
        assert payload["sender"]["email"] == "no-reply@labtracka.test"
        assert payload["subject"] == "Hello"
        assert payload["textContent"] == "plain body"
        assert payload["htmlContent"] == "<p>body</p>"

    def test_retries_server_errors(self):
        """5xx responses are retried until the API recovers."""
        responses = iter([503, 502, 201])
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(next(responses))

        make_client(handler).send("a@x.com", "Hello", "body")

        assert len(calls) == 3

    def test_gives_up_after_max_attempts(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, text="oops")

        with pytest.raises(MailServiceUnavailable) as exc_info:
            make_client(handler, max_attempts=2).send("a@x.com", "Hello", "body")

        assert len(calls) == 2
        assert exc_info.value.status_code == 500

    def test_client_errors_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(400, json={"message": "invalid email"})

        with pytest.raises(MailRejectedError):
            make_client(handler).send("a@x.com", "Hello", "body")

        assert len(calls) == 1

    def test_timeout_mapped(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(MailTimeoutError):
            make_client(handler, max_attempts=1).send("a@x.com", "Hello", "body")


class TestEmailOTPSender:

    def test_renders_code_and_expiry(self):
        payloads = []

        def handler(request):
            payloads.append(json.loads(request.content))
            return httpx.Response(201)

        sender = EmailOTPSender(make_client(handler))
        sender("a@x.com", TimedValue(value="1234", issued_at=0, ttl=600))

        text = payloads[0]["textContent"]
        assert "Your verification code is 1234." in text
        assert "It expires in 10 minutes." in text
        assert "<strong>1234</strong>" in payloads[0]["htmlContent"]

    def test_delivery_failure_surfaces_through_manager(self):
        def handler(request):
            return httpx.Response(400)

        manager = OTPManager(dev_mode=True)
        sender = EmailOTPSender(make_client(handler))

        with pytest.raises(OTPDeliveryError) as exc_info:
            manager.send_otp("d1", "a@x.com", sender)

        assert isinstance(exc_info.value.cause, MailRejectedError)
        assert manager.record_count == 0
