import logging
from typing import Optional

import httpx
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import MailConfig
from .exceptions import MailError, MailRejectedError, MailServiceUnavailable, MailTimeoutError

logger = logging.getLogger(__name__)


class EmailClient:
    """
    Blocking client for a transactional mail HTTP API.

    Features:
    - Retries on timeouts, connection errors and 5xx responses.
    - Connection pooling (via httpx.Client).
    - Standardized exception mapping.

    Blocking on purpose: OTP delivery runs inside ``OTPManager.send_otp``,
    which callers offload to a worker thread.
    """

    def __init__(
        self,
        config: Optional[MailConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or MailConfig()
        self.client = httpx.Client(
            timeout=self.config.timeout,
            headers={
                "accept": "application/json",
                "content-type": "application/json",
                "api-key": self.config.api_key,
            },
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def _map_exception(self, exc: httpx.HTTPError) -> MailError:
        """Map httpx exceptions to mail exceptions."""
        if isinstance(exc, httpx.TimeoutException):
            return MailTimeoutError("Mail API timed out")
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            text = exc.response.text
            if status >= 500:
                return MailServiceUnavailable("Mail API server error", status_code=status, details=text)
            return MailRejectedError("Mail API rejected message", status_code=status, details=text)
        return MailServiceUnavailable(f"Failed to reach mail API: {exc}")

    def _post(self, payload: dict) -> None:
        try:
            response = self.client.post(self.config.api_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise self._map_exception(e) from e

    def send(
        self,
        to_email: str,
        subject: str,
        text: str,
        html: Optional[str] = None,
    ) -> None:
        """
        Send a single email.

        Raises:
            MailRejectedError: The API refused the message
            MailServiceUnavailable: The API stayed unavailable after retries
        """
        payload = {
            "sender": {"email": self.config.sender_email, "name": self.config.sender_name},
            "to": [{"email": to_email}],
            "subject": subject,
            "textContent": text,
        }
        if html:
            payload["htmlContent"] = html

        retrying = Retrying(
            retry=retry_if_exception_type(MailServiceUnavailable),
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(
                multiplier=1,
                min=self.config.retry_min_wait,
                max=self.config.retry_max_wait,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        retrying(self._post, payload)
