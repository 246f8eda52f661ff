from typing import Optional, Any


class MailError(Exception):
    """Base exception for mail delivery errors."""
    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(f"{message} (Status: {status_code})")


class MailServiceUnavailable(MailError):
    """Raised when the mail API is unreachable or returns a 5xx."""
    pass


class MailTimeoutError(MailServiceUnavailable):
    """Raised specifically on timeouts."""
    pass


class MailRejectedError(MailError):
    """Raised when the mail API refuses the message (4xx)."""
    pass
