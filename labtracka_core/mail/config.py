"""
Mail Configuration
==================
Connection settings for the transactional mail API.
"""

import os
from dataclasses import dataclass


@dataclass
class MailConfig:
    """Configuration for the transactional mail API."""
    api_url: str = os.environ.get("MAIL_API_URL", "https://api.brevo.com/v3/smtp/email")
    api_key: str = os.environ.get("MAIL_API_KEY", "")
    sender_email: str = os.environ.get("MAIL_FROM", "no-reply@labtracka.com")
    sender_name: str = os.environ.get("MAIL_FROM_NAME", "LabTracka")
    timeout: float = float(os.environ.get("MAIL_TIMEOUT_SECONDS", "15"))
    max_attempts: int = 3
    retry_min_wait: float = 1.0
    retry_max_wait: float = 10.0
