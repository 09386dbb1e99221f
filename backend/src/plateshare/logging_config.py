"""Logging configuration with sensitive data filtering."""

import logging
import re

# Keeps the first character of the local part: ann@example.com -> a***@example.com
EMAIL_PATTERN = (
    r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,})\b",
    r"\1***@\2",
)


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in logs."""

    SENSITIVE_PATTERNS = [
        # API keys
        (r'api[_-]?key["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', r"api_key=***REDACTED***"),
        # Bearer tokens in Authorization headers
        (r"Bearer\s+([A-Za-z0-9\-._~+/]+=*)", r"Bearer ***REDACTED***"),
        # JWT tokens (starting with eyJ)
        (r"eyJ[A-Za-z0-9\-._~+/]+=*", r"***JWT_REDACTED***"),
        # Stripe secret keys and payment intent client secrets
        (r"\b(sk|rk)_(test|live)_[A-Za-z0-9]+", r"***STRIPE_KEY_REDACTED***"),
        (r"\bpi_[A-Za-z0-9]+_secret_[A-Za-z0-9]+", r"***CLIENT_SECRET_REDACTED***"),
    ]

    def __init__(self, mask_emails: bool = False):
        super().__init__()
        self.patterns = list(self.SENSITIVE_PATTERNS)
        if mask_emails:
            self.patterns.append(EMAIL_PATTERN)

    def _mask(self, value: str) -> str:
        for pattern, replacement in self.patterns:
            value = re.sub(pattern, replacement, value, flags=re.IGNORECASE)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask sensitive data in log messages."""
        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg for arg in record.args
            )

        return True


def setup_logging(settings):
    """
    Setup logging configuration with sensitive data filtering.

    Args:
        settings: Application settings instance. ``log_level`` applies unless
            ``debug`` is set; ``log_mask_emails`` hides user emails.
    """
    log_level = logging.DEBUG if settings.debug else settings.log_level.upper()

    handler = logging.StreamHandler()
    handler.addFilter(SensitiveDataFilter(mask_emails=settings.log_mask_emails))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
        force=True,  # Override any existing configuration
    )
