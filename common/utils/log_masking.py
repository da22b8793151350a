"""
Logging filter that hides secrets.

The management token is registered once the provider is configured; from then
on any log record containing it is rewritten before a handler sees it.
"""

import logging
from typing import Set

MASK = "***"


class SecretMaskingFilter(logging.Filter):
    """Replace registered secret values with a mask in log records."""

    def __init__(self, name: str = ""):
        super().__init__(name)
        self._secrets: Set[str] = set()

    def add_secret(self, secret: str) -> None:
        if secret:
            self._secrets.add(secret)

    def clear(self) -> None:
        self._secrets.clear()

    def mask(self, text: str) -> str:
        # Longest first so a secret containing another is masked whole
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


_masking_filter = SecretMaskingFilter()


def get_masking_filter() -> SecretMaskingFilter:
    """Return the process-wide masking filter."""
    return _masking_filter


def install_masking_filter(logger: logging.Logger) -> None:
    """Attach the masking filter to every handler of a logger.

    Filters on handlers apply to records propagated from child loggers,
    filters on the logger itself do not.
    """
    for handler in logger.handlers:
        if _masking_filter not in handler.filters:
            handler.addFilter(_masking_filter)
