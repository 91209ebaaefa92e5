"""Logging filters that scrub client contact details."""

from __future__ import annotations

import logging
import re

_EMAIL_PATTERN = re.compile(r"\b([\w.+-])[\w.+-]*@([\w-]+\.[\w.-]+)\b")
_PHONE_PATTERN = re.compile(r"\+\d[\d\s-]{5,}?(\d{4})\b")


def mask_contacts(text: str) -> str:
    """Mask e-mail addresses and phone numbers, keeping a hint of each."""
    text = _EMAIL_PATTERN.sub(r"\1***@\2", text)
    return _PHONE_PATTERN.sub(r"***-***-\1", text)


class QuoteLogFilter(logging.Filter):
    """Scrub client contact details that travel inside line-item text."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = mask_contacts(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: mask_contacts(value) if isinstance(value, str) else value
                    for key, value in record.args.items()
                }
            else:
                record.args = tuple(
                    mask_contacts(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )
        return True


__all__ = ["QuoteLogFilter", "mask_contacts"]
