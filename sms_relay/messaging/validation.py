"""
Submission Validation
=====================
Originator, recipient and body checks applied before segmentation.
"""

import re
from typing import Optional

from .encoding import weighted_length
from .models import MAX_MESSAGE_LENGTH


# 4-15 digits, no leading zero
MSISDN_PATTERN = re.compile(r"^[1-9][0-9]{3,14}$")

# Alphanumeric sender ID, max 11 characters
ORIGINATOR_PATTERN = re.compile(r"^[a-zA-Z0-9]{1,11}$")


def is_msisdn(value: str) -> bool:
    """Check if value is a 4-15 digit number not starting with 0."""
    return bool(MSISDN_PATTERN.match(value))


def is_valid_originator(value: str) -> bool:
    """Check if value is an MSISDN or an alphanumeric sender ID."""
    return is_msisdn(value) or bool(ORIGINATOR_PATTERN.match(value))


def originator_error(originator: str) -> Optional[str]:
    """Return a static error text for an invalid originator, else None."""
    if not originator:
        return "originator can not be blank"
    if not is_valid_originator(originator):
        return "originator is not an MSISDN or it is too long"
    return None


def recipient_error(recipient: str) -> Optional[str]:
    """Return a static error text for an invalid recipient MSISDN, else None."""
    if not is_msisdn(recipient):
        return "recipient MSISDN is wrong"
    return None


def message_error(message: str) -> Optional[str]:
    """Return a static error text for a blank or oversized body, else None."""
    if not message:
        return "message can not be blank"
    if weighted_length(message) > MAX_MESSAGE_LENGTH:
        return f"message is longer than {MAX_MESSAGE_LENGTH}"
    return None


def mask_msisdn(value: str, visible: int = 4) -> str:
    """
    Mask a phone number for logging.

    Example: "380660000123" -> "********0123"
    """
    if len(value) <= visible:
        return value
    return "*" * (len(value) - visible) + value[-visible:]
