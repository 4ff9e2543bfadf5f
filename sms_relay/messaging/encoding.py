"""
Text Measurement
================
GSM-7 weighted length of message bodies.
"""

from .models import GSM7_EXTENDED


def symbol_size(char: str) -> int:
    """
    Number of GSM-7 units needed for one character.

    Characters from the extension table are preceded by an escape
    character, so they cost two units.
    """
    if char in GSM7_EXTENDED:
        return 2
    return 1


def weighted_length(text: str) -> int:
    """
    Count the GSM-7 units of a message body (extended chars count as 2).

    Args:
        text: Message content

    Returns:
        Unit count used for length checks and segmentation
    """
    count = 0
    for char in text:
        count += symbol_size(char)
    return count
