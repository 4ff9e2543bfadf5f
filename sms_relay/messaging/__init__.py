"""
Message Segmentation and Encoding
==================================
GSM-7 measurement, chunking, concatenation headers and submission checks.
"""

from .models import (
    Segment,
    GSM7_EXTENDED,
    MAX_SEGMENTS,
    SINGLE_SEGMENT_LENGTH,
    CONCAT_SEGMENT_LENGTH,
    MAX_MESSAGE_LENGTH,
)
from .udh import ConcatHeader
from .encoding import symbol_size, weighted_length
from .segmentation import chunk_body, split_to_segments
from .validation import (
    MSISDN_PATTERN,
    ORIGINATOR_PATTERN,
    is_msisdn,
    is_valid_originator,
    originator_error,
    recipient_error,
    message_error,
    mask_msisdn,
)

__all__ = [
    # Models
    "Segment",
    "GSM7_EXTENDED",
    "MAX_SEGMENTS",
    "SINGLE_SEGMENT_LENGTH",
    "CONCAT_SEGMENT_LENGTH",
    "MAX_MESSAGE_LENGTH",
    # Header
    "ConcatHeader",
    # Encoding
    "symbol_size",
    "weighted_length",
    # Segmentation
    "chunk_body",
    "split_to_segments",
    # Validation
    "MSISDN_PATTERN",
    "ORIGINATOR_PATTERN",
    "is_msisdn",
    "is_valid_originator",
    "originator_error",
    "recipient_error",
    "message_error",
    "mask_msisdn",
]
