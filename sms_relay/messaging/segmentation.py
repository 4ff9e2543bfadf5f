"""
Message Segmentation
====================
Chunking of message bodies and assembly of ordered, header-tagged segments.
"""

from typing import List

import structlog

from sms_relay.exceptions import MessageTooLong
from .encoding import symbol_size, weighted_length
from .models import (
    Segment,
    MAX_SEGMENTS,
    SINGLE_SEGMENT_LENGTH,
    CONCAT_SEGMENT_LENGTH,
    MAX_MESSAGE_LENGTH,
)
from .udh import ConcatHeader

logger = structlog.get_logger(__name__)


def chunk_body(text: str, capacity: int) -> List[str]:
    """
    Split a body into chunks of at most `capacity` GSM-7 units.

    A chunk may be shorter than `capacity` when the next character
    would overflow it: extended characters are never divided across
    chunks, they move whole into the next one.

    Args:
        text: Message content
        capacity: Units allowed per chunk

    Returns:
        Ordered chunks; empty list for empty text
    """
    if capacity < 1:
        raise ValueError(f"capacity must be at least 1, got {capacity}")

    chunks: List[str] = []
    chunk: List[str] = []
    units = 0

    for char in text:
        size = symbol_size(char)
        if chunk and (units == capacity or units + size > capacity):
            chunks.append("".join(chunk))
            chunk = []
            units = 0

        chunk.append(char)
        units += size

    if chunk:
        chunks.append("".join(chunk))

    return chunks


def split_to_segments(
    originator: str,
    recipient: str,
    body: str,
    reference: int = 0,
) -> List[Segment]:
    """
    Turn a submission into the ordered segments to deliver.

    Bodies up to 160 units go out as one segment without header.
    Longer bodies are chunked at 153 units and every part carries a
    concatenation header (total, sequence). The whole body is checked
    before any segment is built.

    Args:
        originator: Sender MSISDN or alphanumeric ID
        recipient: Recipient MSISDN
        body: Message content
        reference: Concatenation reference shared by all parts

    Returns:
        Segments in ascending sequence order

    Raises:
        MessageTooLong: body does not fit into 9 concatenated parts
    """
    length = weighted_length(body)

    if length <= SINGLE_SEGMENT_LENGTH:
        return [Segment(body=body, originator=originator, recipient=recipient)]

    if length > MAX_MESSAGE_LENGTH:
        raise MessageTooLong(length, MAX_MESSAGE_LENGTH)

    parts = chunk_body(body, CONCAT_SEGMENT_LENGTH)
    total = len(parts)

    # Escaped pairs pushed to the next part can add a part past the unit limit
    if total > MAX_SEGMENTS:
        raise MessageTooLong(length, MAX_SEGMENTS, segments=total)

    logger.debug("message_split", length=length, segments=total, reference=reference)

    return [
        Segment(
            body=part,
            originator=originator,
            recipient=recipient,
            header=ConcatHeader.build(total, sequence, reference),
        )
        for sequence, part in enumerate(parts, start=1)
    ]
