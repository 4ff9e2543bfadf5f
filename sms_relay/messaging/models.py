"""
Messaging Models
================
Segment limits, GSM-7 extension table and the Segment data model.
"""

from dataclasses import dataclass
from typing import Optional

from .udh import ConcatHeader, MAX_PARTS


# Max concatenated parts accepted by the gateway
MAX_SEGMENTS = MAX_PARTS

# GSM-7 units in a single SMS without concatenation header
SINGLE_SEGMENT_LENGTH = 160

# GSM-7 units left in a part once the concatenation header is added
CONCAT_SEGMENT_LENGTH = 153

MAX_MESSAGE_LENGTH = CONCAT_SEGMENT_LENGTH * MAX_SEGMENTS

# GSM-7 extended characters (escape + symbol, count as 2)
GSM7_EXTENDED = frozenset("\n\\^~[]{}|€")


@dataclass(frozen=True)
class Segment:
    """One unit handed to the gateway."""
    body: str
    originator: str
    recipient: str
    header: Optional[ConcatHeader] = None

    @property
    def header_hex(self) -> Optional[str]:
        if self.header is not None and self.header.is_present:
            return self.header.to_hex()
        return None

    @property
    def sequence(self) -> int:
        return self.header.sequence if self.header is not None else 1

    @property
    def total(self) -> int:
        return self.header.total if self.header is not None else 1
