"""
Concatenation Header
====================
User Data Header marking a segment as part of an ordered multi-part SMS.

Layout (GSM 03.40 concatenated short message, 8-bit reference):

    05  UDH length
    00  information element: concatenated SMS
    03  information element length
    RR  reference number, shared by all parts of one message
    TT  total number of parts
    SS  sequence number of this part
"""

from dataclasses import dataclass

from sms_relay.exceptions import InvalidHeaderArguments


MAX_PARTS = 9


@dataclass(frozen=True)
class ConcatHeader:
    """
    Concatenation header for one part of a multi-part message.

    A default-constructed header (total=0) is the "unset" header used by
    messages that fit in a single SMS.
    """
    total: int = 0
    sequence: int = 0
    reference: int = 0

    overall_length = 0x05
    element_type = 0x00
    header_length = 0x03

    @classmethod
    def build(cls, total: int, sequence: int, reference: int = 0) -> "ConcatHeader":
        """
        Build a header for part `sequence` of `total`.

        Raises:
            InvalidHeaderArguments: values below 1 or over 9,
                sequence past total, or a reference outside one byte
        """
        if (
            not 1 <= total <= MAX_PARTS
            or not 1 <= sequence <= total
            or not 0 <= reference <= 0xFF
        ):
            raise InvalidHeaderArguments(total, sequence, reference)
        return cls(total=total, sequence=sequence, reference=reference)

    @property
    def is_present(self) -> bool:
        return self.total > 0

    def to_bytes(self) -> bytes:
        return bytes((
            self.overall_length,
            self.element_type,
            self.header_length,
            self.reference,
            self.total,
            self.sequence,
        ))

    def to_hex(self) -> str:
        """Header bytes as lowercase hex, e.g. "050003000503"."""
        return self.to_bytes().hex()
