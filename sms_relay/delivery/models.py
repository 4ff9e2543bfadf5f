"""
Delivery Models
===============
Counters kept by the delivery queue.
"""

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass
class DeliveryStats:
    """Delivery queue counters since startup."""
    enqueued: int = 0
    sent: int = 0
    failed: int = 0
    rejected: int = 0  # submissions turned away (full or closed queue)
    abandoned: int = 0  # left in the queue at shutdown

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
