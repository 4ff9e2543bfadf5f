"""
Rate-Limited Delivery
=====================
Bounded segment queue, its dispatcher and the submission entry point.
"""

from .models import DeliveryStats
from .queue import DeliveryQueue
from .messenger import Messenger

__all__ = [
    "DeliveryStats",
    "DeliveryQueue",
    "Messenger",
]
