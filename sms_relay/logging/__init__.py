"""
SMS Relay Logging Module

Structured logging setup shared by the API, the dispatcher and the CLI.
"""

from .structured import setup_logging, get_logger

__all__ = [
    "setup_logging",
    "get_logger",
]
