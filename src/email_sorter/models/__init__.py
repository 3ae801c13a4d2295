# Data models for the classification engine

from .record import EmailRecord

__all__ = [
    "EmailRecord",
]
