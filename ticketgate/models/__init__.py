from .base import Base
from .ticket import Ticket

__all__ = [
    "Base",
    "Ticket",
]
