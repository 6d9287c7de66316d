from .base import StorageGateway
from .database import DatabaseStorage
from .memory import MemoryStorage

__all__ = ["StorageGateway", "DatabaseStorage", "MemoryStorage"]
