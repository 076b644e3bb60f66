"""
Entity store: one async contract, in-memory and relational backings
"""
from reportit.storage.base import ActivityListener, Storage
from reportit.storage.memory import MemStorage
from reportit.storage.sql import SqlStorage

__all__ = ["ActivityListener", "Storage", "MemStorage", "SqlStorage"]
