"""Directory store adapters."""

from .memory import InMemoryDirectoryData, InMemoryDirectoryStore
from .sqlalchemy import SqlAlchemyDirectoryStore

__all__ = ["InMemoryDirectoryData", "InMemoryDirectoryStore", "SqlAlchemyDirectoryStore"]
