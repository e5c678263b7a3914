"""Database helpers (engine/session export)."""

from .session import Base, Database, create_db_engine

__all__ = ["Base", "Database", "create_db_engine"]
