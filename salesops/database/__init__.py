"""Database package initialization."""
from salesops.config.database import (
    SessionLocal,
    get_db,
    init_db,
    close_db
)

__all__ = [
    "SessionLocal",
    "get_db",
    "init_db",
    "close_db"
]
