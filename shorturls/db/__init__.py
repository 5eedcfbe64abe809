"""Database module for the URL shortener application."""
from shorturls.db.base import engine, get_engine, create_tables, dispose_engine
from shorturls.db.session import get_db, db_transaction

__all__ = [
    "engine",
    "get_engine",
    "create_tables",
    "dispose_engine",
    "get_db",
    "db_transaction",
]
