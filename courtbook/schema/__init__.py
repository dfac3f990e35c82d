"""Database schema and migrations."""

from courtbook.schema.connection import get_db_connection, init_database

__all__ = ["get_db_connection", "init_database"]
