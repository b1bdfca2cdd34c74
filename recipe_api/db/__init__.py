"""Database package: engine, session, base."""

from recipe_api.db.session import create_engine, create_session_maker, get_db

__all__ = ["create_engine", "create_session_maker", "get_db"]
