"""
Database client adapters.

- ``AsyncpgClient``: asyncpg connection or pool
- ``SQLAlchemyClient``: SQLAlchemy ``AsyncEngine`` / ``AsyncConnection``
  (asyncpg dialect)
"""

from .asyncpg_client import AsyncpgClient
from .sqlalchemy_client import SQLAlchemyClient

__all__ = ["AsyncpgClient", "SQLAlchemyClient"]
