"""DatabaseClient over a SQLAlchemy async engine or connection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("postgresdk.adapters")


class SQLAlchemyClient:
    """
    Run statements through ``AsyncConnection.exec_driver_sql``.

    Requires the asyncpg dialect (``postgresql+asyncpg://``), whose
    ``numeric_dollar`` parameter style accepts ``$N`` placeholders as-is.

    Given an ``AsyncEngine``, every statement runs in its own transaction
    (``engine.begin()``).  Given an ``AsyncConnection``, statements join
    whatever transaction the caller has open.
    """

    def __init__(self, bind: AsyncEngine | AsyncConnection) -> None:
        if not isinstance(bind, (AsyncEngine, AsyncConnection)):
            raise TypeError(
                f"Expected AsyncEngine or AsyncConnection, got {type(bind).__name__}"
            )
        self._bind = bind

    async def query(
        self, text: str, params: Sequence[Any] = ()
    ) -> list[dict[str, Any]]:
        logger.debug("exec_driver_sql: %s params=%s", text, params)
        if isinstance(self._bind, AsyncEngine):
            async with self._bind.begin() as conn:
                return await self._execute(conn, text, params)
        return await self._execute(self._bind, text, params)

    @staticmethod
    async def _execute(
        conn: AsyncConnection, text: str, params: Sequence[Any]
    ) -> list[dict[str, Any]]:
        result = await conn.exec_driver_sql(text, tuple(params))
        if not result.returns_rows:
            return []
        return [dict(row) for row in result.mappings().all()]
