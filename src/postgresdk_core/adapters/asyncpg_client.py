"""DatabaseClient over an asyncpg connection or pool."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    import asyncpg

logger = logging.getLogger("postgresdk.adapters")


class AsyncpgClient:
    """
    Run statements through ``asyncpg``.

    ``$N`` placeholders are asyncpg's native parameter style, so statements
    pass through unchanged.  With a pool, each statement acquires its own
    connection; with a single connection the caller owns transactions.

    pgvector values travel in their text form (``[1.0,2.0]``), which asyncpg
    handles for types it has no binary codec for.
    """

    def __init__(self, executor: asyncpg.Connection | asyncpg.Pool) -> None:
        self._executor = executor

    async def query(
        self, text: str, params: Sequence[Any] = ()
    ) -> list[dict[str, Any]]:
        logger.debug("asyncpg fetch: %s params=%s", text, params)
        records = await self._executor.fetch(text, *params)
        return [dict(record) for record in records]
