from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from postgresdk_core import DatabaseClient
from postgresdk_core.adapters import AsyncpgClient, SQLAlchemyClient


@pytest.mark.asyncio
async def test_asyncpg_client_spreads_params():
    conn = MagicMock()
    conn.fetch = AsyncMock(return_value=[{"id": 1, "name": "Alice"}])
    client = AsyncpgClient(conn)

    rows = await client.query('SELECT * FROM "users" WHERE "id" = $1', [1])

    conn.fetch.assert_awaited_once_with('SELECT * FROM "users" WHERE "id" = $1', 1)
    assert rows == [{"id": 1, "name": "Alice"}]
    assert isinstance(client, DatabaseClient)


def _mock_result(rows):
    result = MagicMock()
    result.returns_rows = rows is not None
    result.mappings.return_value.all.return_value = rows or []
    return result


@pytest.mark.asyncio
async def test_sqlalchemy_client_on_connection():
    conn = MagicMock(spec=AsyncConnection)
    conn.exec_driver_sql = AsyncMock(return_value=_mock_result([{"count": 2}]))
    client = SQLAlchemyClient(conn)

    rows = await client.query("SELECT COUNT(*) FROM \"users\" WHERE \"a\" = $1", ["x"])

    conn.exec_driver_sql.assert_awaited_once_with(
        "SELECT COUNT(*) FROM \"users\" WHERE \"a\" = $1", ("x",)
    )
    assert rows == [{"count": 2}]


@pytest.mark.asyncio
async def test_sqlalchemy_client_on_engine_uses_one_transaction_per_statement():
    conn = MagicMock(spec=AsyncConnection)
    conn.exec_driver_sql = AsyncMock(return_value=_mock_result(None))
    begin_ctx = MagicMock()
    begin_ctx.__aenter__ = AsyncMock(return_value=conn)
    begin_ctx.__aexit__ = AsyncMock(return_value=False)
    engine = MagicMock(spec=AsyncEngine)
    engine.begin.return_value = begin_ctx

    rows = await SQLAlchemyClient(engine).query("DELETE FROM \"users\"")

    engine.begin.assert_called_once_with()
    conn.exec_driver_sql.assert_awaited_once_with("DELETE FROM \"users\"", ())
    assert rows == []


def test_sqlalchemy_client_rejects_other_objects():
    with pytest.raises(TypeError):
        SQLAlchemyClient(object())
