"""Integration test configuration with a pgvector PostgreSQL container."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from postgresdk_core import OperationContext, create_record
from postgresdk_core.adapters import AsyncpgClient
from postgresdk_core.serialization import encode_vector

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Generator

USERS_DDL = """
CREATE TABLE users (
    id serial PRIMARY KEY,
    name text NOT NULL,
    email text,
    status text,
    age integer,
    meta jsonb,
    embedding vector(3),
    deleted_at timestamptz
)
"""

USER_COLUMNS = (
    "id",
    "name",
    "email",
    "status",
    "age",
    "meta",
    "embedding",
    "deleted_at",
)


@pytest.fixture(scope="session")
def postgres_dsn() -> Generator[str, None, None]:
    """Start ``pgvector/pgvector:pg16`` once per session; skip without Docker."""
    pytest.importorskip("testcontainers")

    from testcontainers.postgres import PostgresContainer

    container = PostgresContainer("pgvector/pgvector:pg16")
    try:
        container.start()
    except Exception as exc:  # docker daemon unavailable
        pytest.skip(f"PostgreSQL container unavailable: {exc}")

    host = container.get_container_host_ip()
    port = container.get_exposed_port(5432)
    yield (
        f"postgresql://{container.username}:{container.password}"
        f"@{host}:{port}/{container.dbname}"
    )

    container.stop()


@pytest.fixture
async def connection(postgres_dsn: str) -> AsyncGenerator[Any, None]:
    import asyncpg

    conn = await asyncpg.connect(postgres_dsn)
    await conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
    await conn.execute("DROP TABLE IF EXISTS users")
    await conn.execute(USERS_DDL)
    try:
        yield conn
    finally:
        await conn.execute("DROP TABLE IF EXISTS users")
        await conn.close()


@pytest.fixture
def db(connection: Any) -> AsyncpgClient:
    return AsyncpgClient(connection)


@pytest.fixture
def users_ctx(db: AsyncpgClient) -> Callable[..., OperationContext]:
    def _make(**overrides: Any) -> OperationContext:
        options: dict[str, Any] = {
            "client": db,
            "table": "users",
            "pk_columns": ("id",),
            "soft_delete_column": "deleted_at",
            "vector_columns": ("embedding",),
            "all_column_names": USER_COLUMNS,
        }
        options.update(overrides)
        return OperationContext(**options)

    return _make


@pytest.fixture
def seed_users(users_ctx: Callable[..., OperationContext]):
    """Insert rows through ``create_record`` and return the stored rows."""

    async def _seed(*rows: dict[str, Any]) -> list[dict[str, Any]]:
        ctx = users_ctx()
        stored = []
        for row in rows:
            data = dict(row)
            if "embedding" in data:
                data["embedding"] = encode_vector(data["embedding"])
            result = await create_record(ctx, data)
            assert result.status == 201, result.error
            stored.append(result.data)
        return stored

    return _seed
