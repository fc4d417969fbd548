"""The SQLAlchemy adapter against a real database (requires Docker)."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from postgresdk_core import OperationContext, create_record, get_by_pk, list_records
from postgresdk_core.adapters import SQLAlchemyClient

pytestmark = pytest.mark.integration


@pytest.fixture
async def engine(postgres_dsn, connection):
    # ``connection`` creates the users table
    engine = create_async_engine(
        postgres_dsn.replace("postgresql://", "postgresql+asyncpg://", 1)
    )
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_crud_through_engine(engine):
    ctx = OperationContext(
        client=SQLAlchemyClient(engine),
        table="users",
        pk_columns=("id",),
        soft_delete_column="deleted_at",
    )

    created = await create_record(ctx, {"name": "Alice", "status": "active", "age": 40})
    await create_record(ctx, {"name": "Bob", "status": "inactive", "age": 20})
    listed = await list_records(ctx, {"where": {"status": {"$in": ["active"]}}})
    fetched = await get_by_pk(ctx, created.data["id"])

    assert created.status == 201
    assert listed.total == 1
    assert listed.data[0]["name"] == "Alice"
    assert fetched.data["name"] == "Alice"


@pytest.mark.asyncio
async def test_statements_join_caller_transaction(engine):
    async with engine.connect() as conn:
        trans = await conn.begin()
        ctx = OperationContext(
            client=SQLAlchemyClient(conn), table="users", pk_columns=("id",)
        )
        await create_record(ctx, {"name": "Temp"})
        inside = await list_records(ctx, {})
        await trans.rollback()

    ctx = OperationContext(client=SQLAlchemyClient(engine), table="users", pk_columns=("id",))
    after = await list_records(ctx, {})

    assert inside.total == 1
    assert after.total == 0
