"""Shared fixtures: a recording fake of the database client."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import pytest

from postgresdk_core import OperationContext


class RecordingClient:
    """DatabaseClient fake that records every statement and replays canned rows.

    ``responses`` is consumed in order; each entry is a list of rows or an
    exception to raise.  When it runs out, an empty result is returned.
    """

    def __init__(self, responses: Sequence[Any] = ()) -> None:
        self.responses: list[Any] = list(responses)
        self.calls: list[tuple[str, list[Any]]] = []

    async def query(
        self, text: str, params: Sequence[Any] = ()
    ) -> list[Mapping[str, Any]]:
        self.calls.append((text, list(params)))
        if not self.responses:
            return []
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def last_sql(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> list[Any]:
        return self.calls[-1][1]


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def make_ctx(client: RecordingClient) -> Callable[..., OperationContext]:
    """Build an ``OperationContext`` for a ``users`` table around ``client``."""

    def _make(**overrides: Any) -> OperationContext:
        options: dict[str, Any] = {
            "client": client,
            "table": "users",
            "pk_columns": ("id",),
        }
        options.update(overrides)
        return OperationContext(**options)

    return _make
