"""DatabaseClient: the single collaborator the operations consume."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


@runtime_checkable
class DatabaseClient(Protocol):
    """Execute SQL with ``$N`` positional parameters and return the rows.

    Connection management, transactions, retries and timeouts are the
    implementation's concern.
    """

    async def query(
        self, text: str, params: Sequence[Any] = ()
    ) -> Sequence[Mapping[str, Any]]:
        """Run ``text`` with ``params`` bound to ``$1..$N``."""
        ...
