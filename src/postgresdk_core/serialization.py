"""Bind-parameter preparation and row decoding (JSON values, pgvector columns)."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger("postgresdk.serialization")


def _json_default(value: Any) -> Any:
    """Encode values ``json`` does not know natively."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(value: Any) -> str:
    """Serialize a value for a ``jsonb`` parameter."""
    return json.dumps(value, default=_json_default)


def to_text(value: Any) -> str:
    """Stringify a scalar the way it reads back from a ``->>`` accessor."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def prepare_params(params: Sequence[Any]) -> list[Any]:
    """
    Prepare INSERT/UPDATE/primary-key parameters.

    Mapping and list values are JSON-serialized (json/jsonb columns);
    primitives pass through unchanged.
    """
    prepared: list[Any] = []
    for p in params:
        if isinstance(p, (Mapping, list, tuple)):
            prepared.append(to_json(p))
        else:
            prepared.append(p)
    return prepared


def encode_vector(values: Sequence[float]) -> str:
    """pgvector text form, e.g. ``[1.5,2.5]``."""
    return "[" + ",".join(repr(float(v)) for v in values) + "]"


def parse_vector_columns(
    rows: Iterable[Mapping[str, Any]],
    vector_columns: Sequence[str] | None,
    log: logging.Logger | None = None,
) -> list[dict[str, Any]]:
    """
    Decode vector columns returned as text (``"[1.5,2.5]"``) into lists.

    A value that fails to parse is logged and left as-is.
    """
    if not vector_columns:
        return [dict(row) for row in rows]

    log = log or logger
    parsed_rows: list[dict[str, Any]] = []
    for row in rows:
        parsed = dict(row)
        for col in vector_columns:
            raw = parsed.get(col)
            if not isinstance(raw, str):
                continue
            try:
                parsed[col] = json.loads(raw)
            except ValueError as exc:
                log.error("Failed to parse vector column %r: %s", col, exc)
        parsed_rows.append(parsed)
    return parsed_rows
