import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from postgresdk_core.serialization import (
    encode_vector,
    parse_vector_columns,
    prepare_params,
    to_json,
    to_text,
)


def test_prepare_params_serializes_structures_only():
    when = datetime(2024, 1, 2, tzinfo=timezone.utc)
    prepared = prepare_params([1, "a", None, True, when, {"k": [1, 2]}, ["x"], (1, 2)])
    assert prepared == [1, "a", None, True, when, '{"k": [1, 2]}', '["x"]', "[1, 2]"]


def test_to_json_handles_common_python_types():
    value = {
        "d": date(2024, 5, 1),
        "id": UUID("12345678-1234-5678-1234-567812345678"),
        "price": Decimal("9.99"),
        "tags": {"a"},
    }
    assert to_json(value) == (
        '{"d": "2024-05-01", "id": "12345678-1234-5678-1234-567812345678", '
        '"price": "9.99", "tags": ["a"]}'
    )


def test_to_json_rejects_unknown_objects():
    with pytest.raises(TypeError):
        to_json({"x": object()})


@pytest.mark.parametrize(
    ("value", "text"),
    [(True, "true"), (False, "false"), (None, "null"), (5, "5"), (1.5, "1.5"), ("a", "a")],
)
def test_to_text(value, text):
    assert to_text(value) == text


def test_encode_vector():
    assert encode_vector([1, 2.5, -3]) == "[1.0,2.5,-3.0]"


def test_parse_vector_columns_decodes_text_vectors():
    rows = [{"id": 1, "embedding": "[1,2.5,3]", "name": "[not a vector]"}]
    parsed = parse_vector_columns(rows, ["embedding"])
    assert parsed == [{"id": 1, "embedding": [1, 2.5, 3], "name": "[not a vector]"}]


def test_parse_vector_columns_leaves_decoded_and_missing_values():
    rows = [{"id": 1, "embedding": [1.0]}, {"id": 2, "embedding": None}, {"id": 3}]
    assert parse_vector_columns(rows, ["embedding"]) == rows


def test_parse_vector_columns_without_vector_columns_copies_rows():
    rows = [{"id": 1}]
    parsed = parse_vector_columns(rows, ())
    assert parsed == rows
    assert parsed[0] is not rows[0]


def test_parse_failure_is_logged_and_value_kept(caplog):
    log = logging.getLogger("test.vectors")
    rows = [{"embedding": "[1,2"}]
    with caplog.at_level(logging.ERROR, logger="test.vectors"):
        parsed = parse_vector_columns(rows, ["embedding"], log=log)
    assert parsed == [{"embedding": "[1,2"}]
    assert "Failed to parse vector column 'embedding'" in caplog.text
