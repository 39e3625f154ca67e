"""Tests for the CLI JSON summary documents."""

import orjson

from findstr.cli.json_formatter import format_json_output


def test_single_line_document() -> None:
    output = format_json_output(success=True, command="search", data={"matches": 2})

    assert output.endswith(b"\n")
    assert output.count(b"\n") == 1
    document = orjson.loads(output)
    assert document["success"] is True
    assert document["data"] == {"matches": 2}
    assert document["errors"] == []
    assert "timestamp" in document


def test_errors_force_failure() -> None:
    document = orjson.loads(
        format_json_output(success=True, command="search", errors=["broken"])
    )

    assert document["success"] is False
    assert document["errors"] == ["broken"]
