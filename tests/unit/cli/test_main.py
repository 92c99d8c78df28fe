"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

import pytest

from cli.main import main, parse_cli_parameter


def test_cli_init_creates_tables(tmp_path, capsys) -> None:
    """CLI init should report created tables and the admin seed."""
    exit_code = main(["--data-root", str(tmp_path), "init"])
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and output == [
        "tables_created=users,leads,products",
        "admin_seeded=true",
    ]


def test_cli_query_prints_rows_and_count(tmp_path, capsys) -> None:
    """CLI query should print JSON rows followed by the row count."""
    main(
        [
            "--data-root",
            str(tmp_path),
            "query",
            "INSERT INTO leads (name, value) VALUES (?, ?)",
            "--param",
            "Acme",
            "--param",
            "1500",
        ]
    )
    capsys.readouterr()

    exit_code = main(["--data-root", str(tmp_path), "query", "SELECT * FROM leads"])
    output = capsys.readouterr().out.strip().splitlines()

    row = json.loads(output[0])
    assert exit_code == 0 and row["name"] == "Acme" and row["value"] == 1500
    assert output[-1] == "row_count=1"


def test_cli_tables_lists_sizes(tmp_path, capsys) -> None:
    """CLI tables should print each table with its size."""
    main(["--data-root", str(tmp_path), "init"])
    capsys.readouterr()

    exit_code = main(["--data-root", str(tmp_path), "tables"])
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and output == ["leads\t0", "products\t0", "users\t1"]


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("42", 42),
        ("true", True),
        ("null", None),
        ('"42"', "42"),
        ("Asha", "Asha"),
        ("[1, 2]", "[1, 2]"),
        ("NaN", "NaN"),
        ("Infinity", "Infinity"),
        ("-Infinity", "-Infinity"),
    ],
)
def test_parse_cli_parameter_decodes_json_scalars(raw_value: str, expected: object) -> None:
    """Parameters should decode JSON scalars and keep other text raw."""
    assert parse_cli_parameter(raw_value) == expected
