"""Unit tests for the canonical function registry and numeric parser."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mathbox.core.functions import DEFAULT_FUNCTIONS, FunctionRegistry, FunctionSpec, load_function_registry
from mathbox.core.numbers import parse_number


def test_lookup_canonical_and_alias() -> None:
    assert DEFAULT_FUNCTIONS.lookup("sin") == "sin"
    assert DEFAULT_FUNCTIONS.lookup("arcsin") == "asin"
    assert DEFAULT_FUNCTIONS.lookup("cosec") == "csc"


def test_lookup_is_exact() -> None:
    assert DEFAULT_FUNCTIONS.lookup("Sin") is None
    assert DEFAULT_FUNCTIONS.lookup("si") is None
    assert DEFAULT_FUNCTIONS.lookup("") is None


def test_inverse_names() -> None:
    assert DEFAULT_FUNCTIONS.inverse("sin") == "asin"
    assert DEFAULT_FUNCTIONS.inverse("atanh") == "tanh"
    assert DEFAULT_FUNCTIONS.inverse("log") is None
    assert DEFAULT_FUNCTIONS.inverse("nope") is None


def test_first_registration_wins() -> None:
    registry = FunctionRegistry(
        [
            FunctionSpec(canonical_name="first", surface_forms=("f",)),
            FunctionSpec(canonical_name="second", surface_forms=("f", "g")),
        ]
    )
    assert registry.lookup("f") == "first"
    assert registry.lookup("g") == "second"
    assert registry.names() == {"first", "second"}


def test_load_function_registry(tmp_path: Path) -> None:
    path = tmp_path / "functions.json"
    path.write_text(json.dumps({"f": "f", "arcf": "finv"}), encoding="utf-8")

    registry = load_function_registry(str(path))

    assert registry.lookup("f") == "f"
    assert registry.lookup("arcf") == "finv"
    assert registry.lookup("sin") is None


def test_load_function_registry_rejects_bad_entries(tmp_path: Path) -> None:
    path = tmp_path / "functions.json"
    path.write_text(json.dumps({"f": ""}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_function_registry(str(path))

    path.write_text(json.dumps(["f"]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_function_registry(str(path))


def test_parse_number() -> None:
    assert parse_number("12") == 12
    assert type(parse_number("12")) is int
    assert parse_number("5.") == 5.0
    assert type(parse_number("5.")) is float
    assert parse_number(".5") == 0.5
    assert parse_number("007") == 7
