"""Registry mapping word surface forms to canonical function names."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FunctionSpec:
    """Canonical function metadata used by the tokenizer word merge."""

    canonical_name: str
    surface_forms: tuple[str, ...]
    inverse_name: str | None = None


class FunctionRegistry:
    """Deterministic lookup table for function surface forms.

    Lookup is exact and case sensitive: ``Sin`` is not ``sin``. Surfaces
    registered first win when two specs claim the same surface.
    """

    def __init__(self, specs: list[FunctionSpec]) -> None:
        self._specs: tuple[FunctionSpec, ...] = tuple(specs)
        self._by_surface: dict[str, FunctionSpec] = {}
        self._by_name: dict[str, FunctionSpec] = {}

        for spec in self._specs:
            if spec.canonical_name not in self._by_name:
                self._by_name[spec.canonical_name] = spec
            for surface in spec.surface_forms:
                if surface and surface not in self._by_surface:
                    self._by_surface[surface] = spec

    def lookup(self, text: str) -> str | None:
        """Return the canonical name for ``text`` or None if it names no function."""

        spec = self._by_surface.get(text)
        return spec.canonical_name if spec is not None else None

    def canonical(self, name: str) -> FunctionSpec | None:
        """Lookup a spec by canonical name (e.g. \"asin\")."""

        return self._by_name.get(name)

    def inverse(self, name: str) -> str | None:
        spec = self._by_name.get(name)
        return spec.inverse_name if spec is not None else None

    def names(self) -> set[str]:
        return set(self._by_name.keys())


def _spec(name: str, *aliases: str, inverse: str | None = None) -> FunctionSpec:
    return FunctionSpec(canonical_name=name, surface_forms=(name, *aliases), inverse_name=inverse)


DEFAULT_FUNCTIONS = FunctionRegistry(
    [
        _spec("sin", inverse="asin"),
        _spec("cos", inverse="acos"),
        _spec("tan", inverse="atan"),
        _spec("sec", inverse="asec"),
        _spec("csc", "cosec", inverse="acsc"),
        _spec("cot", inverse="acot"),
        _spec("asin", "arcsin", inverse="sin"),
        _spec("acos", "arccos", inverse="cos"),
        _spec("atan", "arctan", inverse="tan"),
        _spec("asec", "arcsec", inverse="sec"),
        _spec("acsc", "arccsc", inverse="csc"),
        _spec("acot", "arccot", inverse="cot"),
        _spec("sinh", inverse="asinh"),
        _spec("cosh", inverse="acosh"),
        _spec("tanh", inverse="atanh"),
        _spec("asinh", "arsinh", "arcsinh", inverse="sinh"),
        _spec("acosh", "arcosh", "arccosh", inverse="cosh"),
        _spec("atanh", "artanh", "arctanh", inverse="tanh"),
        _spec("ln", inverse="exp"),
        _spec("log"),
        _spec("exp", inverse="ln"),
        _spec("sqrt"),
        _spec("abs"),
        _spec("ceil"),
        _spec("floor"),
        _spec("max"),
        _spec("min"),
        _spec("gcd"),
        _spec("lcm"),
    ]
)


def load_function_registry(path: str) -> FunctionRegistry:
    """Load a registry from a JSON object mapping surface form to canonical name."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("function table must be a JSON object")

    grouped: dict[str, list[str]] = {}
    for surface, canonical in payload.items():
        if not isinstance(canonical, str) or not canonical:
            raise ValueError(f"function table entry {surface!r} must map to a non-empty string")
        grouped.setdefault(canonical, []).append(surface)
    return FunctionRegistry(
        [FunctionSpec(canonical_name=name, surface_forms=tuple(forms)) for name, forms in grouped.items()]
    )
