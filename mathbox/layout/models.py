"""Pydantic models for the two-dimensional layout tree."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator


class SpecialKind(str, Enum):
    """Non-character layout constructs."""

    FRACTION = "fraction"
    RADICAL = "radical"
    ABSOLUTE_VALUE = "absolute_value"
    CEILING = "ceiling"
    FLOOR = "floor"
    PARENTHESES = "parentheses"
    BRACKETS = "brackets"
    OVER = "over"
    UNDER = "under"


def container_count(kind: SpecialKind) -> int:
    """Number of owned containers a special of ``kind`` must have."""

    return 2 if kind is SpecialKind.FRACTION else 1


class Character(BaseModel):
    """A single code point."""

    element: Literal["char"] = "char"
    code_point: str = Field(min_length=1, max_length=1)

    @property
    def width(self) -> int:
        return 1


class Special(BaseModel):
    """A construct owning nested containers.

    Index layout: one opening index, each container's content with one
    separator index between consecutive containers, one closing index.
    """

    element: Literal["special"] = "special"
    kind: SpecialKind
    containers: list["Container"]

    @model_validator(mode="after")
    def _validate_container_count(self) -> "Special":
        expected = container_count(self.kind)
        if len(self.containers) != expected:
            raise ValueError(
                f"{self.kind.value} requires {expected} container(s), got {len(self.containers)}"
            )
        return self

    @property
    def width(self) -> int:
        inner = sum(container.width for container in self.containers)
        return inner + len(self.containers) + 1

    def container_offsets(self, index: int) -> list[int]:
        """Base index of each owned container when this element starts at ``index``."""

        offsets: list[int] = []
        cursor = index + 1
        for container in self.containers:
            offsets.append(cursor)
            cursor += container.width + 1
        return offsets


Element = Annotated[Union[Character, Special], Field(discriminator="element")]


class Container(BaseModel):
    """Ordered sequence of layout elements."""

    children: list[Element] = Field(default_factory=list)

    @property
    def width(self) -> int:
        return sum(child.width for child in self.children)


Special.model_rebuild()
Container.model_rebuild()


def load_layout(path: str) -> Container:
    """Load a layout container from a JSON file."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return Container.model_validate(payload)


def dump_layout(container: Container, path: str) -> None:
    """Write a layout container to a JSON file."""

    payload = container.model_dump(mode="json")
    Path(path).write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
