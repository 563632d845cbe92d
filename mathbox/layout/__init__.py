"""Layout tree models and builders."""

from mathbox.layout.models import (
    Character,
    Container,
    Special,
    SpecialKind,
    container_count,
    dump_layout,
    load_layout,
)

__all__ = [
    "Character",
    "Container",
    "Special",
    "SpecialKind",
    "container_count",
    "dump_layout",
    "load_layout",
]
