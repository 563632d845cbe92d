"""Shorthand constructors for layout trees."""

from __future__ import annotations

from mathbox.layout.models import Character, Container, Special, SpecialKind

Item = str | Character | Special | Container


def row(*items: Item) -> Container:
    """Build a container; strings expand to one Character per code point."""

    children: list[Character | Special] = []
    for item in items:
        if isinstance(item, str):
            children.extend(Character(code_point=ch) for ch in item)
        elif isinstance(item, Container):
            children.extend(item.children)
        else:
            children.append(item)
    return Container(children=children)


def _as_container(item: Item) -> Container:
    return item if isinstance(item, Container) else row(item)


def special(kind: SpecialKind, *contents: Item) -> Special:
    return Special(kind=kind, containers=[_as_container(item) for item in contents])


def frac(numerator: Item, denominator: Item) -> Special:
    return special(SpecialKind.FRACTION, numerator, denominator)


def sqrt(content: Item) -> Special:
    return special(SpecialKind.RADICAL, content)


def abs_(content: Item) -> Special:
    return special(SpecialKind.ABSOLUTE_VALUE, content)


def ceil(content: Item) -> Special:
    return special(SpecialKind.CEILING, content)


def floor(content: Item) -> Special:
    return special(SpecialKind.FLOOR, content)


def parens(content: Item) -> Special:
    return special(SpecialKind.PARENTHESES, content)


def brackets(content: Item) -> Special:
    return special(SpecialKind.BRACKETS, content)


def sup(content: Item) -> Special:
    return special(SpecialKind.OVER, content)


def sub(content: Item) -> Special:
    return special(SpecialKind.UNDER, content)
