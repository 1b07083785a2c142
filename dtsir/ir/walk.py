"""Tree traversal and coverage-gap reporting.

A TODO node marks a foreign construct the parser could not represent. The
walker lets every consumer locate those gaps the same way.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator

from dtsir.ir.models import Type, TypeTag
from dtsir.ir.queries import get_name


@dataclass
class CoverageGap:
    """A TODO node and where it sits in the tree."""

    path: str
    parent: TypeTag | None = None


def children(tp: Type) -> list[Type]:
    """Direct child nodes in declaration order.

    Mapped references are leaves: they name a declaration, they do not own it.
    """
    tag = tp.tag
    if tag == TypeTag.INTERFACE:
        return [*tp.type_parameters, *tp.inherits, *tp.members]
    if tag == TypeTag.ENUM:
        return []
    if tag == TypeTag.PROPERTY:
        return [tp.index, tp.type] if tp.index is not None else [tp.type]
    if tag in (TypeTag.PARAM, TypeTag.ARRAY, TypeTag.VARIABLE, TypeTag.IMPORT):
        return [tp.type]
    if tag == TypeTag.FUNCTION:
        return [*tp.type_parameters, *tp.params, tp.return_type]
    if tag in (TypeTag.UNION, TypeTag.TUPLE, TypeTag.MODULE):
        return list(tp.types)
    if tag == TypeTag.ALIAS:
        return [*tp.type_parameters, tp.type]
    if tag == TypeTag.GENERIC:
        return [tp.type, *tp.type_parameters]
    if tag == TypeTag.FILE:
        return list(tp.modules)
    return []


def _segment(tp: Type, index: int) -> str:
    name = get_name(tp) if tp.tag != TypeTag.GENERIC else ""
    return name or f"{tp.tag.value}[{index}]"


def _walk(root: Type) -> Iterator[tuple[str, Type, TypeTag | None]]:
    stack: list[tuple[str, Type, TypeTag | None]] = [(_segment(root, 0), root, None)]
    while stack:
        path, node, parent = stack.pop()
        yield path, node, parent
        kids = children(node)
        # Pushed in reverse so siblings come off the stack in declaration order
        for i in range(len(kids) - 1, -1, -1):
            stack.append((f"{path}/{_segment(kids[i], i)}", kids[i], node.tag))


def walk(root: Type) -> Iterator[tuple[str, Type]]:
    """Yield ``(path, node)`` pairs in pre-order.

    The path joins each ancestor's name with "/"; unnamed nodes appear as
    ``tag[index]`` within their parent.
    """
    for path, node, _ in _walk(root):
        yield path, node


def find_gaps(root: Type) -> list[CoverageGap]:
    """All TODO nodes under ``root``, in tree order."""
    return [
        CoverageGap(path=path, parent=parent)
        for path, node, parent in _walk(root)
        if node.tag == TypeTag.TODO
    ]


def count_tags(root: Type) -> Counter[TypeTag]:
    return Counter(node.tag for _, node in walk(root))
