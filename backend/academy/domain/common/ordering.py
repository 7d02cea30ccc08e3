"""Bounds-checked reordering shared by course items and badge course lists."""
from __future__ import annotations
from typing import List, TypeVar

from academy.domain.common.result import Result, VALIDATION

T = TypeVar("T")


def move_to(items: List[T], from_index: int, to_index: int) -> Result[List[T]]:
    """
    Move the element at from_index so it ends up at to_index, shifting the rest.
    Both indices must address an existing position; the list is left untouched otherwise.
    """
    size = len(items)
    bad = [i for i in (from_index, to_index) if not 0 <= i < size]
    if bad:
        return Result.fail(
            f"Index {bad[0]} is out of range for a list of {size} item(s).",
            code=VALIDATION,
        )
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return Result.ok(list(items))
