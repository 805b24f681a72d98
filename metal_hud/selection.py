"""Numbered terminal menu shared by device and application selection."""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, TypeVar

from rich.console import Console

from .errors import SelectionError

T = TypeVar("T")

ReadLine = Callable[[str], str]

_DIGITS = re.compile(r"[0-9]+")


def choose(
    items: Sequence[T],
    *,
    noun: str,
    describe: Callable[[int, T], List[str]],
    summarize: Callable[[T], str],
    console: Console,
    read_line: Optional[ReadLine] = None,
) -> T:
    """Ask the user to pick one of ``items`` by its 1-based position.

    A single item is returned without prompting. Anything other than an
    integer in range fails the selection; there is no second prompt.
    """
    if not items:
        raise SelectionError(f"No {noun}s to select.")

    if len(items) == 1:
        console.print(f"\nOnly one {noun} found, selecting it automatically:")
        console.print(f"   {summarize(items[0])}\n", markup=False, highlight=False)
        return items[0]

    count = len(items)
    console.print(f"\nAvailable {noun}s:\n")
    for index, item in enumerate(items, start=1):
        for line in describe(index, item):
            console.print(line, markup=False, highlight=False)
        console.print()

    reader = read_line or console.input
    try:
        answer = reader(f"Select a {noun} (1-{count}): ")
    except EOFError:
        raise SelectionError(f"No {noun} selected. {_range_hint(count)}") from None

    answer = answer.strip()
    if not _DIGITS.fullmatch(answer):
        raise SelectionError(f"Invalid selection {answer!r}. {_range_hint(count)}")
    selection = int(answer)
    if not 1 <= selection <= count:
        raise SelectionError(f"Invalid selection {selection}. {_range_hint(count)}")

    chosen = items[selection - 1]
    console.print(f"\nSelected {noun}: {summarize(chosen)}\n", markup=False, highlight=False)
    return chosen


def _range_hint(count: int) -> str:
    return f"Enter a number between 1 and {count}."
