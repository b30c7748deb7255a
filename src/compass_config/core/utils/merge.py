"""List directive handling for list-valued attributes read from files.

A list value may carry a directive in its first element:
- "+" : append the remaining items to the inherited list (same as no prefix)
- "=" : replace the inherited list with the remaining items
"""
from __future__ import annotations

from typing import Any, List, Tuple

APPEND = "+"
REPLACE = "="


def split_list_directive(values: List[Any]) -> Tuple[bool, List[Any]]:
    """Return ``(replace, items)`` for a list read from a configuration source.

    Example:
        >>> split_list_directive(["=", "a", "b"])
        (True, ['a', 'b'])
        >>> split_list_directive(["+", "a"])
        (False, ['a'])
        >>> split_list_directive(["a"])
        (False, ['a'])
    """
    if not values:
        return False, []
    first = values[0]
    if first == REPLACE:
        return True, list(values[1:])
    if first == APPEND:
        return False, list(values[1:])
    return False, list(values)


__all__ = ["APPEND", "REPLACE", "split_list_directive"]
