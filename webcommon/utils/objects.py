from collections.abc import Sized
from typing import Any


def is_empty(value: Any) -> bool:
    """
    Tell whether a value carries nothing.

    Empty means ``None``, or a ``str``/``bytes``/``Mapping``/sized collection
    of length zero. Numbers (including 0), booleans and model instances are
    never empty.

    Example:
        >>> is_empty(None), is_empty(""), is_empty([]), is_empty({})
        (True, True, True, True)
        >>> is_empty(0), is_empty(False), is_empty(" ")
        (False, False, False)
    """
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_not_empty(value: Any) -> bool:
    return not is_empty(value)
