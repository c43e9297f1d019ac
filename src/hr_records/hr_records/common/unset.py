"""Marker for partial updates.

`UNSET` means "field omitted, keep the stored value"; `None` means "clear it".
"""

from __future__ import annotations

from typing import TypeVar, Union

T = TypeVar("T")


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()

Patch = Union[T, _Unset]


def is_set(value: object) -> bool:
    return value is not UNSET


def merge(value: object, current: T) -> T:
    """Effective value after a patch: the supplied value, else the stored one."""
    return current if value is UNSET else value  # type: ignore[return-value]
