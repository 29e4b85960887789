"""
Grid contract and array-backed grids for the groups finder.

Any object exposing ``width``, ``height``, ``value_at`` and ``equivalent`` can be
grouped. :class:`BaseGrid` provides the abstract base for concrete grids and
:class:`ArrayGrid` wraps a 2D numpy array (or nested Python lists) so raw data
can be grouped without writing a grid class.

Preconditions callers must honour for the duration of a grouping pass:
dimensions and in-bounds values must not change, and ``equivalent`` must be
reflexive and symmetric. These are not checked at runtime.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Protocol, runtime_checkable

import numpy as np


# Type alias for clarity. Grids are stored as 2D arrays indexed [y, x].
Array = np.ndarray

__all__ = [
    "Array",
    "Grid",
    "BaseGrid",
    "ArrayGrid",
    "to_array",
    "in_bounds",
]


@runtime_checkable
class Grid(Protocol):
    """Structural contract consumed by the grouping engine."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def value_at(self, x: int, y: int) -> Optional[Any]: ...

    def equivalent(self, a: Any, b: Any) -> bool: ...


class BaseGrid(ABC):
    """Base class for grid providers.

    Subclasses must define the dimensions and ``value_at``. ``value_at`` returns
    ``None`` for holes, which never join a group and block connectivity.
    """

    @property
    @abstractmethod
    def width(self) -> int:
        """Grid width."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Grid height."""

    @abstractmethod
    def value_at(self, x: int, y: int) -> Optional[Any]:
        """Return the value at ``(x, y)`` or ``None`` for holes and out of bounds."""

    def equivalent(self, a: Any, b: Any) -> bool:
        """Return True if two values belong in the same group.

        Defaults to plain equality. Override to merge similar values, for
        example colours within a tolerance.
        """
        return a == b


def in_bounds(grid: Grid, x: int, y: int) -> bool:
    """Return True if ``(x, y)`` lies inside the grid."""
    return 0 <= x < grid.width and 0 <= y < grid.height


def to_array(grid: Any) -> Array:
    """Convert nested Python lists (rows of cells) into a 2D numpy array.

    A flat sequence becomes a single row. Mixed content such as strings and
    ``None`` is kept as an object array.
    """
    a = grid if isinstance(grid, np.ndarray) else np.asarray(grid)
    if a.ndim == 1:
        a = a[None, :]
    if a.ndim != 2:
        raise ValueError(f"grid must be 2-D, got {a.ndim}D shape={a.shape}")
    return a


class ArrayGrid(BaseGrid):
    """Grid backed by a 2D array indexed as ``data[y][x]``.

    Parameters
    ----------
    data : array-like
        Rows of cell values.
    hole : optional
        Cell value treated as a hole in addition to ``None``.
    equivalent : callable, optional
        Replacement for the default equality predicate.
    """

    def __init__(
        self,
        data: Any,
        hole: Optional[Any] = None,
        equivalent: Optional[Callable[[Any, Any], bool]] = None,
    ) -> None:
        self._array = to_array(data)
        self._hole = hole
        self._equivalent = equivalent

    @property
    def array(self) -> Array:
        return self._array

    @property
    def width(self) -> int:
        return int(self._array.shape[1])

    @property
    def height(self) -> int:
        return int(self._array.shape[0])

    def value_at(self, x: int, y: int) -> Optional[Any]:
        if not in_bounds(self, x, y):
            return None
        value = self._array[y, x]
        if isinstance(value, np.generic):
            value = value.item()
        if value is None or (self._hole is not None and value == self._hole):
            return None
        return value

    def equivalent(self, a: Any, b: Any) -> bool:
        if self._equivalent is not None:
            return bool(self._equivalent(a, b))
        return a == b
