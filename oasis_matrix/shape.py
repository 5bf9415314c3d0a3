################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Dimension validation and bounds checking for fixed-shape containers."""

from __future__ import annotations

import numbers
import operator
import typing
from dataclasses import dataclass
from typing import Any

from oasis_matrix.matrix_errors import DimensionError
from oasis_matrix.matrix_errors import MatrixIndexError


def validate_dimension(value: Any, name: str) -> int:
    """Return a dimension as an int, rejecting degenerate values.

    ``typing.Literal`` wrappers such as ``Literal[3]`` are unwrapped so that
    dimensions can be written the same way in annotations and subscriptions.

    Raises:
        DimensionError: If the value is not a positive integer
    """
    if typing.get_origin(value) is typing.Literal:
        literal_args: tuple[Any, ...] = typing.get_args(value)
        if len(literal_args) != 1:
            raise DimensionError(f"{name} must be a single literal value")
        value = literal_args[0]

    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise DimensionError(f"{name} must be an integer, got {value!r}")

    dimension: int = int(value)
    if dimension <= 0:
        raise DimensionError(f"{name} must be greater than 0, got {dimension}")

    return dimension


def check_index(index: Any, bound: int, name: str) -> int:
    """Return a validated index in the half-open range [0, bound).

    Negative indices are out of range; they never wrap around.

    Raises:
        TypeError: If the index is not an integer
        MatrixIndexError: If the index is outside [0, bound)
    """
    try:
        position: int = operator.index(index)
    except TypeError as exc:
        raise TypeError(f"{name} must be an integer, got {index!r}") from exc

    if position < 0 or position >= bound:
        raise MatrixIndexError(f"{name} {position} out of range [0, {bound})")

    return position


@dataclass(frozen=True)
class Shape:
    """Row and column counts of a fixed-shape matrix.

    Attributes:
        rows: Number of rows, at least 1
        cols: Number of columns, at least 1
    """

    rows: int
    cols: int

    def __post_init__(self) -> None:
        """Validate that both dimensions are positive integers."""
        object.__setattr__(self, "rows", validate_dimension(self.rows, "Rows"))
        object.__setattr__(self, "cols", validate_dimension(self.cols, "Cols"))

    def __str__(self) -> str:
        return f"{self.rows}x{self.cols}"

    @property
    def size(self) -> int:
        """Return the number of elements."""
        return self.rows * self.cols

    def transposed(self) -> Shape:
        """Return the shape with rows and columns swapped."""
        return Shape(self.cols, self.rows)

    def as_tuple(self) -> tuple[int, int]:
        """Return the shape as a (rows, cols) tuple."""
        return (self.rows, self.cols)
