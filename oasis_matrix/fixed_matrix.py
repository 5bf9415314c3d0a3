################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Dense matrices whose element type and dimensions are part of their class

A matrix class is defined by subscripting the generic ``FixedMatrix`` with an
element type and two positive dimensions:

    Matrix2x3 = FixedMatrix[int, 2, 3]
    a = Matrix2x3.from_rows([[1, 2, 3], [4, 5, 6]])

Subscription validates the parameters once and returns a cached concrete
class, so ``FixedMatrix[int, 2, 3] is FixedMatrix[int, 2, 3]``. Degenerate
dimensions are rejected there, before any value exists.

Operand shapes are part of each value's class. Every binary operation checks
the operand classes at the call boundary and raises ``ShapeMismatchError``
before computing anything, so a wrongly shaped result is never produced.

Elements are stored row-major in a numpy array owned by the matrix. All
arithmetic returns a new matrix and leaves the operands untouched.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Iterable
from typing import Any
from typing import ClassVar
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from oasis_matrix.element_types import ElementTraits
from oasis_matrix.element_types import element_traits
from oasis_matrix.matrix_errors import ElementTypeError
from oasis_matrix.matrix_errors import ShapeMismatchError
from oasis_matrix.matrix_format import format_matrix
from oasis_matrix.shape import Shape
from oasis_matrix.shape import check_index


_LOG: logging.Logger = logging.getLogger(__name__)

# Parameterized classes, keyed by (element type, rows, cols)
_MATRIX_CLASSES: dict[tuple[type, int, int], type[FixedMatrix]] = {}
_MATRIX_CLASSES_LOCK: threading.Lock = threading.Lock()


class FixedMatrix:
    """Fixed-shape dense matrix.

    Parameterized classes carry their element type and dimensions as class
    attributes. The unparameterized ``FixedMatrix`` cannot be instantiated.

    Attributes:
        ELEMENT_TYPE: Scalar class stored in each cell
        ROWS: Number of rows, at least 1
        COLS: Number of columns, at least 1
    """

    ELEMENT_TYPE: ClassVar[Optional[type]] = None
    ROWS: ClassVar[int] = 0
    COLS: ClassVar[int] = 0

    _TRAITS: ClassVar[Optional[ElementTraits]] = None

    # Keep numpy from broadcasting over matrices in mixed expressions
    __array_ufunc__ = None

    def __class_getitem__(cls, params: Any) -> type[FixedMatrix]:
        if cls._TRAITS is not None:
            raise TypeError(f"{cls.__name__} is already parameterized")
        if not isinstance(params, tuple) or len(params) != 3:
            raise TypeError(
                "FixedMatrix takes three parameters: FixedMatrix[T, Rows, Cols]"
            )

        element_type, rows, cols = params
        traits: ElementTraits = element_traits(element_type)
        shape: Shape = Shape(rows, cols)

        return _matrix_class(traits.element_type, shape.rows, shape.cols)

    def __init__(self) -> None:
        """Initialize a matrix with every element set to zero."""
        traits: ElementTraits = type(self)._require_parameterized()
        self._data: NDArray[Any] = traits.zeros((self.ROWS, self.COLS))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]]) -> FixedMatrix:
        """Create a matrix from a nested sequence of rows.

        Raises:
            ShapeMismatchError: If the rows do not form a ROWS x COLS grid
            ElementTypeError: If a value cannot be represented exactly
        """
        traits: ElementTraits = cls._require_parameterized()

        row_list: list[list[Any]] = [list(row) for row in rows]
        if len(row_list) != cls.ROWS:
            raise ShapeMismatchError(
                f"{cls.__name__} needs {cls.ROWS} rows, got {len(row_list)}"
            )

        data: NDArray[Any] = traits.zeros((cls.ROWS, cls.COLS))
        for r, values in enumerate(row_list):
            if len(values) != cls.COLS:
                raise ShapeMismatchError(
                    f"{cls.__name__} row {r} needs {cls.COLS} values, "
                    f"got {len(values)}"
                )
            for c, value in enumerate(values):
                data[r, c] = traits.coerce(value)

        return cls._from_array(data)

    @classmethod
    def _from_array(cls, data: NDArray[Any]) -> FixedMatrix:
        traits: ElementTraits = cls._require_parameterized()
        matrix: FixedMatrix = cls.__new__(cls)
        matrix._data = data.astype(traits.dtype, copy=False)
        return matrix

    @classmethod
    def _require_parameterized(cls) -> ElementTraits:
        if cls._TRAITS is None:
            raise TypeError(
                f"{cls.__name__} must be parameterized before use, "
                "e.g. FixedMatrix[int, 2, 3]"
            )
        return cls._TRAITS

    ############################################################################
    # Shape
    ############################################################################

    @property
    def shape(self) -> Shape:
        """Return the (rows, cols) shape of this matrix."""
        return Shape(self.ROWS, self.COLS)

    @property
    def element_type(self) -> type:
        """Return the element type of this matrix."""
        return self._require_parameterized().element_type

    ############################################################################
    # Element access
    ############################################################################

    def at(self, row: int, col: int) -> Any:
        """Return the element at (row, col).

        Raises:
            MatrixIndexError: If either index is out of range
        """
        r: int = check_index(row, self.ROWS, "Row index")
        c: int = check_index(col, self.COLS, "Column index")
        return self._require_parameterized().unbox(self._data[r, c])

    def set(self, row: int, col: int, value: Any) -> None:
        """Store a value at (row, col).

        Indices and the value are validated before the matrix is modified.

        Raises:
            MatrixIndexError: If either index is out of range
            ElementTypeError: If the value cannot be represented exactly
        """
        r: int = check_index(row, self.ROWS, "Row index")
        c: int = check_index(col, self.COLS, "Column index")
        coerced: Any = self._require_parameterized().coerce(value)
        self._data[r, c] = coerced

    def __getitem__(self, key: tuple[int, int]) -> Any:
        row, col = _split_key(key)
        return self.at(row, col)

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        row, col = _split_key(key)
        self.set(row, col, value)

    def tolist(self) -> list[list[Any]]:
        """Return the elements as a list of rows."""
        traits: ElementTraits = self._require_parameterized()
        return [[traits.unbox(value) for value in row] for row in self._data]

    ############################################################################
    # Arithmetic
    ############################################################################

    def transpose(self) -> FixedMatrix:
        """Return a new COLS x ROWS matrix with rows and columns swapped."""
        result_class: type[FixedMatrix] = FixedMatrix[
            self.element_type, self.COLS, self.ROWS
        ]
        return result_class._from_array(self._data.T.copy())

    def multiply(self, other: FixedMatrix) -> FixedMatrix:
        """Return the matrix product self @ other.

        The other operand must have as many rows as this matrix has columns.
        Each entry accumulates ``self[i, k] * other[k, j]`` over k, starting
        from the element type's zero.

        Raises:
            ShapeMismatchError: If the inner dimensions differ
            ElementTypeError: If the element types differ
        """
        _require_matrix(other, "multiply")
        self._require_same_element_type(other, "multiply")
        if other.ROWS != self.COLS:
            raise ShapeMismatchError(
                f"Cannot multiply {self.shape} by {other.shape}: "
                f"inner dimensions {self.COLS} and {other.ROWS} differ"
            )

        traits: ElementTraits = self._require_parameterized()
        result_class: type[FixedMatrix] = FixedMatrix[
            traits.element_type, self.ROWS, other.COLS
        ]

        accumulator: NDArray[Any] = traits.zeros((self.ROWS, other.COLS))
        for k in range(self.COLS):
            accumulator += np.outer(self._data[:, k], other._data[k, :])

        return result_class._from_array(accumulator)

    def add(self, other: FixedMatrix) -> FixedMatrix:
        """Return the element-wise sum of two matrices of the same class."""
        self._require_same_shape(other, "add")
        return type(self)._from_array(self._data + other._data)

    def subtract(self, other: FixedMatrix) -> FixedMatrix:
        """Return the element-wise difference of two matrices of the same class."""
        self._require_same_shape(other, "subtract")
        return type(self)._from_array(self._data - other._data)

    def scalar_multiply(self, scalar: Any) -> FixedMatrix:
        """Return this matrix with every element multiplied by a scalar.

        Raises:
            ElementTypeError: If the scalar cannot be represented exactly
        """
        if isinstance(scalar, FixedMatrix):
            raise TypeError(
                "scalar_multiply needs a scalar, use @ to multiply matrices"
            )
        coerced: Any = self._require_parameterized().coerce(scalar)
        return type(self)._from_array(self._data * coerced)

    def __matmul__(self, other: Any) -> FixedMatrix:
        if not isinstance(other, FixedMatrix):
            return NotImplemented
        return self.multiply(other)

    def __add__(self, other: Any) -> FixedMatrix:
        if not isinstance(other, FixedMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> FixedMatrix:
        if not isinstance(other, FixedMatrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> FixedMatrix:
        if isinstance(other, FixedMatrix):
            return NotImplemented
        return self.scalar_multiply(other)

    def __rmul__(self, other: Any) -> FixedMatrix:
        if isinstance(other, FixedMatrix):
            return NotImplemented
        return self.scalar_multiply(other)

    def _require_same_element_type(self, other: FixedMatrix, operation: str) -> None:
        if other.element_type is not self.element_type:
            raise ElementTypeError(
                f"Cannot {operation} {type(self).__name__} and "
                f"{type(other).__name__}: element types differ"
            )

    def _require_same_shape(self, other: FixedMatrix, operation: str) -> None:
        _require_matrix(other, operation)
        self._require_same_element_type(other, operation)
        if other.shape != self.shape:
            raise ShapeMismatchError(
                f"Cannot {operation} {self.shape} and {other.shape}: shapes differ"
            )

    ############################################################################
    # Value semantics
    ############################################################################

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedMatrix):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return bool(np.array_equal(self._data, other._data))

    # Mutable values are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> FixedMatrix:
        return type(self)._from_array(self._data.copy())

    def __deepcopy__(self, memo: dict[int, Any]) -> FixedMatrix:
        return type(self)._from_array(copy.deepcopy(self._data, memo))

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_rows({self.tolist()!r})"

    def __str__(self) -> str:
        return format_matrix(self)


def _split_key(key: Any) -> tuple[Any, Any]:
    if not isinstance(key, tuple) or len(key) != 2:
        raise TypeError("Matrix elements are addressed as matrix[row, col]")
    return key[0], key[1]


def _require_matrix(other: Any, operation: str) -> None:
    if not isinstance(other, FixedMatrix):
        raise TypeError(
            f"{operation} needs a FixedMatrix operand, got {type(other).__name__}"
        )


def _matrix_class(element_type: type, rows: int, cols: int) -> type[FixedMatrix]:
    key: tuple[type, int, int] = (element_type, rows, cols)
    with _MATRIX_CLASSES_LOCK:
        matrix_class: Optional[type[FixedMatrix]] = _MATRIX_CLASSES.get(key)
        if matrix_class is None:
            matrix_class = _define_matrix_class(element_type, rows, cols)
            _MATRIX_CLASSES[key] = matrix_class
    return matrix_class


def _define_matrix_class(
    element_type: type, rows: int, cols: int
) -> type[FixedMatrix]:
    traits: ElementTraits = element_traits(element_type)
    name: str = f"FixedMatrix[{traits.name}, {rows}, {cols}]"

    matrix_class: type[FixedMatrix] = type(
        name,
        (FixedMatrix,),
        {
            "__module__": __name__,
            "__qualname__": name,
            "ELEMENT_TYPE": element_type,
            "ROWS": rows,
            "COLS": cols,
            "_TRAITS": traits,
        },
    )

    _LOG.debug("Defined matrix class %s", name)

    return matrix_class
