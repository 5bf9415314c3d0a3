################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for fixed-shape matrices."""

from __future__ import annotations

import copy
import logging
import threading
from concurrent.futures import Future
from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction
from typing import Literal

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_matrix.fixed_matrix import FixedMatrix
from oasis_matrix.fixed_vector import FixedVector
from oasis_matrix.matrix_errors import DimensionError
from oasis_matrix.matrix_errors import ElementTypeError
from oasis_matrix.matrix_errors import MatrixIndexError
from oasis_matrix.matrix_errors import ShapeMismatchError
from oasis_matrix.shape import Shape


def _random_int_matrix(
    rng: np.random.Generator, rows: int, cols: int
) -> FixedMatrix:
    values: NDArray[np.int64] = rng.integers(-10, 10, size=(rows, cols))
    return FixedMatrix[int, rows, cols].from_rows(values.tolist())


def test_parameterized_class_is_cached() -> None:
    """Checks subscription returns the same class for the same parameters."""
    assert FixedMatrix[int, 2, 3] is FixedMatrix[int, 2, 3]
    assert FixedMatrix[int, Literal[2], Literal[3]] is FixedMatrix[int, 2, 3]
    assert FixedMatrix[int, 2, 3] is not FixedMatrix[float, 2, 3]
    assert FixedMatrix[int, 2, 3].__name__ == "FixedMatrix[int, 2, 3]"


def test_class_attributes() -> None:
    """Checks dimensions and element type are class attributes."""
    matrix_class: type[FixedMatrix] = FixedMatrix[float, 4, 5]
    assert matrix_class.ELEMENT_TYPE is float
    assert matrix_class.ROWS == 4
    assert matrix_class.COLS == 5
    matrix: FixedMatrix = matrix_class()
    assert matrix.shape == Shape(4, 5)
    assert matrix.element_type is float


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, 2), (2.5, 2), (True, 2)])
def test_degenerate_dimensions_rejected(rows: object, cols: object) -> None:
    """Checks invalid dimensions are rejected when the class is defined."""
    with pytest.raises(DimensionError):
        FixedMatrix[int, rows, cols]


@pytest.mark.parametrize("element_type", [bool, str, np.bool_, object, 3])
def test_unsupported_element_type_rejected(element_type: object) -> None:
    """Checks non-numeric element types are rejected when the class is defined."""
    with pytest.raises(ElementTypeError):
        FixedMatrix[element_type, 2, 2]


def test_unparameterized_matrix_cannot_be_created() -> None:
    """Checks the generic class needs parameters."""
    with pytest.raises(TypeError):
        FixedMatrix()
    with pytest.raises(TypeError):
        FixedMatrix.from_rows([[1]])
    with pytest.raises(TypeError):
        FixedMatrix[int, 2]
    with pytest.raises(TypeError):
        FixedMatrix[int, 2, 2][int, 2, 2]


def test_default_elements_are_zero() -> None:
    """Checks new matrices are filled with the element type's zero."""
    ints: FixedMatrix = FixedMatrix[int, 2, 3]()
    assert ints.tolist() == [[0, 0, 0], [0, 0, 0]]
    floats: FixedMatrix = FixedMatrix[float, 2, 2]()
    assert floats.tolist() == [[0.0, 0.0], [0.0, 0.0]]
    assert type(floats.at(1, 1)) is float
    fractions: FixedMatrix = FixedMatrix[Fraction, 1, 2]()
    assert fractions.tolist() == [[Fraction(0), Fraction(0)]]


def test_element_access() -> None:
    """Checks reads and writes through every access form."""
    matrix: FixedMatrix = FixedMatrix[int, 2, 3]()
    matrix[0, 1] = 7
    matrix.set(1, 2, -4)
    assert matrix[0, 1] == 7
    assert matrix.at(1, 2) == -4
    assert matrix.tolist() == [[0, 7, 0], [0, 0, -4]]


def test_maximal_index_is_valid() -> None:
    """Checks the last valid index never raises."""
    matrix: FixedMatrix = FixedMatrix[int, 2, 3]()
    matrix[1, 2] = 9
    assert matrix.at(1, 2) == 9


@pytest.mark.parametrize("row, col", [(2, 0), (0, 3), (2, 3), (-1, 0), (0, -1)])
def test_out_of_range_access_raises(row: int, col: int) -> None:
    """Checks out-of-range indices raise on read and write."""
    matrix: FixedMatrix = FixedMatrix[int, 2, 3]()
    with pytest.raises(MatrixIndexError):
        matrix.at(row, col)
    with pytest.raises(IndexError):
        matrix[row, col] = 1
    assert matrix.tolist() == [[0, 0, 0], [0, 0, 0]]


def test_access_needs_two_indices() -> None:
    """Checks elements are addressed with a (row, col) pair."""
    matrix: FixedMatrix = FixedMatrix[int, 2, 2]()
    with pytest.raises(TypeError):
        matrix[0]
    with pytest.raises(TypeError):
        matrix[0, 0, 0]
    with pytest.raises(TypeError):
        matrix[0.5, 0]


def test_assignment_coerces_values() -> None:
    """Checks values are converted exactly or rejected without mutation."""
    matrix: FixedMatrix = FixedMatrix[int, 1, 2]()
    matrix[0, 0] = 3.0
    assert matrix[0, 0] == 3
    assert type(matrix[0, 0]) is int
    with pytest.raises(ElementTypeError):
        matrix[0, 1] = 2.5
    with pytest.raises(ElementTypeError):
        matrix[0, 1] = "2"
    assert matrix.tolist() == [[3, 0]]


def test_from_rows_checks_shape() -> None:
    """Checks from_rows rejects grids of the wrong shape."""
    matrix_class: type[FixedMatrix] = FixedMatrix[int, 2, 2]
    with pytest.raises(ShapeMismatchError):
        matrix_class.from_rows([[1, 2]])
    with pytest.raises(ShapeMismatchError):
        matrix_class.from_rows([[1, 2], [3]])
    with pytest.raises(ElementTypeError):
        matrix_class.from_rows([[1, 2], [3, 4.5]])


def test_transpose() -> None:
    """Checks transpose swaps shape and elements."""
    a: FixedMatrix = FixedMatrix[int, 2, 3].from_rows([[1, 2, 3], [4, 5, 6]])
    t: FixedMatrix = a.transpose()
    assert type(t) is FixedMatrix[int, 3, 2]
    assert t.tolist() == [[1, 4], [2, 5], [3, 6]]
    for i in range(2):
        for j in range(3):
            assert t[j, i] == a[i, j]


def test_transpose_roundtrip() -> None:
    """Checks transposing twice restores the original matrix."""
    rng: np.random.Generator = np.random.default_rng(0)
    for rows, cols in [(1, 1), (1, 4), (3, 2), (5, 5)]:
        a: FixedMatrix = _random_int_matrix(rng, rows, cols)
        assert a.transpose().transpose() == a


def test_multiply_known_product() -> None:
    """Checks the product of a 2x3 and a 3x2 matrix."""
    a: FixedMatrix = FixedMatrix[int, 2, 3].from_rows([[1, 2, 3], [4, 5, 6]])
    b: FixedMatrix = FixedMatrix[int, 3, 2].from_rows([[1, 2], [3, 4], [5, 6]])
    c: FixedMatrix = a @ b
    assert type(c) is FixedMatrix[int, 2, 2]
    assert c.tolist() == [[22, 28], [49, 64]]
    assert a.multiply(b) == c


def test_multiply_is_associative() -> None:
    """Checks (AB)C == A(BC) exactly for integers."""
    rng: np.random.Generator = np.random.default_rng(1)
    a: FixedMatrix = _random_int_matrix(rng, 2, 3)
    b: FixedMatrix = _random_int_matrix(rng, 3, 4)
    c: FixedMatrix = _random_int_matrix(rng, 4, 2)
    assert (a @ b) @ c == a @ (b @ c)


def test_multiply_shape_mismatch() -> None:
    """Checks incompatible inner dimensions are rejected."""
    a: FixedMatrix = FixedMatrix[int, 2, 3]()
    b: FixedMatrix = FixedMatrix[int, 4, 2]()
    with pytest.raises(ShapeMismatchError):
        a @ b
    with pytest.raises(ShapeMismatchError):
        a.multiply(b)


def test_multiply_element_type_mismatch() -> None:
    """Checks operands must share an element type."""
    a: FixedMatrix = FixedMatrix[int, 2, 2]()
    b: FixedMatrix = FixedMatrix[float, 2, 2]()
    with pytest.raises(ElementTypeError):
        a @ b
    with pytest.raises(ElementTypeError):
        a + b


def test_multiply_fractions_exact() -> None:
    """Checks multiplication follows the element type's arithmetic."""
    matrix_class: type[FixedMatrix] = FixedMatrix[Fraction, 2, 2]
    a: FixedMatrix = matrix_class.from_rows(
        [[Fraction(1, 2), Fraction(1, 3)], [Fraction(1, 4), Fraction(1, 5)]]
    )
    identity: FixedMatrix = matrix_class.from_rows([[1, 0], [0, 1]])
    product: FixedMatrix = a @ identity
    assert product == a
    assert all(type(value) is Fraction for row in product.tolist() for value in row)


def test_fixed_width_overflow_wraps() -> None:
    """Checks fixed-width element types keep their own overflow behavior."""
    matrix_class: type[FixedMatrix] = FixedMatrix[np.int32, 1, 1]
    a: FixedMatrix = matrix_class.from_rows([[2**31 - 1]])
    b: FixedMatrix = matrix_class.from_rows([[1]])
    total: FixedMatrix = a + b
    assert total[0, 0] == -(2**31)
    assert type(total[0, 0]) is np.int32


def test_add_and_subtract() -> None:
    """Checks element-wise addition and subtraction."""
    a: FixedMatrix = FixedMatrix[int, 2, 2].from_rows([[1, 2], [3, 4]])
    b: FixedMatrix = FixedMatrix[int, 2, 2].from_rows([[10, 20], [30, 40]])
    assert (a + b).tolist() == [[11, 22], [33, 44]]
    assert (b - a).tolist() == [[9, 18], [27, 36]]
    assert a.add(b) == a + b
    assert b.subtract(a) == b - a


def test_add_is_commutative() -> None:
    """Checks A + B == B + A and A - B == A + B * -1."""
    rng: np.random.Generator = np.random.default_rng(2)
    a: FixedMatrix = _random_int_matrix(rng, 3, 4)
    b: FixedMatrix = _random_int_matrix(rng, 3, 4)
    assert a + b == b + a
    assert a - b == a + b.scalar_multiply(-1)


def test_add_shape_mismatch() -> None:
    """Checks element-wise operations need equal shapes."""
    a: FixedMatrix = FixedMatrix[int, 2, 3]()
    b: FixedMatrix = FixedMatrix[int, 3, 2]()
    with pytest.raises(ShapeMismatchError):
        a + b
    with pytest.raises(ShapeMismatchError):
        a.subtract(b)


def test_scalar_multiply() -> None:
    """Checks scalar multiplication from either side."""
    a: FixedMatrix = FixedMatrix[int, 2, 2].from_rows([[1, -2], [3, 4]])
    assert (a * 3).tolist() == [[3, -6], [9, 12]]
    assert 3 * a == a * 3
    assert a.scalar_multiply(1) == a
    assert a * 0 == FixedMatrix[int, 2, 2]()
    with pytest.raises(ElementTypeError):
        a * 0.5


def test_operators_reject_other_operands() -> None:
    """Checks operators only accept the operands they are defined for."""
    a: FixedMatrix = FixedMatrix[int, 2, 2]()
    with pytest.raises(TypeError):
        a + 1
    with pytest.raises(TypeError):
        a @ 2
    with pytest.raises(TypeError):
        a * a
    with pytest.raises(TypeError):
        a.scalar_multiply(a)
    with pytest.raises(TypeError):
        a.add([[0, 0], [0, 0]])


def test_operations_do_not_mutate_operands() -> None:
    """Checks arithmetic leaves both operands unchanged."""
    a: FixedMatrix = FixedMatrix[int, 2, 2].from_rows([[1, 2], [3, 4]])
    b: FixedMatrix = FixedMatrix[int, 2, 2].from_rows([[5, 6], [7, 8]])
    a @ b
    a + b
    a - b
    a * 2
    a.transpose()
    assert a.tolist() == [[1, 2], [3, 4]]
    assert b.tolist() == [[5, 6], [7, 8]]


def test_copies_are_independent() -> None:
    """Checks copies never share storage."""
    a: FixedMatrix = FixedMatrix[int, 2, 2].from_rows([[1, 2], [3, 4]])
    shallow: FixedMatrix = copy.copy(a)
    deep: FixedMatrix = copy.deepcopy(a)
    shallow[0, 0] = 100
    deep[1, 1] = 200
    assert a.tolist() == [[1, 2], [3, 4]]
    assert shallow == FixedMatrix[int, 2, 2].from_rows([[100, 2], [3, 4]])
    assert deep == FixedMatrix[int, 2, 2].from_rows([[1, 2], [3, 200]])


def test_equality() -> None:
    """Checks equality compares class and elements."""
    assert FixedMatrix[int, 2, 2]() == FixedMatrix[int, 2, 2]()
    assert FixedMatrix[int, 2, 2]() != FixedMatrix[float, 2, 2]()
    assert FixedMatrix[int, 1, 4]() != FixedMatrix[int, 4, 1]()
    assert FixedMatrix[int, 1, 1]() != 0
    with pytest.raises(TypeError):
        hash(FixedMatrix[int, 1, 1]())


def test_column_matrix_is_not_a_vector() -> None:
    """Checks an N x 1 integer matrix stays a general matrix."""
    column: FixedMatrix = FixedMatrix[int, 3, 1].from_rows([[1], [2], [3]])
    assert not isinstance(column, FixedVector)
    assert column[2, 0] == 3
    assert column.transpose().tolist() == [[1, 2, 3]]


def test_repr_and_str() -> None:
    """Checks text forms name the class and list the rows."""
    a: FixedMatrix = FixedMatrix[int, 2, 2].from_rows([[1, 2], [3, 4]])
    assert repr(a) == "FixedMatrix[int, 2, 2].from_rows([[1, 2], [3, 4]])"
    assert str(a) == "1 2\n3 4"


def test_class_definition_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Checks defining a new matrix class logs at debug level."""
    caplog.set_level(logging.DEBUG, logger="oasis_matrix.fixed_matrix")
    FixedMatrix[int, 13, 17]
    assert "FixedMatrix[int, 13, 17]" in caplog.text


def test_narrow_float_assignment_is_exact() -> None:
    """Checks float32 matrices reject values they would round."""
    matrix: FixedMatrix = FixedMatrix[np.float32, 1, 2]()
    matrix[0, 0] = 0.5
    with pytest.raises(ElementTypeError):
        matrix[0, 1] = 0.1
    with pytest.raises(ElementTypeError):
        matrix[0, 1] = 2**24 + 1
    with pytest.raises(ElementTypeError):
        matrix.scalar_multiply(0.1)
    assert matrix.tolist() == [[0.5, 0.0]]


def test_array_assignment_rejected() -> None:
    """Checks an array cannot be stored in a single element."""
    matrix: FixedMatrix = FixedMatrix[np.int32, 1, 1]()
    with pytest.raises(ElementTypeError):
        matrix[0, 0] = np.array([1, 2])
    assert matrix[0, 0] == 0


def test_concurrent_definitions_share_one_class() -> None:
    """Checks threads defining the same matrix class get one class object."""
    workers: int = 8
    barrier: threading.Barrier = threading.Barrier(workers)

    def define() -> type[FixedMatrix]:
        barrier.wait()
        return FixedMatrix[int, 19, 23]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures: list[Future[type[FixedMatrix]]] = [
            executor.submit(define) for _ in range(workers)
        ]
        classes: list[type[FixedMatrix]] = [future.result() for future in futures]

    assert all(matrix_class is classes[0] for matrix_class in classes)
    assert classes[0]() == FixedMatrix[int, 19, 23]()
