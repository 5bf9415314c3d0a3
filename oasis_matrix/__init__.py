################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fixed-shape numeric matrices and integer vectors."""

from __future__ import annotations

from oasis_matrix.fixed_matrix import FixedMatrix
from oasis_matrix.fixed_vector import FixedVector
from oasis_matrix.matrix_errors import DimensionError
from oasis_matrix.matrix_errors import ElementTypeError
from oasis_matrix.matrix_errors import MatrixError
from oasis_matrix.matrix_errors import MatrixIndexError
from oasis_matrix.matrix_errors import ShapeMismatchError
from oasis_matrix.matrix_format import MatrixFormat
from oasis_matrix.matrix_format import MatrixFormatError
from oasis_matrix.shape import Shape


__all__ = [
    "DimensionError",
    "ElementTypeError",
    "FixedMatrix",
    "FixedVector",
    "MatrixError",
    "MatrixFormat",
    "MatrixFormatError",
    "MatrixIndexError",
    "Shape",
    "ShapeMismatchError",
]
