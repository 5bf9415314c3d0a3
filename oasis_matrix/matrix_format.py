################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Text rendering options for matrices and vectors."""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any
from typing import Optional

from oasis_matrix.matrix_errors import MatrixError


if TYPE_CHECKING:
    from oasis_matrix.fixed_matrix import FixedMatrix
    from oasis_matrix.fixed_vector import FixedVector


class MatrixFormatError(MatrixError):
    """Raised when matrix format options are invalid."""


@dataclass(frozen=True)
class MatrixFormat:
    """Options controlling how matrices are rendered as text.

    Attributes:
        column_separator: Text placed between elements of a row
        row_separator: Text placed between rows
        float_precision: Digits after the decimal point for non-integral real
            elements, or None to use each element's own string form
    """

    column_separator: str = " "
    row_separator: str = "\n"
    float_precision: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate the options on construction."""
        self.validate()

    def validate(self) -> None:
        """Validate separator and precision options."""
        if "\n" in self.column_separator:
            raise MatrixFormatError("column_separator must not contain a newline")

        if not self.row_separator:
            raise MatrixFormatError("row_separator must be non-empty")

        if self.float_precision is not None:
            if isinstance(self.float_precision, bool) or not isinstance(
                self.float_precision, int
            ):
                raise MatrixFormatError("float_precision must be an integer")
            if self.float_precision < 0:
                raise MatrixFormatError("float_precision must be non-negative")


DEFAULT_FORMAT: MatrixFormat = MatrixFormat()


def format_element(value: Any, fmt: MatrixFormat = DEFAULT_FORMAT) -> str:
    """Render a single element."""
    if (
        fmt.float_precision is not None
        and isinstance(value, numbers.Real)
        and not isinstance(value, numbers.Integral)
    ):
        return f"{float(value):.{fmt.float_precision}f}"
    return str(value)


def _format_rows(rows: Sequence[Sequence[Any]], fmt: MatrixFormat) -> str:
    return fmt.row_separator.join(
        fmt.column_separator.join(format_element(value, fmt) for value in row)
        for row in rows
    )


def format_matrix(matrix: FixedMatrix, fmt: MatrixFormat = DEFAULT_FORMAT) -> str:
    """Render a matrix as text, one row per line."""
    return _format_rows(matrix.tolist(), fmt)


def format_vector(vector: FixedVector, fmt: MatrixFormat = DEFAULT_FORMAT) -> str:
    """Render a column vector as text, one element per line."""
    return _format_rows([[value] for value in vector.tolist()], fmt)
