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
Entry point demonstrating matrix multiplication and the vector norm
"""

import argparse
import logging
from typing import Optional

from oasis_matrix.fixed_matrix import FixedMatrix
from oasis_matrix.fixed_vector import FixedVector
from oasis_matrix.matrix_format import MatrixFormat
from oasis_matrix.matrix_format import format_element
from oasis_matrix.matrix_format import format_matrix


_LOG: logging.Logger = logging.getLogger(__name__)


################################################################################
# Entry point
################################################################################


def _parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Multiply two integer matrices and print a vector norm"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for the matrix library",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=None,
        help="Digits printed after the decimal point of the norm",
    )
    options = parser.parse_args(args=args)
    if options.precision is not None and options.precision < 0:
        parser.error("--precision must be non-negative")
    return options


def main(args: Optional[list[str]] = None) -> None:
    options = _parse_args(args=args)

    logging.basicConfig(level=getattr(logging, options.log_level))

    fmt: MatrixFormat = MatrixFormat(float_precision=options.precision)

    a: FixedMatrix = FixedMatrix[int, 2, 3].from_rows([[1, 2, 3], [4, 5, 6]])
    b: FixedMatrix = FixedMatrix[int, 3, 2].from_rows([[1, 2], [3, 4], [5, 6]])

    c: FixedMatrix = a @ b
    _LOG.info("Multiplied %s by %s", a.shape, b.shape)

    print("Result of matrix multiplication:")
    print(format_matrix(c, fmt))

    vector: FixedVector = FixedVector[3].from_values([1, 2, 3])

    print(f"Norm of the vector: {format_element(vector.norm(), fmt)}")


if __name__ == "__main__":
    main()
