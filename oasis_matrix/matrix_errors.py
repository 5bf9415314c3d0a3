################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Exceptions raised by fixed-shape matrices and vectors."""

from __future__ import annotations


class MatrixError(Exception):
    """Base class for errors raised by the matrix package."""


class DimensionError(MatrixError, ValueError):
    """Raised when a matrix or vector type is defined with invalid dimensions."""


class ShapeMismatchError(MatrixError, ValueError):
    """Raised when operand shapes violate an operation's precondition."""


class MatrixIndexError(MatrixError, IndexError):
    """Raised when an element index falls outside the matrix bounds."""


class ElementTypeError(MatrixError, TypeError):
    """Raised when an element type or element value is not supported."""
