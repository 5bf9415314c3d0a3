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
Element-type traits for fixed-shape matrices

Every parameterized matrix class resolves its element type to a set of traits
once, when the class is defined. The traits decide how elements are stored in
the backing numpy array and how assigned values are converted:

  * numpy numeric scalar types (``np.int32``, ``np.float32``, ...) are stored
    natively, so arithmetic follows numpy's fixed-width semantics
  * ``float`` and ``complex`` are stored as ``float64`` and ``complex128``,
    which have the same semantics as the Python types
  * ``int`` and every other ``numbers.Number`` (``Fraction``, ``Decimal``)
    are stored in an object array so their own arithmetic applies unchanged

The additive identity is always ``element_type()``. It is used to fill new
matrices and to seed accumulators.
"""

from __future__ import annotations

import functools
import logging
import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from oasis_matrix.matrix_errors import ElementTypeError


_LOG: logging.Logger = logging.getLogger(__name__)


def _as_python(value: Any) -> Any:
    """Return numpy scalars as the equivalent Python number."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def _equivalent(converted: Any, value: Any) -> bool:
    """Return True if a converted value still equals the original.

    Both sides are compared as Python numbers, never in the narrower numpy
    type produced by the conversion.
    """
    converted = _as_python(converted)
    value = _as_python(value)
    if bool(converted == value):
        return True
    # NaN is representable in every floating type even though NaN != NaN
    return bool(converted != converted) and bool(value != value)


@dataclass(frozen=True)
class ElementTraits:
    """Storage and conversion rules for one element type.

    Attributes:
        element_type: The scalar class stored in each cell
        dtype: numpy dtype of the backing array
        zero: Additive identity of the element type
    """

    element_type: type
    dtype: np.dtype
    zero: Any

    @property
    def name(self) -> str:
        """Return the display name of the element type."""
        return self.element_type.__name__

    @property
    def is_object(self) -> bool:
        """Return True if elements are stored as Python objects."""
        return self.dtype == np.dtype(object)

    def zeros(self, shape: tuple[int, ...]) -> NDArray[Any]:
        """Return a new array filled with the additive identity."""
        return np.full(shape, self.zero, dtype=self.dtype)

    def coerce(self, value: Any) -> Any:
        """Convert a value to the element type without losing information.

        Raises:
            ElementTypeError: If the value has no exact representation
        """
        if type(value) is self.element_type:
            return value

        try:
            converted: Any = self.element_type(value)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise ElementTypeError(
                f"{value!r} cannot be converted to {self.name}: {exc}"
            ) from exc

        if np.ndim(converted) != 0:
            raise ElementTypeError(f"{value!r} is not a scalar")

        if not _equivalent(converted, value):
            raise ElementTypeError(
                f"{value!r} is not exactly representable as {self.name}"
            )

        return converted

    def unbox(self, value: Any) -> Any:
        """Return a stored element as an instance of the element type."""
        if self.is_object:
            return value
        return self.element_type(value)


def element_traits(element_type: Any) -> ElementTraits:
    """Resolve the traits of a matrix element type.

    Raises:
        ElementTypeError: If the element type is not a supported numeric class
    """
    if not isinstance(element_type, type):
        raise ElementTypeError(f"Element type must be a class, got {element_type!r}")

    return _resolve_traits(element_type)


@functools.lru_cache(maxsize=None)
def _resolve_traits(element_type: type) -> ElementTraits:
    if issubclass(element_type, (bool, np.bool_)):
        raise ElementTypeError("Boolean element types are not supported")

    dtype: np.dtype
    if issubclass(element_type, np.generic):
        if not issubclass(element_type, np.number):
            raise ElementTypeError(
                f"numpy element type must be numeric, got {element_type.__name__}"
            )
        dtype = np.dtype(element_type)
    elif issubclass(element_type, numbers.Number):
        if element_type is float:
            dtype = np.dtype(np.float64)
        elif element_type is complex:
            dtype = np.dtype(np.complex128)
        else:
            dtype = np.dtype(object)
    else:
        raise ElementTypeError(
            f"Element type must be numeric, got {element_type.__name__}"
        )

    try:
        zero: Any = element_type()
    except (TypeError, ValueError) as exc:
        raise ElementTypeError(
            f"Element type {element_type.__name__} has no default zero value"
        ) from exc

    _LOG.debug("Resolved element type %s to dtype %s", element_type.__name__, dtype)

    return ElementTraits(element_type=element_type, dtype=dtype, zero=zero)
