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
Integer column vectors of fixed length

``FixedVector[N]`` is the N x 1 machine-integer case. It is a class of its
own, not a ``FixedMatrix``: elements are addressed with a single index and the
vector adds the Euclidean norm, while transpose and the matrix operators are
not available.
"""

from __future__ import annotations

import copy
import logging
import math
import threading
from collections.abc import Iterable
from typing import Any
from typing import ClassVar
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from oasis_matrix.element_types import ElementTraits
from oasis_matrix.element_types import element_traits
from oasis_matrix.matrix_errors import ShapeMismatchError
from oasis_matrix.matrix_format import format_vector
from oasis_matrix.shape import check_index
from oasis_matrix.shape import validate_dimension


_LOG: logging.Logger = logging.getLogger(__name__)

# Parameterized classes, keyed by size
_VECTOR_CLASSES: dict[int, type[FixedVector]] = {}
_VECTOR_CLASSES_LOCK: threading.Lock = threading.Lock()

# Elements are stored as 64-bit machine integers
_TRAITS: ElementTraits = element_traits(np.int64)


class FixedVector:
    """Fixed-length vector of machine integers.

    Attributes:
        SIZE: Number of elements, at least 1
    """

    SIZE: ClassVar[int] = 0

    # Keep numpy from broadcasting over vectors in mixed expressions
    __array_ufunc__ = None

    def __class_getitem__(cls, size: Any) -> type[FixedVector]:
        if cls.SIZE != 0:
            raise TypeError(f"{cls.__name__} is already parameterized")
        return _vector_class(validate_dimension(size, "N"))

    def __init__(self) -> None:
        """Initialize a vector with every element set to zero."""
        type(self)._require_parameterized()
        self._data: NDArray[np.int64] = _TRAITS.zeros((self.SIZE,))

    @classmethod
    def from_values(cls, values: Iterable[Any]) -> FixedVector:
        """Create a vector from exactly SIZE integer values.

        Raises:
            ShapeMismatchError: If the number of values is not SIZE
            ElementTypeError: If a value is not representable as int64
        """
        cls._require_parameterized()

        value_list: list[Any] = list(values)
        if len(value_list) != cls.SIZE:
            raise ShapeMismatchError(
                f"{cls.__name__} needs {cls.SIZE} values, got {len(value_list)}"
            )

        vector: FixedVector = cls()
        for index, value in enumerate(value_list):
            vector._data[index] = _TRAITS.coerce(value)

        return vector

    @classmethod
    def _require_parameterized(cls) -> None:
        if cls.SIZE == 0:
            raise TypeError(
                f"{cls.__name__} must be parameterized before use, e.g. FixedVector[3]"
            )

    def __len__(self) -> int:
        return self.SIZE

    def at(self, index: int) -> int:
        """Return the element at index.

        Raises:
            MatrixIndexError: If the index is out of range
        """
        position: int = check_index(index, self.SIZE, "Index")
        return int(self._data[position])

    def set(self, index: int, value: Any) -> None:
        """Store an integer value at index.

        Raises:
            MatrixIndexError: If the index is out of range
            ElementTypeError: If the value is not representable as int64
        """
        position: int = check_index(index, self.SIZE, "Index")
        self._data[position] = _TRAITS.coerce(value)

    def __getitem__(self, index: int) -> int:
        return self.at(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def tolist(self) -> list[int]:
        """Return the elements as a list of ints."""
        return [int(value) for value in self._data]

    def norm(self) -> float:
        """Return the Euclidean (L2) norm.

        Squares are summed in floating point so large elements cannot
        overflow the integer type before the square root is taken.
        """
        total: float = 0.0
        for value in self._data:
            element: float = float(value)
            total += element * element
        return math.sqrt(total)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedVector):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return bool(np.array_equal(self._data, other._data))

    # Mutable values are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> FixedVector:
        vector: FixedVector = type(self)()
        vector._data = self._data.copy()
        return vector

    def __deepcopy__(self, memo: dict[int, Any]) -> FixedVector:
        vector: FixedVector = type(self)()
        vector._data = copy.deepcopy(self._data, memo)
        return vector

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_values({self.tolist()!r})"

    def __str__(self) -> str:
        return format_vector(self)


def _vector_class(size: int) -> type[FixedVector]:
    with _VECTOR_CLASSES_LOCK:
        vector_class: Optional[type[FixedVector]] = _VECTOR_CLASSES.get(size)
        if vector_class is None:
            vector_class = _define_vector_class(size)
            _VECTOR_CLASSES[size] = vector_class
    return vector_class


def _define_vector_class(size: int) -> type[FixedVector]:
    name: str = f"FixedVector[{size}]"

    vector_class: type[FixedVector] = type(
        name,
        (FixedVector,),
        {
            "__module__": __name__,
            "__qualname__": name,
            "SIZE": size,
        },
    )

    _LOG.debug("Defined vector class %s", name)

    return vector_class
