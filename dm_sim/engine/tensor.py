"""Dense complex tensors with contraction and axis permutation.

The tensor engine knows nothing about qubits: it stores a flat complex128
buffer together with a shape, and exposes the two primitives the
density-matrix evolution is built on, ``tensordot`` and ``moveaxis``.

Axis-ordering contract of ``tensordot`` (relied upon by callers):
the free axes of ``self`` come first, in their original relative order,
followed by the free axes of ``other``, in their original relative order.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .errors import TensorIndexError, TensorShapeError


class Tensor:
    """Dense arbitrary-rank complex array addressed in row-major order."""

    def __init__(self, array: np.ndarray):
        self._array = np.asarray(array, dtype=np.complex128, order="C")

    # ---- Construction -----------------------------------------------------

    @classmethod
    def new(cls, shape: Sequence[int]) -> Tensor:
        """Zero-filled tensor of the given shape."""
        shape = _check_shape(shape)
        return cls(np.zeros(shape, dtype=np.complex128))

    @classmethod
    def from_flat(cls, data, shape: Sequence[int]) -> Tensor:
        """Copies a flat sequence of ``product(shape)`` values into a new tensor."""
        shape = _check_shape(shape)
        flat = np.array(data, dtype=np.complex128).reshape(-1)
        expected = math.prod(shape)
        if flat.size != expected:
            raise TensorShapeError(
                f"Data length {flat.size} does not match shape {list(shape)} "
                f"(expected {expected})")
        return cls(flat.reshape(shape))

    # ---- Properties -------------------------------------------------------

    @property
    def shape(self) -> list[int]:
        return list(self._array.shape)

    @property
    def rank(self) -> int:
        return self._array.ndim

    @property
    def data(self) -> np.ndarray:
        """Flat row-major view of the elements (last axis varies fastest)."""
        return self._array.reshape(-1)

    @property
    def array(self) -> np.ndarray:
        return self._array

    # ---- Element access ---------------------------------------------------

    def get(self, index: Sequence[int]) -> complex:
        return complex(self._array[self._check_index(index)])

    def set(self, index: Sequence[int], value: complex):
        self._array[self._check_index(index)] = value

    def _check_index(self, index: Sequence[int]) -> tuple[int, ...]:
        index = tuple(int(i) for i in index)
        if len(index) != self.rank:
            raise TensorIndexError(
                f"Index {list(index)} has {len(index)} components, "
                f"tensor has rank {self.rank}")
        for axis, (i, dim) in enumerate(zip(index, self._array.shape)):
            if i < 0 or i >= dim:
                raise TensorIndexError(
                    f"Index {i} out of bounds for axis {axis} with size {dim}")
        return index

    # ---- Contraction and permutation ---------------------------------------

    def tensordot(self, other: Tensor,
                  axes_self: Sequence[int],
                  axes_other: Sequence[int]) -> Tensor:
        """Sums the element-wise product over paired axes of self and other.

        ``axes_self[i]`` is contracted against ``axes_other[i]``. The result
        holds the remaining axes of self followed by the remaining axes of
        other, each group in its original relative order.
        """
        if len(axes_self) != len(axes_other):
            raise TensorShapeError(
                f"Contraction needs the same number of axes on both sides, "
                f"got {len(axes_self)} and {len(axes_other)}")
        axes_self = _normalize_axes(axes_self, self.rank, "contraction")
        axes_other = _normalize_axes(axes_other, other.rank, "contraction")
        for a, b in zip(axes_self, axes_other):
            if self._array.shape[a] != other._array.shape[b]:
                raise TensorShapeError(
                    f"Cannot contract axis {a} (size {self._array.shape[a]}) "
                    f"with axis {b} (size {other._array.shape[b]})")
        result = np.tensordot(self._array, other._array,
                              axes=(axes_self, axes_other))
        return Tensor(result)

    def moveaxis(self, src_axes: Sequence[int],
                 dst_axes: Sequence[int]) -> Tensor:
        """Relocates each axis at ``src_axes[i]`` to position ``dst_axes[i]``.

        Axes not mentioned keep their relative order and fill the remaining
        positions. Negative positions count from the end.
        """
        if len(src_axes) != len(dst_axes):
            raise TensorShapeError(
                f"moveaxis needs as many sources as destinations, "
                f"got {len(src_axes)} and {len(dst_axes)}")
        src = _normalize_axes(src_axes, self.rank, "source")
        dst = _normalize_axes(dst_axes, self.rank, "destination")
        return Tensor(np.moveaxis(self._array, src, dst))

    def copy(self) -> Tensor:
        return Tensor(self._array.copy())

    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape})"


def _check_shape(shape: Sequence[int]) -> tuple[int, ...]:
    shape = tuple(int(d) for d in shape)
    for d in shape:
        if d <= 0:
            raise TensorShapeError(f"Axis dimensions must be positive, got {list(shape)}")
    return shape


def _normalize_axes(axes: Sequence[int], rank: int, what: str) -> list[int]:
    normalized = []
    for axis in axes:
        axis = int(axis)
        if axis < -rank or axis >= rank:
            raise TensorShapeError(
                f"{what.capitalize()} axis {axis} out of range for rank {rank}")
        normalized.append(axis % rank)
    if len(set(normalized)) != len(normalized):
        raise TensorShapeError(f"Repeated {what} axes: {list(axes)}")
    return normalized
