"""Density-matrix representation of an n-qubit register and its unitary evolution.

The matrix is stored flat (row-major over ``(row, col)``). To apply a gate it
is viewed as a rank-2n tensor whose axes ``0..n-1`` are the row qubits and
``n..2n-1`` the column qubits, both in qubit-index order (qubit 0 = most
significant bit). Evolution rho -> U rho U^dagger is then two tensor
contractions followed by a single ``moveaxis`` that restores canonical axis
order, so the full 2^n x 2^n operator is never built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

import numpy as np

from .errors import (
    InvalidOperationError, OperatorArityError, QubitIndexError, StateError,
    TensorShapeError, TraceError,
)
from .gate_registry import GateRegistry
from .gates import Operator, OneQubitOp, TwoQubitOp
from .indexing import complex_approx_eq, is_power_of_two, log2_exact
from .tensor import Tensor

logger = logging.getLogger(__name__)

TRACE_TOLERANCE = 1e-10

GateLike = Union[Operator, OneQubitOp, TwoQubitOp, str]


class InitialState(Enum):
    ZERO = "zero"  # |0...0><0...0|
    PLUS = "plus"  # |+...+><+...+|


@dataclass(frozen=True)
class AxisPlan:
    """Axis bookkeeping for one application of a k-qubit gate.

    ``row_contract``: (operator axes, rho axes) for U . rho.
    ``column_contract``: (intermediate axes, adjoint axes) for (U rho) . U^dagger.
    ``move_src`` / ``move_dst``: the permutation restoring canonical order.
    """
    row_contract: tuple[list[int], list[int]]
    column_contract: tuple[list[int], list[int]]
    move_src: list[int]
    move_dst: list[int]


def evolution_axes(nqubits: int, indices: Sequence[int]) -> AxisPlan:
    """Computes the contraction and permutation axes for a gate on ``indices``.

    After the first contraction the operator's k output axes sit in front, in
    the order of ``indices``; the column axis of qubit q is then at ``n + q``.
    After the second contraction the adjoint's k remaining axes sit at the
    back, so the last axis belongs to ``indices[-1]``. The back block is
    addressed from the end (-1, -2, ...), hence its destinations are the
    column positions of ``indices`` in reverse order.
    """
    indices = _check_indices(nqubits, indices)
    k = len(indices)
    row_contract = ([k + i for i in range(k)], list(indices))
    column_contract = ([q + nqubits for q in indices], list(range(k)))
    move_src = list(range(k)) + [-(i + 1) for i in range(k)]
    move_dst = list(indices) + [q + nqubits for q in reversed(indices)]
    return AxisPlan(row_contract, column_contract, move_src, move_dst)


def _check_indices(nqubits: int, indices: Sequence[int]) -> list[int]:
    indices = [int(q) for q in indices]
    if not indices:
        raise QubitIndexError("A gate must act on at least one qubit")
    for q in indices:
        if q < 0 or q >= nqubits:
            raise QubitIndexError(
                f"Qubit index {q} out of range [0, {nqubits - 1}]")
    if len(set(indices)) != len(indices):
        raise QubitIndexError(f"Duplicate qubit indices {indices}")
    return indices


def resolve_operator(gate: GateLike) -> Operator:
    """Accepts an Operator, a catalogue enum member or a registered gate name."""
    if isinstance(gate, Operator):
        return gate
    if isinstance(gate, OneQubitOp):
        return Operator.one_qubit(gate)
    if isinstance(gate, TwoQubitOp):
        return Operator.two_qubits(gate)
    if isinstance(gate, str):
        return GateRegistry.instance().get(gate)
    raise TypeError(f"Cannot interpret {gate!r} as a gate")


class DensityMatrix:
    """size x size complex matrix (size = 2^nqubits) stored as a flat array."""

    def __init__(self, nqubits: int, data: np.ndarray | None = None):
        if nqubits < 0:
            raise ValueError(f"nqubits must be non-negative, got {nqubits}")
        self._nqubits = nqubits
        self._size = 1 << nqubits
        if data is None:
            self._data = np.zeros(self._size * self._size, dtype=np.complex128)
        else:
            self.data = data

    # ---- Construction -----------------------------------------------------

    @classmethod
    def new(cls, nqubits: int,
            initial_state: InitialState | None = None) -> DensityMatrix:
        """Canonical initial states; ``None`` gives the all-zero matrix."""
        dm = cls(nqubits)
        if initial_state is InitialState.ZERO:
            dm._data[0] = 1.0
        elif initial_state is InitialState.PLUS:
            dm._data[:] = 1.0 / dm._size
        elif initial_state is not None:
            raise ValueError(f"Unknown initial state {initial_state!r}")
        return dm

    @classmethod
    def from_statevec(cls, amplitudes) -> DensityMatrix:
        """Outer product |psi><psi| of a statevector of length 2^n."""
        psi = np.asarray(amplitudes, dtype=np.complex128)
        if psi.ndim != 1:
            raise StateError(
                f"A statevec must be one-dimensional, got shape {psi.shape}")
        if not is_power_of_two(psi.size):
            raise StateError(
                f"The size of the statevec ({psi.size}) is not a power of two")
        rho = np.outer(psi, np.conj(psi))
        return cls(log2_exact(psi.size), rho.reshape(-1))

    @classmethod
    def from_tensor(cls, tensor: Tensor) -> DensityMatrix:
        """Inverse of ``to_tensor``: flattens a [2]*2n tensor back to a matrix."""
        shape = tensor.shape
        if len(shape) % 2 != 0 or any(d != 2 for d in shape):
            raise TensorShapeError(
                f"Expected a tensor of shape [2]*2n, got {shape}")
        return cls(len(shape) // 2, tensor.data.copy())

    # ---- Properties -------------------------------------------------------

    @property
    def nqubits(self) -> int:
        return self._nqubits

    @property
    def size(self) -> int:
        return self._size

    @property
    def data(self) -> np.ndarray:
        return self._data

    @data.setter
    def data(self, value):
        value = np.asarray(value, dtype=np.complex128).reshape(-1)
        expected = self._size * self._size
        if value.size != expected:
            raise TensorShapeError(
                f"Expected {expected} elements for {self._nqubits} qubits, "
                f"got {value.size}")
        self._data = value.copy()

    def to_matrix(self) -> np.ndarray:
        """2-D (size, size) view of the data."""
        return self._data.reshape(self._size, self._size)

    def to_tensor(self) -> Tensor:
        """Rank-2n tensor; flat index bits are (row bits, column bits), MSB first."""
        return Tensor.from_flat(self._data, [2] * (2 * self._nqubits))

    # ---- Element access ---------------------------------------------------

    def get(self, i: int, j: int) -> complex:
        return complex(self._data[self._flat_index(i, j)])

    def set(self, i: int, j: int, value: complex):
        self._data[self._flat_index(i, j)] = value

    def _flat_index(self, i: int, j: int) -> int:
        if not (0 <= i < self._size and 0 <= j < self._size):
            raise IndexError(
                f"Element ({i}, {j}) out of range for a {self._size}x{self._size} matrix")
        return i * self._size + j

    # ---- Diagnostics ------------------------------------------------------

    def trace(self, tolerance: float = TRACE_TOLERANCE) -> complex:
        """Returns the trace if it is within ``tolerance`` of 1, else raises TraceError.

        Only the trace is checked: Hermiticity and positivity are not.
        """
        tr = complex(np.trace(self.to_matrix()))
        if not complex_approx_eq(tr, 1.0, tolerance):
            raise TraceError(tr, tolerance)
        return tr

    def normalize(self, tolerance: float = TRACE_TOLERANCE):
        """Divides every entry by the trace. The trace check must pass."""
        try:
            tr = self.trace(tolerance)
        except TraceError as exc:
            raise InvalidOperationError(
                "Cannot normalize a density matrix whose trace check fails") from exc
        self._data = self._data / tr

    def equals(self, other: DensityMatrix, tolerance: float) -> bool:
        """Element-wise approximate equality; different sizes compare unequal."""
        if self._data.size != other._data.size:
            return False
        return complex_approx_eq(self._data, other._data, tolerance)

    # ---- Evolution --------------------------------------------------------

    def evolve_single(self, gate: GateLike, index: int):
        """Applies a one-qubit gate to qubit ``index``: rho -> U rho U^dagger."""
        op = resolve_operator(gate)
        if op.num_qubits != 1:
            raise OperatorArityError(
                f"evolve_single needs a one-qubit gate, '{op.name}' acts on "
                f"{op.num_qubits} qubits")
        self._apply(op, [index])

    def evolve(self, gate: GateLike, indices: Sequence[int]):
        """Applies a k-qubit gate; ``indices[i]`` receives the gate's i-th qubit."""
        op = resolve_operator(gate)
        if op.num_qubits != len(indices):
            raise OperatorArityError(
                f"Gate '{op.name}' acts on {op.num_qubits} qubits, "
                f"got {len(indices)} indices")
        self._apply(op, indices)

    def _apply(self, op: Operator, indices: Sequence[int]):
        plan = evolution_axes(self._nqubits, indices)
        logger.debug("Applying %s to qubits %s", op.name, list(indices))

        op_data = op.data
        adj_data = op.transconj().data
        op_tensor = Tensor.from_flat(op_data, op_data.shape)
        adj_tensor = Tensor.from_flat(adj_data, adj_data.shape)

        rho = self.to_tensor()
        rho = op_tensor.tensordot(rho, *plan.row_contract)
        rho = rho.tensordot(adj_tensor, *plan.column_contract)
        rho = rho.moveaxis(plan.move_src, plan.move_dst)

        self._data = rho.data.copy()

    # ---- Misc -------------------------------------------------------------

    def copy(self) -> DensityMatrix:
        return DensityMatrix(self._nqubits, self._data)

    def format(self, precision: int = 4) -> str:
        return np.array2string(self.to_matrix(), precision=precision,
                               separator=", ", suppress_small=True)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"DensityMatrix(nqubits={self._nqubits})"
