"""Fixed gate matrices and the Operator value type."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .indexing import is_power_of_two, log2_exact


# --- Fixed single-qubit gate matrices ---

I_MATRIX = np.eye(2, dtype=np.complex128)

X_MATRIX = np.array([[0, 1],
                      [1, 0]], dtype=np.complex128)

Y_MATRIX = np.array([[0, -1j],
                      [1j, 0]], dtype=np.complex128)

Z_MATRIX = np.array([[1, 0],
                      [0, -1]], dtype=np.complex128)

H_MATRIX = np.array([[1, 1],
                      [1, -1]], dtype=np.complex128) / np.sqrt(2)

S_MATRIX = np.array([[1, 0],
                      [0, 1j]], dtype=np.complex128)

T_MATRIX = np.array([[1, 0],
                      [0, np.exp(1j * np.pi / 4)]], dtype=np.complex128)


# --- Fixed two-qubit gate matrices (first index = control / first qubit) ---

CX_MATRIX = np.array([
    [1, 0, 0, 0],
    [0, 1, 0, 0],
    [0, 0, 0, 1],
    [0, 0, 1, 0]], dtype=np.complex128)

CZ_MATRIX = np.diag([1, 1, 1, -1]).astype(np.complex128)

SWAP_MATRIX = np.array([
    [1, 0, 0, 0],
    [0, 0, 1, 0],
    [0, 1, 0, 0],
    [0, 0, 0, 1]], dtype=np.complex128)


class OneQubitOp(Enum):
    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    T = "T"

    @property
    def matrix(self) -> np.ndarray:
        return _ONE_QUBIT_MATRICES[self]


class TwoQubitOp(Enum):
    CX = "CX"
    CZ = "CZ"
    SWAP = "SWAP"

    @property
    def matrix(self) -> np.ndarray:
        return _TWO_QUBIT_MATRICES[self]


_ONE_QUBIT_MATRICES = {
    OneQubitOp.I: I_MATRIX,
    OneQubitOp.X: X_MATRIX,
    OneQubitOp.Y: Y_MATRIX,
    OneQubitOp.Z: Z_MATRIX,
    OneQubitOp.H: H_MATRIX,
    OneQubitOp.S: S_MATRIX,
    OneQubitOp.T: T_MATRIX,
}

_TWO_QUBIT_MATRICES = {
    TwoQubitOp.CX: CX_MATRIX,
    TwoQubitOp.CZ: CZ_MATRIX,
    TwoQubitOp.SWAP: SWAP_MATRIX,
}


@dataclass(frozen=True)
class Operator:
    """Immutable k-qubit gate: a 2^k x 2^k matrix, also viewable as a [2]*2k tensor.

    Tensor axes 0..k-1 are the output (row) qubits, axes k..2k-1 the input
    (column) qubits. Unitarity is not checked.
    """
    name: str
    matrix: np.ndarray = field(repr=False, compare=False)
    num_qubits: int = 1

    @classmethod
    def one_qubit(cls, op: OneQubitOp) -> Operator:
        return cls(name=op.value, matrix=op.matrix, num_qubits=1)

    @classmethod
    def two_qubits(cls, op: TwoQubitOp) -> Operator:
        return cls(name=op.value, matrix=op.matrix, num_qubits=2)

    @classmethod
    def from_matrix(cls, name: str, matrix) -> Operator:
        """Wraps a custom square matrix whose side is a power of two (>= 2)."""
        matrix = np.asarray(matrix, dtype=np.complex128)
        if (matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]
                or not is_power_of_two(matrix.shape[0]) or matrix.shape[0] < 2):
            raise ValueError(
                f"Gate '{name}' needs a 2^k x 2^k matrix, got shape {matrix.shape}")
        return cls(name=name, matrix=matrix, num_qubits=log2_exact(matrix.shape[0]))

    @property
    def data(self) -> np.ndarray:
        """Matrix reshaped to a rank-2k tensor with all axes of size 2."""
        return self.matrix.reshape([2] * (2 * self.num_qubits))

    def transconj(self) -> Operator:
        """Conjugate transpose U^dagger."""
        return Operator(name=f"{self.name}†",
                        matrix=self.matrix.conj().T.copy(),
                        num_qubits=self.num_qubits)

    adjoint = transconj
