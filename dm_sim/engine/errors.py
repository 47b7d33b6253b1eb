"""Exception hierarchy for the density-matrix engine.

Two families are distinguished:

- **Reported** errors (``StateError`` and subclasses) describe bad input data
  that is detected before anything is mutated. Callers may catch and inspect
  them.
- **Fatal** errors describe a violated precondition (bad qubit index, gate
  arity mismatch, inconsistent tensor shapes). They abort the operation and
  are not meant to be recovered from.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all engine errors."""


# ---- Reported ------------------------------------------------------------

class StateError(SimulationError, ValueError):
    """Malformed state input, e.g. a statevector whose length is not 2^n."""


class TraceError(StateError):
    """The diagonal of a density matrix does not sum to 1."""

    def __init__(self, trace: complex, tolerance: float):
        super().__init__(
            f"The sum over the diagonal elements does not make 1 "
            f"(trace={trace}, tolerance={tolerance:g})")
        self.trace = trace
        self.tolerance = tolerance


# ---- Fatal ---------------------------------------------------------------

class TensorShapeError(SimulationError, ValueError):
    """Data length, contraction axes or permutation do not fit a tensor shape."""


class TensorIndexError(SimulationError, IndexError):
    """Multi-index component out of bounds for its axis."""


class QubitIndexError(SimulationError, IndexError):
    """Qubit index out of range or repeated within one gate application."""


class OperatorArityError(SimulationError, ValueError):
    """Gate acts on a different number of qubits than requested."""


class InvalidOperationError(SimulationError, RuntimeError):
    """Operation called on a state that does not satisfy its precondition."""
