"""Operator catalogue and gate registry."""

import numpy as np
import pytest

from dm_sim.engine.gate_registry import GateRegistry
from dm_sim.engine.gates import (
    CX_MATRIX, H_MATRIX, S_MATRIX, Operator, OneQubitOp, TwoQubitOp,
)


@pytest.fixture
def registry():
    GateRegistry.reset()
    yield GateRegistry.instance()
    GateRegistry.reset()


@pytest.mark.parametrize("op", list(OneQubitOp) + list(TwoQubitOp))
def test_catalogue_matrices_are_unitary(op):
    m = op.matrix
    np.testing.assert_allclose(m @ m.conj().T, np.eye(m.shape[0]), atol=1e-12)


def test_one_qubit_operator():
    op = Operator.one_qubit(OneQubitOp.H)
    assert op.name == "H"
    assert op.num_qubits == 1
    assert op.data.shape == (2, 2)
    np.testing.assert_array_equal(op.matrix, H_MATRIX)


def test_two_qubit_operator_tensor_layout():
    op = Operator.two_qubits(TwoQubitOp.CX)
    assert op.num_qubits == 2
    assert op.data.shape == (2, 2, 2, 2)
    # |11><10| entry: outputs (1, 1), inputs (1, 0)
    assert op.data[1, 1, 1, 0] == 1
    assert op.data[1, 0, 1, 0] == 0
    np.testing.assert_array_equal(op.data.reshape(4, 4), CX_MATRIX)


def test_transconj():
    s_dag = Operator.one_qubit(OneQubitOp.S).transconj()
    np.testing.assert_array_equal(s_dag.matrix, S_MATRIX.conj().T)
    assert s_dag.matrix[1, 1] == -1j
    assert s_dag.num_qubits == 1


def test_adjoint_alias():
    op = Operator.two_qubits(TwoQubitOp.CZ)
    np.testing.assert_array_equal(op.adjoint().matrix, op.transconj().matrix)


def test_from_matrix_infers_qubit_count():
    assert Operator.from_matrix("G", np.eye(8)).num_qubits == 3


@pytest.mark.parametrize("shape", [(2, 3), (3, 3), (1, 1), (2, 2, 2)])
def test_from_matrix_rejects_bad_shapes(shape):
    with pytest.raises(ValueError):
        Operator.from_matrix("bad", np.zeros(shape))


class TestGateRegistry:

    def test_builtins(self, registry):
        for name in ("I", "X", "Y", "Z", "H", "CX", "CZ", "SWAP"):
            assert name in registry
        assert {g.name for g in registry.two_qubit_gates()} == {"CX", "CZ", "SWAP"}
        assert all(g.num_qubits == 1 for g in registry.single_qubit_gates())

    def test_singleton(self, registry):
        assert GateRegistry.instance() is registry

    def test_unknown_gate(self, registry):
        with pytest.raises(KeyError):
            registry.get("CCX")

    def test_register_custom(self, registry):
        iswap = Operator.from_matrix("ISWAP", np.array([
            [1, 0, 0, 0],
            [0, 0, 1j, 0],
            [0, 1j, 0, 0],
            [0, 0, 0, 1]]))
        registry.register(iswap)
        assert registry.get("ISWAP").num_qubits == 2
        assert "ISWAP" in registry.gate_names()

    def test_reset_drops_custom_gates(self, registry):
        registry.register(Operator.from_matrix("G", np.eye(2)))
        GateRegistry.reset()
        assert "G" not in GateRegistry.instance()
