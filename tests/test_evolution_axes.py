"""Axis bookkeeping for gate application, checked independently of any data."""

import pytest

from dm_sim.engine.density_matrix import evolution_axes
from dm_sim.engine.errors import QubitIndexError


def test_single_qubit_on_one_qubit_register():
    plan = evolution_axes(1, [0])
    assert plan.row_contract == ([1], [0])
    assert plan.column_contract == ([1], [0])
    assert plan.move_src == [0, -1]
    assert plan.move_dst == [0, 1]


@pytest.mark.parametrize("n, t", [(2, 0), (2, 1), (4, 3)])
def test_single_qubit_targets(n, t):
    plan = evolution_axes(n, [t])
    assert plan.row_contract == ([1], [t])
    assert plan.column_contract == ([t + n], [0])
    assert plan.move_dst == [t, t + n]


def test_two_qubits_forward():
    plan = evolution_axes(3, [0, 2])
    assert plan.row_contract == ([2, 3], [0, 2])
    assert plan.column_contract == ([3, 5], [0, 1])
    assert plan.move_src == [0, 1, -1, -2]
    assert plan.move_dst == [0, 2, 5, 3]


def test_two_qubits_reversed_pairing():
    plan = evolution_axes(3, [2, 0])
    assert plan.row_contract == ([2, 3], [2, 0])
    assert plan.column_contract == ([5, 3], [0, 1])
    assert plan.move_src == [0, 1, -1, -2]
    # column block is addressed from the end, so its targets run backwards
    assert plan.move_dst == [2, 0, 3, 5]


def test_three_qubits():
    plan = evolution_axes(4, [3, 0, 2])
    assert plan.row_contract == ([3, 4, 5], [3, 0, 2])
    assert plan.column_contract == ([7, 4, 6], [0, 1, 2])
    assert plan.move_src == [0, 1, 2, -1, -2, -3]
    assert plan.move_dst == [3, 0, 2, 6, 4, 7]


@pytest.mark.parametrize("indices", [[2], [-1], [0, 0], [1, 3], []])
def test_invalid_indices(indices):
    with pytest.raises(QubitIndexError):
        evolution_axes(2, indices)
