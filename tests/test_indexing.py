import numpy as np
import pytest

from dm_sim.engine.indexing import (
    bits_to_int, complex_approx_eq, int_to_bits, is_power_of_two, log2_exact,
)


def test_int_to_bits_is_big_endian():
    assert int_to_bits(5, 4) == [0, 1, 0, 1]
    assert int_to_bits(0, 3) == [0, 0, 0]
    assert int_to_bits(0, 0) == []


@pytest.mark.parametrize("value", range(16))
def test_bits_round_trip(value):
    assert bits_to_int(int_to_bits(value, 4)) == value


@pytest.mark.parametrize("value, width", [(4, 2), (-1, 3)])
def test_int_to_bits_out_of_range(value, width):
    with pytest.raises(ValueError):
        int_to_bits(value, width)


def test_powers_of_two():
    assert [n for n in range(20) if is_power_of_two(n)] == [1, 2, 4, 8, 16]
    assert log2_exact(1) == 0
    assert log2_exact(64) == 6
    with pytest.raises(ValueError):
        log2_exact(12)


def test_complex_approx_eq_uses_modulus():
    assert complex_approx_eq(1 + 1j, 1 + 1j + 3e-11j, 1e-10)
    assert not complex_approx_eq(1, 1 + 1e-10 + 1e-10j, 1e-10)


def test_complex_approx_eq_on_arrays():
    a = np.array([1, 1j, 0.5])
    assert complex_approx_eq(a, a + 1e-12, 1e-10)
    assert not complex_approx_eq(a, np.array([1, 1j, 0.5 + 1e-9]), 1e-10)
