# -*- coding: utf-8 -*-
"""
Sanity: linear Eg(T), T^{3/2} DOS scaling and MB intrinsic density for Si-like numbers.
"""
import math

import numpy as np
import pytest

from carriersim.physics.carriers.intrinsic import (
    bandgap_at_T,
    effective_dos_at_T,
    intrinsic_density,
    intrinsic_level_offset,
)
from carriersim.utils.errors import DomainError

KB = 8.617e-5

def test_bandgap_linear_in_T():
    assert math.isclose(float(bandgap_at_T(1.12, -2.73e-4, 300.0)), 1.12, rel_tol=1e-15)
    assert math.isclose(float(bandgap_at_T(1.12, -2.73e-4, 400.0)), 1.12 - 0.0273, rel_tol=1e-12)
    assert float(bandgap_at_T(0.1, -1e-3, 500.0)) < 0.0
    assert float(bandgap_at_T(0.1, -1e-3, 500.0, clamp=True)) == 0.0

def test_dos_scaling():
    assert float(effective_dos_at_T(2.8e19, 300.0)) == pytest.approx(2.8e19)
    assert float(effective_dos_at_T(2.8e19, 1200.0)) == pytest.approx(2.8e19 * 8.0)

def test_ni_silicon_order_of_magnitude():
    ni = float(intrinsic_density(1.12, 2.8e19, 1.04e19, 300.0, KB))
    expected = math.sqrt(2.8e19 * 1.04e19) * math.exp(-1.12 / (2.0 * KB * 300.0))
    assert ni == pytest.approx(expected, rel=1e-12)
    assert 1e9 < ni < 1e11

def test_ni_vectorized_and_increasing_in_T():
    T = np.linspace(200.0, 500.0, 31)
    Eg = bandgap_at_T(1.12, -2.73e-4, T)
    ni = intrinsic_density(Eg, effective_dos_at_T(2.8e19, T), effective_dos_at_T(1.04e19, T), T, KB)
    assert ni.shape == T.shape
    assert np.all(np.diff(ni) > 0.0)

def test_intrinsic_level_shifts_toward_smaller_dos():
    # Nv < Nc -> E_i below midgap
    assert float(intrinsic_level_offset(2.8e19, 1.04e19, 300.0, KB)) < 0.0
    assert float(intrinsic_level_offset(1e19, 1e19, 300.0, KB)) == 0.0

@pytest.mark.parametrize("T", [0.0, -10.0, float("inf")])
def test_bad_temperature(T):
    with pytest.raises(DomainError):
        bandgap_at_T(1.12, -2.73e-4, T)
    with pytest.raises(DomainError):
        intrinsic_density(1.12, 2.8e19, 1.04e19, T, KB)

def test_bad_boltzmann_constant():
    with pytest.raises(DomainError):
        intrinsic_density(1.12, 2.8e19, 1.04e19, 300.0, 0.0)
