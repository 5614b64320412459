#!/usr/bin/env python3
"""
Validation tests for the saturation pressure Newton inversion.
Run with: python3 -m pytest pyblackoil/tests/ -v
"""

import sys
import os
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pyblackoil.inversion import saturation_pressure
from pyblackoil.errors import NumericalIssue
from pyblackoil.tabulated import Tabulated1DFunction
from pyblackoil.spline import MonotonicSpline

def test_linear_relation():
    """Newton on a linear relation"""
    p = saturation_pressure(lambda p: 2.0 * p + 1.0, 5.0, 3.0)
    assert abs(p - 2.0) < 1e-9

def test_nonlinear_relation():
    """Newton on a quadratic relation"""
    p = saturation_pressure(lambda p: p * p, 4.0, 3.0)
    assert abs(p - 2.0) / 2.0 < 1e-9

def test_round_trip_through_spline_seed():
    """Inversion at every table pressure seeded by the spline"""
    pressures = np.array([1e6, 5e6, 1e7, 2e7, 3e7])
    table = Tabulated1DFunction(pressures, [0.01, 0.04, 0.07, 0.11, 0.13])
    grid = np.linspace(1e6, 3e7, 26)
    seed = MonotonicSpline(table.eval(grid), grid)
    for p_star in pressures:
        target = table.eval(p_star)
        p = saturation_pressure(lambda p: table.eval(p, extrapolate=True), target, seed.eval(target))
        assert abs(p - p_star) / p_star < 1e-10, f"Inverted {p}, expected {p_star}"

def test_flat_relation_raises():
    """Zero derivative raises NumericalIssue"""
    try:
        saturation_pressure(lambda p: 0.5, 0.7, 1e7, region_idx=3)
        assert False, "Should have raised NumericalIssue"
    except NumericalIssue as e:
        assert e.region_idx == 3
        assert e.target == 0.7

def test_zero_guess_raises():
    """Zero initial guess raises NumericalIssue"""
    try:
        saturation_pressure(lambda p: p, 1.0, 0.0)
        assert False, "Should have raised NumericalIssue"
    except NumericalIssue:
        pass

def test_iteration_limit():
    """Non convergence within the iteration limit"""
    try:
        saturation_pressure(lambda p: p * p, 4.0, 3.0, region_idx=1, max_iter=1)
        assert False, "Should have raised NumericalIssue"
    except NumericalIssue as e:
        assert e.region_idx == 1
        assert isinstance(e, ArithmeticError)


if __name__ == '__main__':
    tests = [v for k, v in sorted(globals().items()) if k.startswith('test_') and callable(v)]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  PASS: {test.__name__}")
        except Exception as e:
            failed += 1
            print(f"  FAIL: {test.__name__}: {e}")
    sys.exit(1 if failed > 0 else 0)
