#!/usr/bin/env python3
"""
Validation tests for the tabulated function module.
Run with: python3 -m pytest pyblackoil/tests/ -v
Or standalone: python3 pyblackoil/tests/test_tabulated.py
"""

import sys
import os
import numpy as np
import pandas as pd

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pyblackoil.tabulated import Tabulated1DFunction, Tabulated2DFunction, split_long_table
from pyblackoil.errors import TableConstructionError, TableRangeError

X = [1e5, 1e6, 1e7]
Y = [0.0, 10.0, 50.0]

# =============================================================================
# 1D tables
# =============================================================================

def test_1d_nodes_reproduced_exactly():
    """Nodes reproduce samples exactly"""
    f = Tabulated1DFunction(X, Y)
    for xi, yi in zip(X, Y):
        assert f.eval(xi) == yi, f"Node {xi} returned {f.eval(xi)}, expected {yi}"

def test_1d_linear_between_nodes():
    """Linear interpolation between nodes"""
    f = Tabulated1DFunction(X, Y)
    assert abs(f.eval(5.5e6) - 30.0) < 1e-12
    assert abs(f.eval(5.5e5) - 5.0) < 1e-12

def test_1d_extrapolation_continues_edge_slope():
    """Extrapolation continues the edge segment"""
    f = Tabulated1DFunction(X, Y)
    slope = 40.0 / 9e6
    assert abs(f.eval(2e7, extrapolate=True) - (50.0 + slope * 1e7)) < 1e-9
    assert abs(f.eval(0.0, extrapolate=True) - (-10.0 / 9e5 * 1e5)) < 1e-9
    assert abs(f.eval_derivative(2e7, extrapolate=True) - slope) < 1e-18

def test_1d_out_of_range_raises():
    """Out of range evaluation without extrapolation"""
    f = Tabulated1DFunction(X, Y)
    try:
        f.eval(2e7)
        assert False, "Should have raised TableRangeError"
    except TableRangeError:
        pass
    try:
        f.eval(np.array([1e5, 5e7]))
        assert False, "Should have raised TableRangeError"
    except TableRangeError:
        pass

def test_1d_array_evaluation():
    """Vectorized evaluation"""
    f = Tabulated1DFunction(X, Y)
    vals = f.eval(np.array([1e5, 5.5e6, 1e7]))
    assert isinstance(vals, np.ndarray)
    assert np.allclose(vals, [0.0, 30.0, 50.0], rtol=0, atol=1e-12)

def test_1d_construction_errors():
    """Invalid 1D samples"""
    for x, y in [([1.0, 1.0, 2.0], [0, 1, 2]), ([2.0, 1.0], [0, 1]), ([1.0], [0.0]), ([1.0, 2.0], [0.0])]:
        try:
            Tabulated1DFunction(x, y)
            assert False, f"Should have raised TableConstructionError for x={x}"
        except TableConstructionError:
            pass

def test_1d_container_of_tuples_and_frame():
    """Construction from tuples and DataFrames"""
    f = Tabulated1DFunction()
    f.set_container_of_tuples([(1.0, 2.0), (3.0, 4.0)])
    assert f.num_samples() == 2
    assert f.x_min() == 1.0 and f.x_max() == 3.0
    df = f.to_frame('P', 'RV')
    assert list(df.columns) == ['P', 'RV']
    assert df['RV'].tolist() == [2.0, 4.0]

def test_1d_frozen_table_rejects_changes():
    """Frozen table is read only"""
    f = Tabulated1DFunction(X, Y)
    f.freeze()
    assert f.frozen
    assert f.eval(1e6) == 10.0
    try:
        f.set_xy_arrays([0.0, 1.0], [0.0, 1.0])
        assert False, "Should have raised TableConstructionError"
    except TableConstructionError:
        pass

# =============================================================================
# 2D tables
# =============================================================================

def _two_column_table():
    t = Tabulated2DFunction('PG', 'RV', '1/BG')
    i = t.append_x_pos(1.0)
    t.append_sample_point(i, 1.0, 3.0)
    t.append_sample_point(i, 0.0, 1.0)   # Inserted in front, columns stay sorted
    i = t.append_x_pos(2.0)
    t.append_sample_point(i, 0.0, 5.0)
    t.append_sample_point(i, 2.0, 9.0, synthetic=True)
    return t

def test_2d_single_column():
    """2D table with one column"""
    t = Tabulated2DFunction(x_name='PG', y_name='RV', value_name='1/BG')
    i = t.append_x_pos(1e7)
    t.append_sample_point(i, 0.0, 80.0)
    t.append_sample_point(i, 1e-4, 82.0)
    assert abs(t.eval(1e7, 5e-5) - 81.0) < 1e-12
    # Outer position is ignored when there is a single column
    assert abs(t.eval(2e7, 5e-5, extrapolate=True) - 81.0) < 1e-12

def test_2d_interpolation():
    """Interpolation between and within columns"""
    t = _two_column_table()
    assert t.y_at(0, 0) == 0.0 and t.y_at(0, 1) == 1.0
    assert abs(t.eval(1.5, 1.0) - 5.0) < 1e-12
    assert t.eval(1.0, 1.0) == 3.0
    assert t.eval(2.0, 2.0) == 9.0

def test_2d_single_sample_column():
    """Column holding a single sample"""
    t = Tabulated2DFunction()
    i = t.append_x_pos(1.0)
    t.append_sample_point(i, 0.5, 7.0)
    assert t.eval(1.0, 0.5) == 7.0
    assert t.eval(1.0, 3.0) == 7.0

def test_2d_out_of_range_raises():
    """Out of range 2D evaluation without extrapolation"""
    t = _two_column_table()
    for x, y in [(3.0, 0.5), (1.5, -1.0), (1.5, 1.5)]:
        try:
            t.eval(x, y)
            assert False, f"Should have raised TableRangeError at ({x}, {y})"
        except TableRangeError:
            pass
    # (1.5, 1.5) lies beyond the first column, extrapolation extends its last segment
    assert abs(t.eval(1.5, 1.5, extrapolate=True) - 0.5 * (4.0 + 8.0)) < 1e-12

def test_2d_construction_errors():
    """Invalid 2D samples"""
    t = _two_column_table()
    try:
        t.append_x_pos(1.5)
        assert False, "Should have raised TableConstructionError"
    except TableConstructionError:
        pass
    try:
        t.append_sample_point(0, 1.0, 4.0)
        assert False, "Should have raised TableConstructionError"
    except TableConstructionError:
        pass

def test_2d_freeze_and_provenance():
    """Frozen 2D table and synthetic sample flags"""
    t = _two_column_table()
    t.freeze()
    assert t.num_synthetic() == 1
    assert t.is_synthetic(1, 1) and not t.is_synthetic(1, 0)
    try:
        t.append_x_pos(10.0)
        assert False, "Should have raised TableConstructionError"
    except TableConstructionError:
        pass
    df = t.to_frame()
    assert list(df.columns) == ['PG', 'RV', '1/BG', 'SYNTHETIC']
    assert len(df) == 4
    assert 'SYNTHETIC' in str(t)

def test_2d_applies():
    """Whether a point lies inside the tabulated domain"""
    t = _two_column_table()
    assert t.applies(1.5, 0.5)
    assert not t.applies(1.5, 1.5)
    assert not t.applies(0.5, 0.5)

def test_split_long_table():
    """Long format table split into rows"""
    frame = pd.DataFrame({'PG': [1e6, 2e6, 2e6], 'RV': [1e-5, 2e-5, 0.0],
                          'BG': [0.1, 0.05, 0.051], 'MUG': [1e-5, 1.1e-5, 1.05e-5]})
    outer, rows = split_long_table(frame, 'PG', ['RV', 'BG', 'MUG'])
    assert outer.tolist() == [1e6, 2e6]
    assert rows[0].shape == (1, 3)
    assert rows[1][:, 0].tolist() == [2e-5, 0.0]
    try:
        split_long_table(frame, 'PG', ['RV', 'BO'])
        assert False, "Should have raised TableConstructionError"
    except TableConstructionError:
        pass


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
