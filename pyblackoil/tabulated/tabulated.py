#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyBlackOil - Region based black-oil PVT property engine
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

import logging
from bisect import bisect_left, bisect_right
from typing import Union

import numpy as np
import numpy.typing as npt
import pandas as pd
from tabulate import tabulate

from pyblackoil.errors import TableConstructionError, TableRangeError
from pyblackoil.shared_fns import value_of, sampling_points

logger = logging.getLogger(__name__)


def _lerp(v0, v1, alpha):
    # Weighted form returns the node values exactly at alpha = 0 and alpha = 1
    return v0 * (1 - alpha) + v1 * alpha


class Tabulated1DFunction():
    """ Piecewise linear function of one variable defined by (x, y) samples

            x values must be strictly increasing. Evaluation outside [x_min, x_max] extends the
            first or last segment linearly when extrapolate is True, and raises TableRangeError otherwise.

            Usage example:
                f = Tabulated1DFunction([1e5, 1e6, 1e7], [0.0, 10.0, 50.0])
                f.eval(5.5e6)
                >> 30.0
    """
    def __init__(self, x: npt.ArrayLike = None, y: npt.ArrayLike = None):
        self._x = np.empty(0)
        self._y = np.empty(0)
        self._frozen = False
        if x is not None:
            self.set_xy_arrays(x, y)

    def set_xy_arrays(self, x: npt.ArrayLike, y: npt.ArrayLike) -> None:
        self._check_mutable()
        x = np.array(x, dtype=float)
        y = np.array(y, dtype=float)
        if x.ndim != 1 or x.shape != y.shape:
            raise TableConstructionError(f"x and y must be 1D arrays of equal length, got {x.shape} and {y.shape}")
        if x.size < 2:
            raise TableConstructionError("A tabulated function needs at least two sample points")
        if np.any(np.diff(x) <= 0):
            raise TableConstructionError("Sample x values must be strictly increasing")
        self._x, self._y = x, y

    def set_container_of_tuples(self, samples) -> None:
        """ samples: container of (x, y) pairs, an (n, 2) array, or a two column DataFrame """
        x, y = sampling_points(samples)
        self.set_xy_arrays(x, y)

    def freeze(self) -> None:
        self._x.flags.writeable = False
        self._y.flags.writeable = False
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise TableConstructionError("Tabulated function is frozen and cannot be modified")

    def num_samples(self) -> int:
        return self._x.size

    def x_min(self) -> float:
        return self._x[0]

    def x_max(self) -> float:
        return self._x[-1]

    def x_at(self, i: int) -> float:
        return self._x[i]

    def value_at(self, i: int) -> float:
        return self._y[i]

    def x_values(self) -> np.ndarray:
        return self._x.copy()

    def y_values(self) -> np.ndarray:
        return self._y.copy()

    def applies(self, x) -> bool:
        return self.x_min() <= value_of(x) <= self.x_max()

    def find_segment_index(self, x, extrapolate: bool = False) -> int:
        """ Index of the first sample of the segment used to evaluate at x """
        if self.num_samples() < 2:
            raise TableRangeError("Tabulated function has not been initialized")
        xv = value_of(x)
        if not extrapolate and not self.applies(xv):
            raise TableRangeError(f"x = {xv} outside of tabulated range [{self.x_min()}, {self.x_max()}]")
        i = int(np.searchsorted(self._x, xv, side='right')) - 1
        return min(max(i, 0), self.num_samples() - 2)

    def eval(self, x: Union[float, npt.ArrayLike], extrapolate: bool = False):
        """ Returns the interpolated value at x (scalar, evaluation object or numpy array)
            x: Point(s) of interest
            extrapolate: Extend the edge segments linearly outside the tabulated range. Default False
        """
        if isinstance(x, (np.ndarray, list, tuple)):
            return self._eval_array(np.asarray(x, dtype=float), extrapolate)
        i = self.find_segment_index(x, extrapolate)
        x0, x1 = float(self._x[i]), float(self._x[i + 1])
        alpha = (x - x0) / (x1 - x0)
        return _lerp(float(self._y[i]), float(self._y[i + 1]), alpha)

    def _eval_array(self, x: np.ndarray, extrapolate: bool) -> np.ndarray:
        if self.num_samples() < 2:
            raise TableRangeError("Tabulated function has not been initialized")
        if not extrapolate and x.size > 0 and (x.min() < self.x_min() or x.max() > self.x_max()):
            raise TableRangeError(f"Values outside of tabulated range [{self.x_min()}, {self.x_max()}]")
        idx = np.clip(np.searchsorted(self._x, x, side='right') - 1, 0, self.num_samples() - 2)
        x0, x1 = self._x[idx], self._x[idx + 1]
        alpha = (x - x0) / (x1 - x0)
        return _lerp(self._y[idx], self._y[idx + 1], alpha)

    def eval_derivative(self, x, extrapolate: bool = False) -> float:
        """ Returns dy/dx of the segment used to evaluate at x """
        i = self.find_segment_index(x, extrapolate)
        return float((self._y[i + 1] - self._y[i]) / (self._x[i + 1] - self._x[i]))

    def to_frame(self, x_name: str = 'X', y_name: str = 'Y') -> pd.DataFrame:
        return pd.DataFrame({x_name: self._x, y_name: self._y})


class Tabulated2DFunction():
    """ Ragged 2D table: each outer x position owns its own sorted sequence of (y, value) samples

            Outer positions are appended in strictly increasing order and are never sorted.
            Inner samples are kept sorted by y as they are appended. Each sample carries a
            'synthetic' flag so that points produced by table extension can be told apart
            from supplied data.

            Evaluation interpolates along y within the two columns bracketing x, then linearly
            along x between the two column values.

            Usage example:
                t = Tabulated2DFunction(x_name = 'PG', y_name = 'RV', value_name = '1/BG')
                i = t.append_x_pos(1e7)
                t.append_sample_point(i, 0.0, 80.0)
                t.append_sample_point(i, 1e-4, 82.0)
                t.eval(1e7, 5e-5)
                >> 81.0
    """
    def __init__(self, x_name: str = 'X', y_name: str = 'Y', value_name: str = 'VALUE'):
        self.x_name = x_name
        self.y_name = y_name
        self.value_name = value_name
        self._x = []
        self._ys = []      # Per column list of inner positions
        self._vals = []    # Per column list of values
        self._synth = []   # Per column list of provenance flags
        self._frozen = False

    def append_x_pos(self, x: float) -> int:
        """ Appends an outer position and returns its index """
        self._check_mutable()
        x = float(x)
        if self._x and x <= self._x[-1]:
            raise TableConstructionError(f"Outer positions must be strictly increasing: {x} after {self._x[-1]}")
        self._x.append(x)
        self._ys.append([])
        self._vals.append([])
        self._synth.append([])
        return len(self._x) - 1

    def append_sample_point(self, i: int, y: float, value: float, synthetic: bool = False) -> int:
        """ Adds a (y, value) sample to column i and returns its position within the column """
        self._check_mutable()
        assert 0 <= i < self.num_x(), f"Column {i} does not exist"
        y = float(y)
        ys = self._ys[i]
        j = bisect_left(ys, y)
        if j < len(ys) and ys[j] == y:
            raise TableConstructionError(f"Duplicate {self.y_name} = {y} in column {self.x_name} = {self._x[i]}")
        ys.insert(j, y)
        self._vals[i].insert(j, float(value))
        self._synth[i].insert(j, bool(synthetic))
        return j

    def freeze(self) -> None:
        self._ys = [tuple(col) for col in self._ys]
        self._vals = [tuple(col) for col in self._vals]
        self._synth = [tuple(col) for col in self._synth]
        self._x = tuple(self._x)
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise TableConstructionError("Tabulated function is frozen and cannot be modified")

    def num_x(self) -> int:
        return len(self._x)

    def num_y(self, i: int) -> int:
        return len(self._ys[i])

    def x_at(self, i: int) -> float:
        return self._x[i]

    def y_at(self, i: int, j: int) -> float:
        return self._ys[i][j]

    def value_at(self, i: int, j: int) -> float:
        return self._vals[i][j]

    def is_synthetic(self, i: int, j: int) -> bool:
        return self._synth[i][j]

    def num_synthetic(self) -> int:
        return sum(sum(col) for col in self._synth)

    def x_min(self) -> float:
        return self._x[0]

    def x_max(self) -> float:
        return self._x[-1]

    def y_min(self, i: int) -> float:
        return self._ys[i][0]

    def y_max(self, i: int) -> float:
        return self._ys[i][-1]

    def applies(self, x, y) -> bool:
        if self.num_x() == 0:
            return False
        xv, yv = value_of(x), value_of(y)
        if not self.x_min() <= xv <= self.x_max():
            return False
        i = self._x_segment_index(xv)
        cols = [i] if self.num_x() == 1 else [i, i + 1]
        return all(self.num_y(c) > 0 and self.y_min(c) <= yv <= self.y_max(c) for c in cols)

    def _x_segment_index(self, xv: float) -> int:
        if self.num_x() == 1:
            return 0
        i = bisect_right(self._x, xv) - 1
        return min(max(i, 0), self.num_x() - 2)

    def _eval_column(self, i: int, y, extrapolate: bool):
        ys = self._ys[i]
        n = len(ys)
        if n == 0:
            raise TableRangeError(f"Column {self.x_name} = {self._x[i]} has no samples")
        if n == 1:
            return self._vals[i][0]
        yv = value_of(y)
        if not extrapolate and not ys[0] <= yv <= ys[-1]:
            raise TableRangeError(f"{self.y_name} = {yv} outside of range [{ys[0]}, {ys[-1]}] "
                                  f"of column {self.x_name} = {self._x[i]}")
        j = min(max(bisect_right(ys, yv) - 1, 0), n - 2)
        alpha = (y - ys[j]) / (ys[j + 1] - ys[j])
        return _lerp(self._vals[i][j], self._vals[i][j + 1], alpha)

    def eval(self, x, y, extrapolate: bool = False):
        """ Returns the interpolated value at (x, y)
            x: Outer position of interest
            y: Inner position of interest
            extrapolate: Extend edge segments linearly outside the tabulated ranges. Default False
        """
        if self.num_x() == 0:
            raise TableRangeError("Tabulated function has not been initialized")
        xv = value_of(x)
        if not extrapolate and not self.x_min() <= xv <= self.x_max():
            raise TableRangeError(f"{self.x_name} = {xv} outside of range [{self.x_min()}, {self.x_max()}]")
        if self.num_x() == 1:
            return self._eval_column(0, y, extrapolate)
        i = self._x_segment_index(xv)
        alpha = (x - self._x[i]) / (self._x[i + 1] - self._x[i])
        # A column carrying zero weight may be evaluated outside its own range
        av = value_of(alpha)
        v0 = self._eval_column(i, y, extrapolate or av == 1)
        v1 = self._eval_column(i + 1, y, extrapolate or av == 0)
        return _lerp(v0, v1, alpha)

    def to_frame(self) -> pd.DataFrame:
        """ Returns the table in long format with one row per sample """
        rows = []
        for i, x in enumerate(self._x):
            for y, v, s in zip(self._ys[i], self._vals[i], self._synth[i]):
                rows.append([x, y, v, s])
        return pd.DataFrame(rows, columns=[self.x_name, self.y_name, self.value_name, 'SYNTHETIC'])

    def __str__(self):
        return tabulate(self.to_frame(), headers='keys', showindex=False)


def split_long_table(frame: pd.DataFrame, outer: str, inner: list) -> tuple:
    """ Splits a long format saturated/undersaturated table into its rows
        Returns (outer_values, rows) where rows holds one (n, len(inner)) array per outer value,
        in order of first appearance (the saturated record first within each row)

        frame: DataFrame with one record per sample, e.g. columns PG, RV, BG, MUG for PVTG
        outer: Name of the column holding the outer position
        inner: Names of the columns making up each sample
    """
    missing = [c for c in [outer] + list(inner) if c not in frame.columns]
    if missing:
        raise TableConstructionError(f"Table is missing columns {missing}")
    outer_values, rows = [], []
    for key, grp in frame.groupby(outer, sort=False):
        outer_values.append(float(key))
        rows.append(grp[list(inner)].to_numpy(dtype=float))
    return np.array(outer_values), rows
