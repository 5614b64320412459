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

import numpy as np
import numpy.typing as npt
from scipy.interpolate import PchipInterpolator

from pyblackoil.errors import TableConstructionError, TableRangeError
from pyblackoil.shared_fns import value_of, sampling_points

logger = logging.getLogger(__name__)


class MonotonicSpline():
    """ C1 continuous, monotonicity preserving (PCHIP) curve through sample pairs

            Samples are sorted by x before fitting. Where several samples share the same x only the
            first one (in sorted order) is kept. Outside the sampled range the curve continues linearly
            with the slope at the nearest end.

            Used to generate initial guesses for iterative inversions, never as a property source.
    """
    def __init__(self, x: npt.ArrayLike = None, y: npt.ArrayLike = None):
        self._x = np.empty(0)
        self._y = np.empty(0)
        self._pchip = None
        self._dpchip = None
        if x is not None:
            self.set_xy_arrays(x, y)

    def set_xy_arrays(self, x: npt.ArrayLike, y: npt.ArrayLike) -> None:
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.ndim != 1 or x.shape != y.shape:
            raise TableConstructionError(f"x and y must be 1D arrays of equal length, got {x.shape} and {y.shape}")
        order = np.argsort(x, kind='stable')
        x, y = x[order], y[order]
        keep = np.concatenate(([True], np.diff(x) > 0))
        if not np.all(keep):
            logger.debug(f"Monotonic spline: dropped {np.count_nonzero(~keep)} samples with repeated x")
        x, y = x[keep], y[keep]
        if x.size < 2:
            raise TableConstructionError("A monotonic spline needs at least two distinct sample points")
        self._x, self._y = x, y
        self._pchip = PchipInterpolator(x, y, extrapolate=False)
        self._dpchip = self._pchip.derivative()

    def set_container_of_tuples(self, samples) -> None:
        x, y = sampling_points(samples)
        self.set_xy_arrays(x, y)

    def num_samples(self) -> int:
        return self._x.size

    def x_min(self) -> float:
        return float(self._x[0])

    def x_max(self) -> float:
        return float(self._x[-1])

    def applies(self, x) -> bool:
        return self.x_min() <= value_of(x) <= self.x_max()

    def _check_ready(self):
        if self._pchip is None:
            raise TableRangeError("Spline has not been initialized")

    def eval(self, x, extrapolate: bool = False):
        self._check_ready()
        xv = value_of(x)
        if self.applies(xv):
            return float(self._pchip(xv))
        if not extrapolate:
            raise TableRangeError(f"x = {xv} outside of spline range [{self.x_min()}, {self.x_max()}]")
        if xv < self.x_min():
            x_edge, y_edge = self.x_min(), float(self._y[0])
        else:
            x_edge, y_edge = self.x_max(), float(self._y[-1])
        return y_edge + float(self._dpchip(x_edge)) * (x - x_edge)

    def eval_derivative(self, x, extrapolate: bool = False) -> float:
        self._check_ready()
        xv = value_of(x)
        if self.applies(xv):
            return float(self._dpchip(xv))
        if not extrapolate:
            raise TableRangeError(f"x = {xv} outside of spline range [{self.x_min()}, {self.x_max()}]")
        return float(self._dpchip(self.x_min() if xv < self.x_min() else self.x_max()))
