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

import numpy as np

from pyblackoil.errors import TableConstructionError

def value_of(x) -> float:
    # Scalar part of a plain number or of an evaluation carrying derivatives in .value
    return float(getattr(x, 'value', x))

def check_region(region_idx: int, num_regions: int) -> None:
    assert 0 <= region_idx < num_regions, f"PVT region {region_idx} out of range (0 - {num_regions - 1})"

def sampling_points(samples) -> tuple:
    """ Splits a container of (x, y) tuples, an (n, 2) array or a two column DataFrame into x and y arrays """
    arr = np.asarray(samples, dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise TableConstructionError(f"Expected (x, y) sample pairs, got array of shape {arr.shape}")
    return arr[:, 0].copy(), arr[:, 1].copy()

def constant_compressibility_factor(b_ref, c, dp):
    """ Volume factor of a constant compressibility fluid, using the second order expansion of exp(c * dp)
        b_ref: Volume factor at the reference pressure
        c: Compressibility (1/Pa)
        dp: Pressure minus the reference pressure (Pa)
    """
    x = c * dp
    return b_ref / (1 + x + x * x / 2)
