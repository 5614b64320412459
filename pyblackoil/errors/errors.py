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

class PVTError(Exception):
    """Base class for all pyBlackOil errors."""

    pass


class ConfigurationError(PVTError, ValueError):
    """Raised when a PVT approach is missing, invalid or used before/after its initialization window."""

    pass


class TableConstructionError(PVTError, ValueError):
    """Raised when tabulated input data cannot be turned into a valid table."""

    pass


class TableRangeError(PVTError, ValueError):
    """Raised when a table is evaluated outside its domain without extrapolation."""

    pass


class NumericalIssue(PVTError, ArithmeticError):
    """Raised when an iterative inversion fails to converge."""

    def __init__(self, message: str, region_idx=None, target=None):
        super().__init__(message)
        self.region_idx = region_idx
        self.target = target
