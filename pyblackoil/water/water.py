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

import pandas as pd

from pyblackoil.config import PvtConfig
from pyblackoil.constants import PVAP_WATER, INSOLUBLE_SCALE
from pyblackoil.region import RegionPvt
from pyblackoil.shared_fns import constant_compressibility_factor


class ConstantCompressibilityWaterPvt(RegionPvt):
    """ Water phase PVT with constant compressibility (PVTW)

            Per region: reference pressure p_ref, formation volume factor at p_ref, compressibility c_w,
            viscosity at p_ref and viscosibility c_v.
                Bw = Bw_ref / (1 + X + X^2/2), X = c_w * (p - p_ref)
                Bw * mu_w = Bw_ref * mu_ref / (1 + Y + Y^2/2), Y = (c_w - c_v) * (p - p_ref)

            Usage example:
                water = ConstantCompressibilityWaterPvt()
                water.set_num_regions(1)
                water.set_reference_densities(0, 850.0, 0.85, 1000.0)
                water.set_water_parameters(0, 1e7, 1.02, 4.5e-10, 5e-4, 0.0)
                water.init_end()
                water.formation_volume_factor(0, 350.0, 1e7)
                >> 1.02
    """
    phase_name = 'water'

    def __init__(self, config: PvtConfig = None):
        super().__init__(config)
        self._params = []

    def _resize(self, num_regions: int) -> None:
        self._params = [None] * num_regions

    def set_water_parameters(self, region_idx: int, p_ref: float, bw_ref: float, cw: float, muw_ref: float, cv: float) -> None:
        """ p_ref: Reference pressure (Pa)
            bw_ref: Water formation volume factor at p_ref (rm3/sm3)
            cw: Water compressibility (1/Pa)
            muw_ref: Water viscosity at p_ref (Pa.s)
            cv: Water viscosibility (1/Pa)
        """
        self._check_mutable(region_idx)
        self._params[region_idx] = (p_ref, bw_ref, cw, muw_ref, cv)

    def init_from_tables(self, pvtw: pd.DataFrame, density: pd.DataFrame = None) -> None:
        """ pvtw: DataFrame with columns PREF, BW, CW, MUW, CV and one row per region
            density: Optional DataFrame with columns OIL, GAS, WATER and one row per region
        """
        self._check_mutable()
        self._prepare_regions(len(pvtw), 'PVTW')
        if density is not None:
            self.set_reference_data(density)
        for r in range(self._num_regions):
            row = pvtw.iloc[r]
            self.set_water_parameters(r, row['PREF'], row['BW'], row['CW'], row['MUW'], row['CV'])

    def init_end(self) -> None:
        self._begin_init_end()
        self._require(self._params, 'PVTW parameters')
        self._finish_init_end()

    def formation_volume_factor(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        p_ref, bw_ref, cw, _, _ = self._params[region_idx]
        return constant_compressibility_factor(bw_ref, cw, pressure - p_ref)

    def viscosity(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        p_ref, bw_ref, cw, muw_ref, cv = self._params[region_idx]
        bw_mu = constant_compressibility_factor(bw_ref * muw_ref, cw - cv, pressure - p_ref)
        return bw_mu / constant_compressibility_factor(bw_ref, cw, pressure - p_ref)

    def density(self, region_idx: int, temperature, pressure):
        bw = self.formation_volume_factor(region_idx, temperature, pressure)
        return self._water_ref_den[region_idx] / bw

    def fugacity_coefficient_water(self, region_idx: int, temperature, pressure):
        # Pseudo vapour pressure of water
        self._check_ready(region_idx)
        return PVAP_WATER / pressure

    def fugacity_coefficient_gas(self, region_idx: int, temperature, pressure):
        return INSOLUBLE_SCALE * self.fugacity_coefficient_water(region_idx, temperature, pressure)

    def fugacity_coefficient_oil(self, region_idx: int, temperature, pressure):
        return INSOLUBLE_SCALE * self.fugacity_coefficient_water(region_idx, temperature, pressure)
