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

from pyblackoil.config import PvtConfig, default_config
from pyblackoil.errors import ConfigurationError
from pyblackoil.shared_fns import check_region

logger = logging.getLogger(__name__)


class RegionPvt():
    """ Region indexed storage shared by all phase PVT implementations

            Objects are built through set_* calls, then sealed by init_end(). Setting data after
            init_end(), or querying properties before it, raises ConfigurationError.
    """
    phase_name = 'fluid'

    def __init__(self, config: PvtConfig = None):
        self.config = config if config is not None else default_config
        self._finalized = False
        self._num_regions = 0
        self._oil_ref_den = []
        self._gas_ref_den = []
        self._water_ref_den = []
        self._oil_mw = []
        self._gas_mw = []
        self._water_mw = []

    @property
    def num_regions(self) -> int:
        return self._num_regions

    @property
    def finalized(self) -> bool:
        return self._finalized

    def set_num_regions(self, num_regions: int) -> None:
        self._check_mutable()
        if num_regions < 1:
            raise ConfigurationError(f"At least one PVT region is required, got {num_regions}")
        self._num_regions = int(num_regions)
        for attr in ['_oil_ref_den', '_gas_ref_den', '_water_ref_den', '_oil_mw', '_gas_mw', '_water_mw']:
            setattr(self, attr, [None] * self._num_regions)
        self._resize(self._num_regions)

    def _resize(self, num_regions: int) -> None:
        pass

    def set_reference_densities(self, region_idx: int, rho_oil: float, rho_gas: float, rho_water: float) -> None:
        """ Sets the densities (kg/m3) of the phases at surface conditions for a PVT region """
        self._check_mutable()
        check_region(region_idx, self._num_regions)
        self._oil_ref_den[region_idx] = rho_oil
        self._gas_ref_den[region_idx] = rho_gas
        self._water_ref_den[region_idx] = rho_water

    def set_molar_masses(self, region_idx: int, mw_oil: float, mw_gas: float, mw_water: float) -> None:
        """ Sets the molar masses (kg/mol) of the components for a PVT region """
        self._check_mutable()
        check_region(region_idx, self._num_regions)
        self._oil_mw[region_idx] = mw_oil
        self._gas_mw[region_idx] = mw_gas
        self._water_mw[region_idx] = mw_water

    def set_reference_data(self, density) -> None:
        """ Sets reference densities, and molar masses derived from them, from a DENSITY DataFrame
            density: DataFrame with columns OIL, GAS, WATER (kg/m3) and one row per region
        """
        for r in range(self._num_regions):
            row = density.iloc[r]
            self.set_reference_densities(r, row['OIL'], row['GAS'], row['WATER'])
            self.set_molar_masses(r, *self.config.molar_masses(row['GAS']))

    def reference_densities(self, region_idx: int) -> tuple:
        check_region(region_idx, self._num_regions)
        return self._oil_ref_den[region_idx], self._gas_ref_den[region_idx], self._water_ref_den[region_idx]

    def molar_masses(self, region_idx: int) -> tuple:
        check_region(region_idx, self._num_regions)
        return self._oil_mw[region_idx], self._gas_mw[region_idx], self._water_mw[region_idx]

    def _check_mutable(self, region_idx: int = None) -> None:
        if self._finalized:
            raise ConfigurationError(f"{type(self).__name__} has been finalized and cannot be modified")
        if region_idx is not None:
            check_region(region_idx, self._num_regions)

    def _check_ready(self, region_idx: int) -> None:
        if not self._finalized:
            raise ConfigurationError(f"{type(self).__name__} must be finalized with init_end() before use")
        check_region(region_idx, self._num_regions)

    def _require(self, values: list, what: str) -> None:
        missing = [r for r, v in enumerate(values) if v is None]
        if missing:
            raise ConfigurationError(f"{type(self).__name__}: {what} not set for regions {missing}")

    def _begin_init_end(self, need_molar_masses: bool = False) -> None:
        self._check_mutable()
        if self._num_regions < 1:
            raise ConfigurationError(f"{type(self).__name__}: set_num_regions() must be called first")
        self._require(self._oil_ref_den, 'reference densities')
        if need_molar_masses:
            self._require(self._oil_mw, 'molar masses')

    def _finish_init_end(self) -> None:
        self._finalized = True
        logger.debug(f"{type(self).__name__} finalized for {self._num_regions} regions")

    def _prepare_regions(self, num_tables: int, keyword: str) -> None:
        # Sizes the region vectors on first use, otherwise the table count must match
        if self._num_regions == 0:
            self.set_num_regions(num_tables)
        elif self._num_regions != num_tables:
            raise ConfigurationError(f"{num_tables} {keyword} tables given for {self._num_regions} regions")
