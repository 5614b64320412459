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

from tabulate import tabulate

from pyblackoil.classes import phase, component, oil_pvt_approach, gas_pvt_approach
from pyblackoil.config import PvtConfig, default_config
from pyblackoil.errors import ConfigurationError
from pyblackoil.multiplexer import OilPvtMultiplexer, GasPvtMultiplexer, WaterPvtMultiplexer, bind
from pyblackoil.shared_fns import check_region
from pyblackoil.validate import validate_methods

logger = logging.getLogger(__name__)


class BlackOilPvt():
    """ Black-oil PVT model of one fluid: the oil, gas and water multiplexers of all PVT regions

            Build with BlackOilPvt.from_tables(). A phase whose tables are absent stays inactive and
            its multiplexer raises ConfigurationError when queried.

            Usage example:
                tables = {'DENSITY': pd.DataFrame({'OIL': [850.0], 'WATER': [1000.0], 'GAS': [0.85]}),
                          'PVDO': [pvdo_frame], 'PVDG': [pvdg_frame],
                          'PVTW': pd.DataFrame({'PREF': [1e7], 'BW': [1.02], 'CW': [4.5e-10], 'MUW': [5e-4], 'CV': [0.0]})}
                pvt = BlackOilPvt.from_tables(tables)
                pvt.oil.density(0, 350.0, 2e7, 0.0)
    """
    def __init__(self, config: PvtConfig = None):
        self.config = config if config is not None else default_config
        self.oil = OilPvtMultiplexer(self.config)
        self.gas = GasPvtMultiplexer(self.config)
        self.water = WaterPvtMultiplexer(self.config)
        self._density = None

    @classmethod
    def from_tables(cls, tables: dict, config: PvtConfig = None) -> 'BlackOilPvt':
        """ Builds and finalizes the PVT model from already extracted tables
            tables: Dictionary keyed by table keyword
                DENSITY: DataFrame with columns OIL, WATER, GAS (kg/m3) and one row per region (required)
                PVTO, PVDO, PVTG, PVDG: List with one DataFrame per region
                PVCDO, PVTW: DataFrame with one row per region
            config: PvtConfig, defaults to the standard surface conditions and molar masses
        """
        pvt = cls(config)
        density = tables.get('DENSITY')
        if density is None:
            raise ConfigurationError("DENSITY table is required")
        missing = [c for c in ['OIL', 'WATER', 'GAS'] if c not in density.columns]
        if missing:
            raise ConfigurationError(f"DENSITY table is missing columns {missing}")
        if len(density) < 1:
            raise ConfigurationError("DENSITY table holds no region")
        pvt._density = density.reset_index(drop=True)

        for mux in [pvt.oil, pvt.gas, pvt.water]:
            pvt._init_phase(mux, tables)
        bind(pvt.oil, pvt.gas)

        # Gas first, as in the order hydrocarbon phases are finalized by the fluid system
        for mux in [pvt.gas, pvt.oil, pvt.water]:
            if mux.approach.name != 'NONE':
                mux.init_end()
        logger.info(f"Black-oil PVT initialized for {pvt.num_regions} regions: oil {pvt.oil.approach.name}, "
                    f"gas {pvt.gas.approach.name}, water {pvt.water.approach.name}")
        return pvt

    def _init_phase(self, mux, tables: dict) -> None:
        present = [k for k, _ in mux.keywords if tables.get(k) is not None]
        if not present:
            logger.info(f"{type(mux).__name__}: no table given, phase inactive")
            return
        keyword = present[0]
        if len(present) > 1:
            logger.info(f"{type(mux).__name__}: tables {present} given, using {keyword}")
        if len(tables[keyword]) != self.num_regions:
            raise ConfigurationError(f"{keyword} holds {len(tables[keyword])} regions, DENSITY holds {self.num_regions}")
        mux.init_from_tables(tables, self._density)
        logger.info(f"{type(mux).__name__}: approach {mux.approach.name} from {keyword}")

    @property
    def num_regions(self) -> int:
        return 0 if self._density is None else len(self._density)

    @property
    def enable_dissolved_gas(self) -> bool:
        return self.config.enable_dissolved_gas and self.oil.approach == oil_pvt_approach.LIVE

    @property
    def enable_vaporized_oil(self) -> bool:
        return self.config.enable_vaporized_oil and self.gas.approach == gas_pvt_approach.WET

    def reference_density(self, phase_idx, region_idx: int) -> float:
        """ Density (kg/m3) of a phase at surface conditions
            phase_idx: phase Enum member or its name, e.g. 'OIL'
            region_idx: PVT region
        """
        phase_idx = validate_methods(['phase'], [phase_idx])
        check_region(region_idx, self.num_regions)
        return float(self._density.loc[region_idx, phase_idx.name])

    def molar_mass(self, component_idx, region_idx: int) -> float:
        """ Molar mass (kg/mol) of a component
            component_idx: component Enum member or its name, e.g. 'GAS'
            region_idx: PVT region
        """
        component_idx = validate_methods(['component'], [component_idx])
        check_region(region_idx, self.num_regions)
        mw_oil, mw_gas, mw_water = self.config.molar_masses(self._density.loc[region_idx, 'GAS'])
        return {component.OIL: mw_oil, component.GAS: mw_gas, component.WATER: mw_water}[component_idx]

    def summary(self) -> str:
        """ Returns a text table of the selected approaches and the per region reference data """
        rows = []
        for r in range(self.num_regions):
            rows.append([r] + [self.reference_density(p, r) for p in [phase.OIL, phase.GAS, phase.WATER]]
                        + [self.molar_mass(c, r) for c in [component.OIL, component.GAS, component.WATER]])
        headers = ['Region', 'Rho Oil', 'Rho Gas', 'Rho Water', 'MW Oil', 'MW Gas', 'MW Water']
        approaches = (f"Oil: {self.oil.approach.name}, Gas: {self.gas.approach.name}, "
                      f"Water: {self.water.approach.name}")
        return approaches + '\n' + tabulate(rows, headers=headers)
