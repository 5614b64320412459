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

from pyblackoil.classes import class_dic, oil_pvt_approach, gas_pvt_approach, water_pvt_approach
from pyblackoil.config import PvtConfig, default_config
from pyblackoil.errors import ConfigurationError
from pyblackoil.gas import WetGasPvt, DryGasPvt
from pyblackoil.oil import LiveOilPvt, DeadOilPvt, ConstantCompressibilityOilPvt
from pyblackoil.validate import validate_methods
from pyblackoil.water import ConstantCompressibilityWaterPvt

logger = logging.getLogger(__name__)


class PvtMultiplexer():
    """ Owns the single PVT implementation selected for a phase and forwards every query to it

            The approach is chosen once, either explicitly with set_approach() or from the tables
            handed to init_from_tables(). Until then every query raises ConfigurationError.
    """
    method_key = None       # class_dic key of the approach Enum
    implementations = {}    # approach -> implementation class
    keywords = []           # (table keyword, approach) in order of precedence

    def __init__(self, config: PvtConfig = None):
        self.config = config if config is not None else default_config
        self._approach = class_dic[self.method_key].NONE
        self._real_pvt = None
        self._companion = None

    @property
    def approach(self):
        return self._approach

    @property
    def real_pvt(self):
        """ The implementation all queries are forwarded to """
        if self._real_pvt is None:
            raise ConfigurationError(f"{type(self).__name__}: no PVT approach has been selected")
        return self._real_pvt

    def set_approach(self, approach) -> None:
        """ Selects the PVT approach, allowed once
            approach: Enum member or its (case insensitive) name, e.g. 'LIVE'
        """
        approach = validate_methods([self.method_key], [approach])
        if self._real_pvt is not None:
            raise ConfigurationError(f"{type(self).__name__}: approach already set to {self._approach.name}, "
                                     f"cannot change it to {approach.name}")
        if approach not in self.implementations:
            raise ConfigurationError(f"{type(self).__name__}: {approach.name} is not a usable PVT approach")
        self._real_pvt = self.implementations[approach](self.config)
        self._approach = approach
        logger.debug(f"{type(self).__name__}: approach {approach.name} selected")

    def select_approach(self, tables: dict):
        """ Returns the approach matching the highest precedence keyword present in tables """
        for keyword, approach in self.keywords:
            if tables.get(keyword) is not None:
                return keyword, approach
        raise ConfigurationError(f"{type(self).__name__}: none of the tables {[k for k, _ in self.keywords]} were given")

    def init_from_tables(self, tables: dict, density=None) -> None:
        """ Selects the approach from the tables present and fills the implementation
            tables: Dictionary of table keyword -> pandas data, e.g. {'PVTO': [frame_region0, frame_region1]}
            density: Optional DataFrame with columns OIL, GAS, WATER and one row per region
        """
        keyword, approach = self.select_approach(tables)
        self.set_approach(approach)
        self.real_pvt.init_from_tables(tables[keyword], density)

    def set_num_regions(self, num_regions: int) -> None:
        self.real_pvt.set_num_regions(num_regions)

    @property
    def num_regions(self) -> int:
        return self.real_pvt.num_regions

    def set_reference_densities(self, region_idx: int, rho_oil: float, rho_gas: float, rho_water: float) -> None:
        self.real_pvt.set_reference_densities(region_idx, rho_oil, rho_gas, rho_water)

    def set_molar_masses(self, region_idx: int, mw_oil: float, mw_gas: float, mw_water: float) -> None:
        self.real_pvt.set_molar_masses(region_idx, mw_oil, mw_gas, mw_water)

    def init_end(self) -> None:
        self.real_pvt.init_end(self._companion)

    def viscosity(self, region_idx: int, temperature, pressure, composition):
        return self.real_pvt.viscosity(region_idx, temperature, pressure, composition)

    def formation_volume_factor(self, region_idx: int, temperature, pressure, composition):
        return self.real_pvt.formation_volume_factor(region_idx, temperature, pressure, composition)

    def density(self, region_idx: int, temperature, pressure, composition):
        return self.real_pvt.density(region_idx, temperature, pressure, composition)

    def fugacity_coefficient_oil(self, region_idx: int, temperature, pressure):
        return self.real_pvt.fugacity_coefficient_oil(region_idx, temperature, pressure)

    def fugacity_coefficient_gas(self, region_idx: int, temperature, pressure):
        return self.real_pvt.fugacity_coefficient_gas(region_idx, temperature, pressure)

    def fugacity_coefficient_water(self, region_idx: int, temperature, pressure):
        return self.real_pvt.fugacity_coefficient_water(region_idx, temperature, pressure)

    def saturated_viscosity(self, region_idx: int, temperature, pressure):
        return self.real_pvt.saturated_viscosity(region_idx, temperature, pressure)

    def saturated_formation_volume_factor(self, region_idx: int, temperature, pressure):
        return self.real_pvt.saturated_formation_volume_factor(region_idx, temperature, pressure)

    def saturated_density(self, region_idx: int, temperature, pressure):
        return self.real_pvt.saturated_density(region_idx, temperature, pressure)

    def saturation_pressure(self, region_idx: int, temperature, composition):
        return self.real_pvt.saturation_pressure(region_idx, temperature, composition)

    def __repr__(self):
        return f"{type(self).__name__}(approach={self._approach.name})"



class OilPvtMultiplexer(PvtMultiplexer):
    """ Oil phase: live oil (PVTO), dead oil (PVDO) or constant compressibility oil (PVCDO) """
    method_key = 'oilapproach'
    implementations = {
        oil_pvt_approach.LIVE: LiveOilPvt,
        oil_pvt_approach.DEAD: DeadOilPvt,
        oil_pvt_approach.CONSTCOMP: ConstantCompressibilityOilPvt,
    }
    keywords = [('PVCDO', oil_pvt_approach.CONSTCOMP), ('PVDO', oil_pvt_approach.DEAD), ('PVTO', oil_pvt_approach.LIVE)]

    def set_gas_pvt(self, gas_pvt) -> None:
        # Non owning, only live oil makes use of it
        self._companion = gas_pvt

    def gas_dissolution_factor(self, region_idx: int, temperature, pressure):
        return self.real_pvt.gas_dissolution_factor(region_idx, temperature, pressure)

    def saturated_oil_gas_mass_fraction(self, region_idx: int, temperature, pressure):
        return self.real_pvt.saturated_oil_gas_mass_fraction(region_idx, temperature, pressure)

    def saturated_oil_gas_mole_fraction(self, region_idx: int, temperature, pressure):
        return self.real_pvt.saturated_oil_gas_mole_fraction(region_idx, temperature, pressure)


class GasPvtMultiplexer(PvtMultiplexer):
    """ Gas phase: wet gas (PVTG) or dry gas (PVDG) """
    method_key = 'gasapproach'
    implementations = {
        gas_pvt_approach.WET: WetGasPvt,
        gas_pvt_approach.DRY: DryGasPvt,
    }
    keywords = [('PVDG', gas_pvt_approach.DRY), ('PVTG', gas_pvt_approach.WET)]

    def set_oil_pvt(self, oil_pvt) -> None:
        # Non owning, only wet gas makes use of it
        self._companion = oil_pvt

    def oil_vaporization_factor(self, region_idx: int, temperature, pressure):
        return self.real_pvt.oil_vaporization_factor(region_idx, temperature, pressure)

    def saturated_gas_oil_mass_fraction(self, region_idx: int, temperature, pressure):
        return self.real_pvt.saturated_gas_oil_mass_fraction(region_idx, temperature, pressure)

    def saturated_gas_oil_mole_fraction(self, region_idx: int, temperature, pressure):
        return self.real_pvt.saturated_gas_oil_mole_fraction(region_idx, temperature, pressure)


class WaterPvtMultiplexer(PvtMultiplexer):
    """ Water phase: constant compressibility water (PVTW) """
    method_key = 'waterapproach'
    implementations = {
        water_pvt_approach.CONSTCOMP: ConstantCompressibilityWaterPvt,
    }
    keywords = [('PVTW', water_pvt_approach.CONSTCOMP)]

    def init_end(self) -> None:
        self.real_pvt.init_end()

    def viscosity(self, region_idx: int, temperature, pressure, composition=None):
        return self.real_pvt.viscosity(region_idx, temperature, pressure)

    def formation_volume_factor(self, region_idx: int, temperature, pressure, composition=None):
        return self.real_pvt.formation_volume_factor(region_idx, temperature, pressure)

    def density(self, region_idx: int, temperature, pressure, composition=None):
        return self.real_pvt.density(region_idx, temperature, pressure)

    def saturated_viscosity(self, region_idx: int, temperature, pressure):
        return self.viscosity(region_idx, temperature, pressure)

    def saturated_formation_volume_factor(self, region_idx: int, temperature, pressure):
        return self.formation_volume_factor(region_idx, temperature, pressure)

    def saturated_density(self, region_idx: int, temperature, pressure):
        return self.density(region_idx, temperature, pressure)

    def saturation_pressure(self, region_idx: int, temperature, composition):
        raise ConfigurationError("Water holds no dissolved components, its saturation pressure is undefined")


def bind(oil: OilPvtMultiplexer, gas: GasPvtMultiplexer) -> None:
    """ Hands each hydrocarbon phase a read-only reference to the other, must precede init_end() """
    oil.set_gas_pvt(gas)
    gas.set_oil_pvt(oil)
