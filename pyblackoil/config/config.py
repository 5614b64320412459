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

from pyblackoil.constants import P_SURF, T_SURF, R, MW_OIL, MW_WATER, NCOMP_SAMPLES, USAT_DEN_SLOPE

class PvtConfig():
    """ Explicit configuration values threaded through the construction of the PVT objects

            Inputs:
                surface_pressure: Pressure at reference (surface) conditions (Pa). Default 101325
                surface_temperature: Temperature at reference (surface) conditions (K). Default 288.71
                oil_molar_mass: Molar mass of the oil component (kg/mol). Default 0.175
                water_molar_mass: Molar mass of the water component (kg/mol). Default 0.018
                num_composition_samples: Number of composition columns used when a 2D table is synthesized from a saturated curve. Default 20
                undersaturated_density_slope: Relative density change per Pa used to synthesize undersaturated branches
                enable_dissolved_gas: Whether gas may dissolve in the oil phase. Default True
                enable_vaporized_oil: Whether oil may vaporize into the gas phase. Default False

            Usage example:
                cfg = PvtConfig(surface_temperature = 293.15)
                cfg.gas_molar_mass(0.85)  # Ideal gas molar mass (kg/mol) of a gas with 0.85 kg/m3 surface density
                >> 0.02044...
    """
    def __init__(self,
                 surface_pressure: float = P_SURF,
                 surface_temperature: float = T_SURF,
                 oil_molar_mass: float = MW_OIL,
                 water_molar_mass: float = MW_WATER,
                 num_composition_samples: int = NCOMP_SAMPLES,
                 undersaturated_density_slope: float = USAT_DEN_SLOPE,
                 enable_dissolved_gas: bool = True,
                 enable_vaporized_oil: bool = False):
        if surface_pressure <= 0 or surface_temperature <= 0:
            raise ValueError("Surface pressure and temperature must be positive")
        if num_composition_samples < 2:
            raise ValueError("At least two composition samples are needed to synthesize a table")
        self.surface_pressure = surface_pressure
        self.surface_temperature = surface_temperature
        self.oil_molar_mass = oil_molar_mass
        self.water_molar_mass = water_molar_mass
        self.num_composition_samples = int(num_composition_samples)
        self.undersaturated_density_slope = undersaturated_density_slope
        self.enable_dissolved_gas = enable_dissolved_gas
        self.enable_vaporized_oil = enable_vaporized_oil

    def gas_molar_mass(self, rho_gas_ref: float) -> float:
        # Consequence of the ideal gas law at surface conditions
        return R * self.surface_temperature * rho_gas_ref / self.surface_pressure

    def molar_masses(self, rho_gas_ref: float) -> tuple:
        """ Returns (oil, gas, water) molar masses (kg/mol) for a region with the given surface gas density """
        return self.oil_molar_mass, self.gas_molar_mass(rho_gas_ref), self.water_molar_mass

    def __repr__(self):
        return (f"PvtConfig(surface_pressure={self.surface_pressure}, surface_temperature={self.surface_temperature}, "
                f"oil_molar_mass={self.oil_molar_mass}, water_molar_mass={self.water_molar_mass}, "
                f"num_composition_samples={self.num_composition_samples}, "
                f"enable_dissolved_gas={self.enable_dissolved_gas}, enable_vaporized_oil={self.enable_vaporized_oil})")

default_config = PvtConfig()
