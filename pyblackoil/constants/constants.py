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

# Surface (reference) conditions
P_SURF = 101325.0  # Surface pressure (Pa)
T_SURF = 273.15 + 15.56  # Surface temperature (K)
R = 8.314472  # Universal gas constant, J/(mol.K)

# Default component molar masses (kg/mol)
MW_OIL = 175e-3  # Typical dead oil, from the SPE9 comparison project
MW_WATER = 18.0e-3

# Synthesized tables
NCOMP_SAMPLES = 20  # Number of dissolved/vaporized fraction columns when only a saturated curve is supplied
USAT_DEN_SLOPE = (1.1200 - 1.1189) / ((5000 - 4000) * 6894.76)  # Relative density change per Pa for undersaturated branches
PSAT_SPLINE_DENSITY = 5  # Saturation pressure spline samples per saturated table sample

# Saturation pressure Newton iteration
NEWTON_MAX_ITER = 20
NEWTON_RTOL = 1e-10
NEWTON_EPS = 1e-11  # Relative finite difference step

# Pseudo fugacity coefficient scales
PVAP_OIL = 20e3  # Pseudo vapour pressure of the oil component (Pa)
PVAP_WATER = 3e3  # Pseudo vapour pressure of the water component (Pa)
INSOLUBLE_SCALE = 1e10  # Component practically absent from the phase
WATER_IN_HC_SCALE = 1e8  # Affinity of water to hydrocarbon phases relative to their own component
