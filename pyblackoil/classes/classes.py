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

from enum import Enum

class oil_pvt_approach(Enum):  # Oil phase PVT relation
    NONE = 0
    LIVE = 1  # PVTO
    DEAD = 2  # PVDO
    CONSTCOMP = 3  # PVCDO

class gas_pvt_approach(Enum):  # Gas phase PVT relation
    NONE = 0
    WET = 1  # PVTG
    DRY = 2  # PVDG

class water_pvt_approach(Enum):  # Water phase PVT relation
    NONE = 0
    CONSTCOMP = 1  # PVTW

class phase(Enum):
    WATER = 0
    OIL = 1
    GAS = 2

class component(Enum):
    OIL = 0
    WATER = 1
    GAS = 2

class_dic = {
    "oilapproach": oil_pvt_approach,
    "gasapproach": gas_pvt_approach,
    "waterapproach": water_pvt_approach,
    "phase": phase,
    "component": component,
}
