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

import copy
import logging
from typing import List

import numpy as np
import pandas as pd

from pyblackoil.config import PvtConfig
from pyblackoil.constants import PSAT_SPLINE_DENSITY, WATER_IN_HC_SCALE, INSOLUBLE_SCALE
from pyblackoil.errors import ConfigurationError, TableConstructionError
from pyblackoil.gapfill import extend_undersaturated_rows
from pyblackoil.inversion import saturation_pressure
from pyblackoil.region import RegionPvt
from pyblackoil.shared_fns import sampling_points
from pyblackoil.spline import MonotonicSpline
from pyblackoil.tabulated import Tabulated1DFunction, Tabulated2DFunction, split_long_table

logger = logging.getLogger(__name__)


class WetGasPvt(RegionPvt):
    """ Gas phase PVT with vaporized oil (PVTG)

            Per region the gas formation volume factor and viscosity are tabulated against pressure
            (outer position) and oil vaporization factor Rv (inner position). The saturated Rv(p)
            curve is tabulated separately, and a spline of (mass fraction, pressure) pairs along it
            seeds the Newton search for saturation pressures.

            Queries taking a composition expect the mass fraction of the oil component in the gas
            phase, XgO. Pressures in Pa, temperatures in K (unused, isothermal tables).

            Usage example:
                gas = WetGasPvt()
                gas.set_num_regions(1)
                gas.set_reference_densities(0, 850.0, 0.85, 1000.0)
                gas.set_molar_masses(0, 0.175, 0.0205, 0.018)
                gas.init_from_tables([pvtg])
                gas.init_end()
                gas.formation_volume_factor(0, 350.0, 1.5e7, 0.0)
    """
    phase_name = 'gas'

    def __init__(self, config: PvtConfig = None):
        super().__init__(config)
        self._oil_pvt = None
        self._inv_gas_b = []
        self._gas_mu = []
        self._inv_gas_b_mu = []
        self._rv_sat = []
        self._psat_spline = []

    def _resize(self, num_regions: int) -> None:
        self._inv_gas_b = [Tabulated2DFunction('PG', 'RV', '1/BG') for _ in range(num_regions)]
        self._gas_mu = [Tabulated2DFunction('PG', 'RV', 'MUG') for _ in range(num_regions)]
        self._inv_gas_b_mu = [None] * num_regions
        self._rv_sat = [None] * num_regions
        self._psat_spline = [None] * num_regions

    # Conversions between the oil vaporization factor and the oil mass fraction in the gas phase
    def _rv_from_mass_fraction(self, region_idx: int, xgo):
        rho_o, rho_g = self._oil_ref_den[region_idx], self._gas_ref_den[region_idx]
        return xgo / (1 - xgo) * (rho_g / rho_o)

    def _mass_fraction_from_rv(self, region_idx: int, rv):
        rho_og = rv * self._oil_ref_den[region_idx]
        return rho_og / (self._gas_ref_den[region_idx] + rho_og)

    def _saturated_mass_fraction(self, region_idx: int, p):
        return self._mass_fraction_from_rv(region_idx, self._rv_sat[region_idx].eval(p, extrapolate=True))

    def _require_reference_densities(self, region_idx: int) -> None:
        if self._oil_ref_den[region_idx] is None:
            raise ConfigurationError(f"Reference densities of region {region_idx} must be set first")

    def _require_rv_table(self, region_idx: int) -> None:
        if self._rv_sat[region_idx] is None:
            raise ConfigurationError(f"Saturated oil vaporization factor of region {region_idx} must be set first")

    def set_saturated_gas_oil_vaporization_factor(self, region_idx: int, samples) -> None:
        """ Sets the saturated oil vaporization factor Rv (m3/m3) as a function of pressure (Pa)
            samples: Container of (p, Rv) pairs, an (n, 2) array or a two column DataFrame
        """
        self._check_mutable(region_idx)
        self._rv_sat[region_idx] = Tabulated1DFunction()
        self._rv_sat[region_idx].set_container_of_tuples(samples)
        self._psat_spline[region_idx] = None

    def _update_saturation_pressure_spline(self, region_idx: int) -> None:
        self._require_reference_densities(region_idx)
        self._require_rv_table(region_idx)
        rv_table = self._rv_sat[region_idx]
        n = rv_table.num_samples() * PSAT_SPLINE_DENSITY
        pressures = np.linspace(rv_table.x_min(), rv_table.x_max(), n + 1)
        xgo = [self._saturated_mass_fraction(region_idx, p) for p in pressures]
        self._psat_spline[region_idx] = MonotonicSpline(xgo, pressures)
        logger.debug(f"Wet gas region {region_idx}: saturation pressure spline built from {n + 1} pressures")

    def _saturation_pressure(self, region_idx: int, xgo):
        if self._psat_spline[region_idx] is None:
            self._update_saturation_pressure_spline(region_idx)
        p_guess = self._psat_spline[region_idx].eval(xgo, extrapolate=True)
        return saturation_pressure(lambda p: self._saturated_mass_fraction(region_idx, p), xgo, p_guess,
                                   region_idx=region_idx)

    def _synthesis_grid(self, region_idx: int, p_samples: np.ndarray) -> tuple:
        rv_max = self._rv_sat[region_idx].y_values().max()
        rvs = np.unique(np.linspace(0.0, rv_max, self.config.num_composition_samples))
        pressures = np.linspace(p_samples.min(), p_samples.max(), 2 * p_samples.size)
        return pressures, rvs

    def set_saturated_gas_formation_volume_factor(self, region_idx: int, samples) -> None:
        """ Builds the 2D gas formation volume factor table from its saturated curve
            samples: Container of (p, Bg) pairs along the saturated curve

            The gas phase density is assumed to change with a constant slope away from the saturated
            state, so Bg(p, Rv) = Bg,sat(psat(Rv)) / (1 + slope * (p - psat(Rv))). Requires the
            reference densities and the saturated oil vaporization factor of the region.
        """
        self._check_mutable(region_idx)
        self._require_reference_densities(region_idx)
        self._require_rv_table(region_idx)
        p_samples, bg_samples = sampling_points(samples)
        bg_sat = MonotonicSpline(p_samples, bg_samples)
        self._update_saturation_pressure_spline(region_idx)
        slope = self.config.undersaturated_density_slope

        pressures, rvs = self._synthesis_grid(region_idx, p_samples)
        po_sat = [self._saturation_pressure(region_idx, self._mass_fraction_from_rv(region_idx, rv)) for rv in rvs]
        table = Tabulated2DFunction('PG', 'RV', '1/BG')
        for pg in pressures:
            i = table.append_x_pos(pg)
            for rv, ps in zip(rvs, po_sat):
                bg = bg_sat.eval(ps, extrapolate=True) / (1 + slope * (pg - ps))
                table.append_sample_point(i, rv, 1.0 / bg, synthetic=True)
        self._inv_gas_b[region_idx] = table
        logger.debug(f"Wet gas region {region_idx}: 1/Bg synthesized on {pressures.size} x {rvs.size} points")

    def set_saturated_gas_viscosity(self, region_idx: int, samples) -> None:
        """ Builds the 2D gas viscosity table from its saturated curve, ignoring any Rv dependence
            samples: Container of (p, mu_g) pairs, viscosity in Pa.s
        """
        self._check_mutable(region_idx)
        self._require_rv_table(region_idx)
        p_samples, mu_samples = sampling_points(samples)
        mu_sat = MonotonicSpline(p_samples, mu_samples)

        pressures, rvs = self._synthesis_grid(region_idx, p_samples)
        table = Tabulated2DFunction('PG', 'RV', 'MUG')
        for pg in pressures:
            i = table.append_x_pos(pg)
            mu = mu_sat.eval(pg, extrapolate=True)
            for rv in rvs:
                table.append_sample_point(i, rv, mu, synthetic=True)
        self._gas_mu[region_idx] = table

    def set_inverse_gas_formation_volume_factor(self, region_idx: int, table: Tabulated2DFunction) -> None:
        """ Sets a copy of a 2D table of 1/Bg against pressure (outer) and Rv (inner) """
        self._check_mutable(region_idx)
        self._inv_gas_b[region_idx] = copy.deepcopy(table)

    def set_gas_viscosity(self, region_idx: int, table: Tabulated2DFunction) -> None:
        """ Sets a copy of a 2D table of gas viscosity against pressure (outer) and Rv (inner) """
        self._check_mutable(region_idx)
        self._gas_mu[region_idx] = copy.deepcopy(table)

    def init_from_tables(self, pvtg: List[pd.DataFrame], density: pd.DataFrame = None) -> None:
        """ Fills all regions from PVTG tables
            pvtg: One long format DataFrame per region with columns PG, RV, BG, MUG. Records sharing a PG value
                  form a row, the first one being the saturated state
            density: Optional DataFrame with columns OIL, GAS, WATER and one row per region
        """
        self._check_mutable()
        self._prepare_regions(len(pvtg), 'PVTG')
        if density is not None:
            self.set_reference_data(density)

        for r, frame in enumerate(pvtg):
            label = f'PVTG region {r}'
            pressures, rows = split_long_table(frame, 'PG', ['RV', 'BG', 'MUG'])
            self.set_saturated_gas_oil_vaporization_factor(r, np.column_stack([pressures, [row[0, 0] for row in rows]]))
            rows, masks = extend_undersaturated_rows(rows, label=label)

            inv_b = Tabulated2DFunction('PG', 'RV', '1/BG')
            mu = Tabulated2DFunction('PG', 'RV', 'MUG')
            for pg, row, mask in zip(pressures, rows, masks):
                i = inv_b.append_x_pos(pg)
                mu.append_x_pos(pg)
                for (rv, bg, mug), synthetic in zip(row, mask):
                    inv_b.append_sample_point(i, rv, 1.0 / bg, synthetic)
                    mu.append_sample_point(i, rv, mug, synthetic)
            self._inv_gas_b[r] = inv_b
            self._gas_mu[r] = mu
            logger.debug(f"{label}: {pressures.size} pressures, {inv_b.num_synthetic()} synthesized samples")

    def set_oil_pvt(self, oil_pvt) -> None:
        """ Binds the oil phase PVT object, used read-only for the oil fugacity coefficient """
        self._check_mutable()
        self._oil_pvt = oil_pvt

    def init_end(self, oil_pvt=None) -> None:
        """ Finishes initialization: derives the 1/(Bg mu_g) tables, rebuilds the saturation pressure splines and freezes all tables """
        if oil_pvt is not None:
            self.set_oil_pvt(oil_pvt)
        self._begin_init_end(need_molar_masses=True)
        self._require(self._rv_sat, 'saturated oil vaporization factor')
        for r in range(self._num_regions):
            inv_b, mu = self._inv_gas_b[r], self._gas_mu[r]
            if inv_b.num_x() == 0 or mu.num_x() == 0:
                raise ConfigurationError(f"Wet gas region {r}: gas formation volume factor or viscosity table missing")

            inv_b_mu = Tabulated2DFunction('PG', 'RV', '1/(BG*MUG)')
            for i in range(inv_b.num_x()):
                pg = inv_b.x_at(i)
                if inv_b.num_y(i) == 0:
                    raise TableConstructionError(f"Wet gas region {r}: no samples at pressure {pg}")
                inv_b_mu.append_x_pos(pg)
                for j in range(inv_b.num_y(i)):
                    rv = inv_b.y_at(i, j)
                    inv_b_mu.append_sample_point(i, rv, inv_b.value_at(i, j) / mu.eval(pg, rv, extrapolate=True),
                                                 inv_b.is_synthetic(i, j))
            self._inv_gas_b_mu[r] = inv_b_mu
            self._update_saturation_pressure_spline(r)

            for table in [inv_b, mu, inv_b_mu, self._rv_sat[r]]:
                table.freeze()
        self._finish_init_end()

    def inverse_formation_volume_factor_table(self, region_idx: int) -> Tabulated2DFunction:
        return self._inv_gas_b[region_idx]

    def viscosity_table(self, region_idx: int) -> Tabulated2DFunction:
        return self._gas_mu[region_idx]

    def viscosity(self, region_idx: int, temperature, pressure, xgo):
        """ Returns the gas viscosity (Pa.s) at a given oil mass fraction in the gas phase """
        self._check_ready(region_idx)
        rv = self._rv_from_mass_fraction(region_idx, xgo)
        inv_b = self._inv_gas_b[region_idx].eval(pressure, rv, extrapolate=True)
        inv_b_mu = self._inv_gas_b_mu[region_idx].eval(pressure, rv, extrapolate=True)
        return inv_b / inv_b_mu

    def formation_volume_factor(self, region_idx: int, temperature, pressure, xgo):
        """ Returns the gas formation volume factor (rm3/sm3) at a given oil mass fraction in the gas phase """
        self._check_ready(region_idx)
        rv = self._rv_from_mass_fraction(region_idx, xgo)
        return 1.0 / self._inv_gas_b[region_idx].eval(pressure, rv, extrapolate=True)

    def density(self, region_idx: int, temperature, pressure, xgo):
        """ Returns the gas phase density (kg/m3), including the mass of vaporized oil """
        self._check_ready(region_idx)
        rv = self._rv_from_mass_fraction(region_idx, xgo)
        bg = 1.0 / self._inv_gas_b[region_idx].eval(pressure, rv, extrapolate=True)
        return self._gas_ref_den[region_idx] / bg + rv * self._oil_ref_den[region_idx] / bg

    def fugacity_coefficient_gas(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 1.0

    def fugacity_coefficient_oil(self, region_idx: int, temperature, pressure):
        """ Oil component in the gas phase: the oil phase coefficient scaled so that both phases are in equilibrium at saturation """
        self._check_ready(region_idx)
        if self._oil_pvt is None:
            raise ConfigurationError("Wet gas: no oil PVT bound, cannot compute the oil fugacity coefficient")
        phi_oo = self._oil_pvt.fugacity_coefficient_oil(region_idx, temperature, pressure)
        x_go = self.saturated_gas_oil_mole_fraction(region_idx, temperature, pressure)
        if x_go <= 0:
            # No oil vaporizes at this pressure
            return INSOLUBLE_SCALE * self.fugacity_coefficient_gas(region_idx, temperature, pressure)
        return phi_oo / x_go

    def fugacity_coefficient_water(self, region_idx: int, temperature, pressure):
        return WATER_IN_HC_SCALE * self.fugacity_coefficient_gas(region_idx, temperature, pressure)

    def oil_vaporization_factor(self, region_idx: int, temperature, pressure):
        """ Returns the saturated oil vaporization factor Rv (m3/m3) """
        self._check_ready(region_idx)
        return self._rv_sat[region_idx].eval(pressure, extrapolate=True)

    def saturated_gas_oil_mass_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return self._saturated_mass_fraction(region_idx, pressure)

    def saturated_gas_oil_mole_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        xgo = self._saturated_mass_fraction(region_idx, pressure)
        mw_o, mw_g = self._oil_mw[region_idx], self._gas_mw[region_idx]
        avg_mw = mw_o / (1 + (1 - xgo) * (mw_o / mw_g - 1))
        return xgo * avg_mw / mw_o

    def saturated_viscosity(self, region_idx: int, temperature, pressure):
        xgo = self.saturated_gas_oil_mass_fraction(region_idx, temperature, pressure)
        return self.viscosity(region_idx, temperature, pressure, xgo)

    def saturated_formation_volume_factor(self, region_idx: int, temperature, pressure):
        xgo = self.saturated_gas_oil_mass_fraction(region_idx, temperature, pressure)
        return self.formation_volume_factor(region_idx, temperature, pressure, xgo)

    def saturated_density(self, region_idx: int, temperature, pressure):
        xgo = self.saturated_gas_oil_mass_fraction(region_idx, temperature, pressure)
        return self.density(region_idx, temperature, pressure, xgo)

    def saturation_pressure(self, region_idx: int, temperature, xgo):
        """ Returns the pressure (Pa) at which gas holding an oil mass fraction xgo is saturated (dew point)
            Raises NumericalIssue if the Newton iteration does not converge
        """
        self._check_ready(region_idx)
        return self._saturation_pressure(region_idx, xgo)


class DryGasPvt(RegionPvt):
    """ Gas phase PVT without vaporized oil (PVDG)

            Formation volume factor and viscosity depend on pressure only. Composition arguments
            are accepted for a uniform interface and ignored.
    """
    phase_name = 'gas'

    def __init__(self, config: PvtConfig = None):
        super().__init__(config)
        self._inv_gas_b = []
        self._gas_mu = []
        self._inv_gas_b_mu = []

    def _resize(self, num_regions: int) -> None:
        self._inv_gas_b = [None] * num_regions
        self._gas_mu = [None] * num_regions
        self._inv_gas_b_mu = [None] * num_regions

    def set_gas_formation_volume_factor(self, region_idx: int, samples) -> None:
        """ samples: Container of (p, Bg) pairs """
        self._check_mutable(region_idx)
        p, bg = sampling_points(samples)
        self._inv_gas_b[region_idx] = Tabulated1DFunction(p, 1.0 / bg)

    def set_gas_viscosity(self, region_idx: int, samples) -> None:
        """ samples: Container of (p, mu_g) pairs, viscosity in Pa.s """
        self._check_mutable(region_idx)
        self._gas_mu[region_idx] = Tabulated1DFunction()
        self._gas_mu[region_idx].set_container_of_tuples(samples)

    def init_from_tables(self, pvdg: List[pd.DataFrame], density: pd.DataFrame = None) -> None:
        """ Fills all regions from PVDG tables
            pvdg: One DataFrame per region with columns P, BG, MUG
            density: Optional DataFrame with columns OIL, GAS, WATER and one row per region
        """
        self._check_mutable()
        self._prepare_regions(len(pvdg), 'PVDG')
        if density is not None:
            self.set_reference_data(density)
        for r, frame in enumerate(pvdg):
            self.set_gas_formation_volume_factor(r, frame[['P', 'BG']])
            self.set_gas_viscosity(r, frame[['P', 'MUG']])

    def init_end(self, oil_pvt=None) -> None:
        self._begin_init_end()
        self._require(self._inv_gas_b, 'gas formation volume factor')
        self._require(self._gas_mu, 'gas viscosity')
        for r in range(self._num_regions):
            inv_b, mu = self._inv_gas_b[r], self._gas_mu[r]
            p = inv_b.x_values()
            self._inv_gas_b_mu[r] = Tabulated1DFunction(p, inv_b.y_values() / mu.eval(p, extrapolate=True))
            for table in [inv_b, mu, self._inv_gas_b_mu[r]]:
                table.freeze()
        self._finish_init_end()

    def viscosity(self, region_idx: int, temperature, pressure, xgo=0.0):
        self._check_ready(region_idx)
        inv_b = self._inv_gas_b[region_idx].eval(pressure, extrapolate=True)
        return inv_b / self._inv_gas_b_mu[region_idx].eval(pressure, extrapolate=True)

    def formation_volume_factor(self, region_idx: int, temperature, pressure, xgo=0.0):
        self._check_ready(region_idx)
        return 1.0 / self._inv_gas_b[region_idx].eval(pressure, extrapolate=True)

    def density(self, region_idx: int, temperature, pressure, xgo=0.0):
        self._check_ready(region_idx)
        return self._gas_ref_den[region_idx] * self._inv_gas_b[region_idx].eval(pressure, extrapolate=True)

    def fugacity_coefficient_gas(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 1.0

    def fugacity_coefficient_oil(self, region_idx: int, temperature, pressure):
        # No vaporized oil, the oil component practically does not enter the gas phase
        return INSOLUBLE_SCALE * self.fugacity_coefficient_gas(region_idx, temperature, pressure)

    def fugacity_coefficient_water(self, region_idx: int, temperature, pressure):
        return WATER_IN_HC_SCALE * self.fugacity_coefficient_gas(region_idx, temperature, pressure)

    def oil_vaporization_factor(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 0.0

    def saturated_gas_oil_mass_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 0.0

    def saturated_gas_oil_mole_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 0.0

    def saturated_viscosity(self, region_idx: int, temperature, pressure):
        return self.viscosity(region_idx, temperature, pressure)

    def saturated_formation_volume_factor(self, region_idx: int, temperature, pressure):
        return self.formation_volume_factor(region_idx, temperature, pressure)

    def saturated_density(self, region_idx: int, temperature, pressure):
        return self.density(region_idx, temperature, pressure)

    def saturation_pressure(self, region_idx: int, temperature, xgo):
        raise ConfigurationError("Dry gas holds no vaporized oil, its saturation pressure is undefined")
