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
from pyblackoil.constants import PSAT_SPLINE_DENSITY, PVAP_OIL, WATER_IN_HC_SCALE, INSOLUBLE_SCALE
from pyblackoil.errors import ConfigurationError, TableConstructionError
from pyblackoil.gapfill import extend_undersaturated_rows
from pyblackoil.inversion import saturation_pressure
from pyblackoil.region import RegionPvt
from pyblackoil.shared_fns import sampling_points, constant_compressibility_factor, check_region
from pyblackoil.spline import MonotonicSpline
from pyblackoil.tabulated import Tabulated1DFunction, Tabulated2DFunction, split_long_table

logger = logging.getLogger(__name__)


class LiveOilPvt(RegionPvt):
    """ Oil phase PVT with dissolved gas (PVTO)

            Per region the oil formation volume factor and viscosity are tabulated against the gas
            dissolution factor Rs (outer position) and pressure (inner position). The saturated Rs(p)
            curve is tabulated separately, and a spline of (mass fraction, pressure) pairs along it
            seeds the Newton search for bubble point pressures.

            Queries taking a composition expect the mass fraction of the gas component in the oil
            phase, XoG.
    """
    phase_name = 'oil'

    def __init__(self, config: PvtConfig = None):
        super().__init__(config)
        self._gas_pvt = None
        self._inv_oil_b = []
        self._oil_mu = []
        self._inv_oil_b_mu = []
        self._rs_sat = []
        self._psat_spline = []

    def _resize(self, num_regions: int) -> None:
        self._inv_oil_b = [Tabulated2DFunction('RS', 'PO', '1/BO') for _ in range(num_regions)]
        self._oil_mu = [Tabulated2DFunction('RS', 'PO', 'MUO') for _ in range(num_regions)]
        self._inv_oil_b_mu = [None] * num_regions
        self._rs_sat = [None] * num_regions
        self._psat_spline = [None] * num_regions

    def _rs_from_mass_fraction(self, region_idx: int, xog):
        rho_o, rho_g = self._oil_ref_den[region_idx], self._gas_ref_den[region_idx]
        return xog / (1 - xog) * (rho_o / rho_g)

    def _mass_fraction_from_rs(self, region_idx: int, rs):
        rho_og = rs * self._gas_ref_den[region_idx]
        return rho_og / (self._oil_ref_den[region_idx] + rho_og)

    def _saturated_mass_fraction(self, region_idx: int, p):
        return self._mass_fraction_from_rs(region_idx, self._rs_sat[region_idx].eval(p, extrapolate=True))

    def _require_setup(self, region_idx: int) -> None:
        check_region(region_idx, self._num_regions)
        if self._oil_ref_den[region_idx] is None:
            raise ConfigurationError(f"Reference densities of region {region_idx} must be set first")
        if self._rs_sat[region_idx] is None:
            raise ConfigurationError(f"Saturated gas dissolution factor of region {region_idx} must be set first")

    def set_saturated_oil_gas_dissolution_factor(self, region_idx: int, samples) -> None:
        """ Sets the saturated gas dissolution factor Rs (m3/m3) as a function of pressure (Pa)
            samples: Container of (p, Rs) pairs, an (n, 2) array or a two column DataFrame
        """
        self._check_mutable(region_idx)
        self._rs_sat[region_idx] = Tabulated1DFunction()
        self._rs_sat[region_idx].set_container_of_tuples(samples)
        self._psat_spline[region_idx] = None

    def _update_saturation_pressure_spline(self, region_idx: int) -> None:
        self._require_setup(region_idx)
        rs_table = self._rs_sat[region_idx]
        n = rs_table.num_samples() * PSAT_SPLINE_DENSITY
        pressures = np.linspace(rs_table.x_min(), rs_table.x_max(), n + 1)
        xog = [self._saturated_mass_fraction(region_idx, p) for p in pressures]
        self._psat_spline[region_idx] = MonotonicSpline(xog, pressures)

    def _saturation_pressure(self, region_idx: int, xog):
        if self._psat_spline[region_idx] is None:
            self._update_saturation_pressure_spline(region_idx)
        p_guess = self._psat_spline[region_idx].eval(xog, extrapolate=True)
        return saturation_pressure(lambda p: self._saturated_mass_fraction(region_idx, p), xog, p_guess,
                                   region_idx=region_idx)

    def _synthesis_grid(self, region_idx: int, p_samples: np.ndarray) -> tuple:
        rs_max = self._rs_sat[region_idx].y_values().max()
        rss = np.unique(np.linspace(0.0, rs_max, self.config.num_composition_samples))
        pressures = np.linspace(p_samples.min(), p_samples.max(), 2 * p_samples.size)
        return rss, pressures

    def set_saturated_oil_formation_volume_factor(self, region_idx: int, samples) -> None:
        """ Builds the 2D oil formation volume factor table from its saturated curve
            samples: Container of (p, Bo) pairs along the saturated curve

            Away from the bubble point the oil density is assumed to change with a constant slope,
            Bo(Rs, p) = Bo,sat(psat(Rs)) / (1 + slope * (p - psat(Rs))).
        """
        self._check_mutable(region_idx)
        self._require_setup(region_idx)
        p_samples, bo_samples = sampling_points(samples)
        bo_sat = MonotonicSpline(p_samples, bo_samples)
        self._update_saturation_pressure_spline(region_idx)
        slope = self.config.undersaturated_density_slope

        rss, pressures = self._synthesis_grid(region_idx, p_samples)
        table = Tabulated2DFunction('RS', 'PO', '1/BO')
        for rs in rss:
            i = table.append_x_pos(rs)
            po_sat = self._saturation_pressure(region_idx, self._mass_fraction_from_rs(region_idx, rs))
            b_sat = bo_sat.eval(po_sat, extrapolate=True)
            for po in pressures:
                bo = b_sat / (1 + slope * (po - po_sat))
                table.append_sample_point(i, po, 1.0 / bo, synthetic=True)
        self._inv_oil_b[region_idx] = table
        logger.debug(f"Live oil region {region_idx}: 1/Bo synthesized on {rss.size} x {pressures.size} points")

    def set_saturated_oil_viscosity(self, region_idx: int, samples) -> None:
        """ Builds the 2D oil viscosity table from its saturated curve, ignoring any Rs dependence
            samples: Container of (p, mu_o) pairs, viscosity in Pa.s
        """
        self._check_mutable(region_idx)
        self._require_setup(region_idx)
        p_samples, mu_samples = sampling_points(samples)
        mu_sat = MonotonicSpline(p_samples, mu_samples)

        rss, pressures = self._synthesis_grid(region_idx, p_samples)
        table = Tabulated2DFunction('RS', 'PO', 'MUO')
        for rs in rss:
            i = table.append_x_pos(rs)
            for po in pressures:
                table.append_sample_point(i, po, mu_sat.eval(po, extrapolate=True), synthetic=True)
        self._oil_mu[region_idx] = table

    def set_inverse_oil_formation_volume_factor(self, region_idx: int, table: Tabulated2DFunction) -> None:
        """ Sets a copy of a 2D table of 1/Bo against Rs (outer) and pressure (inner) """
        self._check_mutable(region_idx)
        self._inv_oil_b[region_idx] = copy.deepcopy(table)

    def set_oil_viscosity(self, region_idx: int, table: Tabulated2DFunction) -> None:
        """ Sets a copy of a 2D table of oil viscosity against Rs (outer) and pressure (inner) """
        self._check_mutable(region_idx)
        self._oil_mu[region_idx] = copy.deepcopy(table)

    def init_from_tables(self, pvto: List[pd.DataFrame], density: pd.DataFrame = None) -> None:
        """ Fills all regions from PVTO tables
            pvto: One long format DataFrame per region with columns RS, P, BO, MUO. Records sharing an RS value
                  form a row, the first one being the bubble point
            density: Optional DataFrame with columns OIL, GAS, WATER and one row per region
        """
        self._check_mutable()
        self._prepare_regions(len(pvto), 'PVTO')
        if density is not None:
            self.set_reference_data(density)

        for r, frame in enumerate(pvto):
            label = f'PVTO region {r}'
            rss, rows = split_long_table(frame, 'RS', ['P', 'BO', 'MUO'])
            self.set_saturated_oil_gas_dissolution_factor(r, np.column_stack([[row[0, 0] for row in rows], rss]))
            rows, masks = extend_undersaturated_rows(rows, label=label)

            inv_b = Tabulated2DFunction('RS', 'PO', '1/BO')
            mu = Tabulated2DFunction('RS', 'PO', 'MUO')
            for rs, row, mask in zip(rss, rows, masks):
                i = inv_b.append_x_pos(rs)
                mu.append_x_pos(rs)
                for (po, bo, muo), synthetic in zip(row, mask):
                    inv_b.append_sample_point(i, po, 1.0 / bo, synthetic)
                    mu.append_sample_point(i, po, muo, synthetic)
            self._inv_oil_b[r] = inv_b
            self._oil_mu[r] = mu
            logger.debug(f"{label}: {rss.size} Rs values, {inv_b.num_synthetic()} synthesized samples")

    def set_gas_pvt(self, gas_pvt) -> None:
        """ Binds the gas phase PVT object, used read-only for the gas fugacity coefficient """
        self._check_mutable()
        self._gas_pvt = gas_pvt

    def init_end(self, gas_pvt=None) -> None:
        if gas_pvt is not None:
            self.set_gas_pvt(gas_pvt)
        self._begin_init_end(need_molar_masses=True)
        self._require(self._rs_sat, 'saturated gas dissolution factor')
        for r in range(self._num_regions):
            inv_b, mu = self._inv_oil_b[r], self._oil_mu[r]
            if inv_b.num_x() == 0 or mu.num_x() == 0:
                raise ConfigurationError(f"Live oil region {r}: oil formation volume factor or viscosity table missing")

            inv_b_mu = Tabulated2DFunction('RS', 'PO', '1/(BO*MUO)')
            for i in range(inv_b.num_x()):
                rs = inv_b.x_at(i)
                if inv_b.num_y(i) == 0:
                    raise TableConstructionError(f"Live oil region {r}: no samples at Rs {rs}")
                inv_b_mu.append_x_pos(rs)
                for j in range(inv_b.num_y(i)):
                    po = inv_b.y_at(i, j)
                    inv_b_mu.append_sample_point(i, po, inv_b.value_at(i, j) / mu.eval(rs, po, extrapolate=True),
                                                 inv_b.is_synthetic(i, j))
            self._inv_oil_b_mu[r] = inv_b_mu
            self._update_saturation_pressure_spline(r)

            for table in [inv_b, mu, inv_b_mu, self._rs_sat[r]]:
                table.freeze()
        self._finish_init_end()

    def inverse_formation_volume_factor_table(self, region_idx: int) -> Tabulated2DFunction:
        return self._inv_oil_b[region_idx]

    def viscosity_table(self, region_idx: int) -> Tabulated2DFunction:
        return self._oil_mu[region_idx]

    def viscosity(self, region_idx: int, temperature, pressure, xog):
        """ Returns the oil viscosity (Pa.s) at a given gas mass fraction in the oil phase """
        self._check_ready(region_idx)
        rs = self._rs_from_mass_fraction(region_idx, xog)
        inv_b = self._inv_oil_b[region_idx].eval(rs, pressure, extrapolate=True)
        return inv_b / self._inv_oil_b_mu[region_idx].eval(rs, pressure, extrapolate=True)

    def formation_volume_factor(self, region_idx: int, temperature, pressure, xog):
        self._check_ready(region_idx)
        rs = self._rs_from_mass_fraction(region_idx, xog)
        return 1.0 / self._inv_oil_b[region_idx].eval(rs, pressure, extrapolate=True)

    def density(self, region_idx: int, temperature, pressure, xog):
        """ Returns the oil phase density (kg/m3), including the mass of dissolved gas """
        self._check_ready(region_idx)
        rs = self._rs_from_mass_fraction(region_idx, xog)
        bo = 1.0 / self._inv_oil_b[region_idx].eval(rs, pressure, extrapolate=True)
        return (self._oil_ref_den[region_idx] + rs * self._gas_ref_den[region_idx]) / bo

    def fugacity_coefficient_oil(self, region_idx: int, temperature, pressure):
        # Pseudo vapour pressure of the oil component
        self._check_ready(region_idx)
        return PVAP_OIL / pressure

    def fugacity_coefficient_gas(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        if self._gas_pvt is None:
            raise ConfigurationError("Live oil: no gas PVT bound, cannot compute the gas fugacity coefficient")
        phi_gg = self._gas_pvt.fugacity_coefficient_gas(region_idx, temperature, pressure)
        x_og = self.saturated_oil_gas_mole_fraction(region_idx, temperature, pressure)
        if x_og <= 0:
            # No gas dissolves at this pressure
            return INSOLUBLE_SCALE * self.fugacity_coefficient_oil(region_idx, temperature, pressure)
        return phi_gg / x_og

    def fugacity_coefficient_water(self, region_idx: int, temperature, pressure):
        return WATER_IN_HC_SCALE * self.fugacity_coefficient_oil(region_idx, temperature, pressure)

    def gas_dissolution_factor(self, region_idx: int, temperature, pressure):
        """ Returns the saturated gas dissolution factor Rs (m3/m3) """
        self._check_ready(region_idx)
        return self._rs_sat[region_idx].eval(pressure, extrapolate=True)

    def saturated_oil_gas_mass_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return self._saturated_mass_fraction(region_idx, pressure)

    def saturated_oil_gas_mole_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        xog = self._saturated_mass_fraction(region_idx, pressure)
        mw_o, mw_g = self._oil_mw[region_idx], self._gas_mw[region_idx]
        avg_mw = mw_g / (1 + (1 - xog) * (mw_g / mw_o - 1))
        return xog * avg_mw / mw_g

    def saturated_viscosity(self, region_idx: int, temperature, pressure):
        xog = self.saturated_oil_gas_mass_fraction(region_idx, temperature, pressure)
        return self.viscosity(region_idx, temperature, pressure, xog)

    def saturated_formation_volume_factor(self, region_idx: int, temperature, pressure):
        xog = self.saturated_oil_gas_mass_fraction(region_idx, temperature, pressure)
        return self.formation_volume_factor(region_idx, temperature, pressure, xog)

    def saturated_density(self, region_idx: int, temperature, pressure):
        xog = self.saturated_oil_gas_mass_fraction(region_idx, temperature, pressure)
        return self.density(region_idx, temperature, pressure, xog)

    def saturation_pressure(self, region_idx: int, temperature, xog):
        """ Returns the bubble point pressure (Pa) of oil holding a gas mass fraction xog
            Raises NumericalIssue if the Newton iteration does not converge
        """
        self._check_ready(region_idx)
        return self._saturation_pressure(region_idx, xog)


class _NoDissolvedGasOil(RegionPvt):
    # Shared behaviour of oil models without dissolved gas
    phase_name = 'oil'

    def fugacity_coefficient_oil(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return PVAP_OIL / pressure

    def fugacity_coefficient_gas(self, region_idx: int, temperature, pressure):
        return INSOLUBLE_SCALE * self.fugacity_coefficient_oil(region_idx, temperature, pressure)

    def fugacity_coefficient_water(self, region_idx: int, temperature, pressure):
        return WATER_IN_HC_SCALE * self.fugacity_coefficient_oil(region_idx, temperature, pressure)

    def gas_dissolution_factor(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 0.0

    def saturated_oil_gas_mass_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 0.0

    def saturated_oil_gas_mole_fraction(self, region_idx: int, temperature, pressure):
        self._check_ready(region_idx)
        return 0.0

    def density(self, region_idx: int, temperature, pressure, xog=0.0):
        bo = self.formation_volume_factor(region_idx, temperature, pressure)
        return self._oil_ref_den[region_idx] / bo

    def saturated_viscosity(self, region_idx: int, temperature, pressure):
        return self.viscosity(region_idx, temperature, pressure)

    def saturated_formation_volume_factor(self, region_idx: int, temperature, pressure):
        return self.formation_volume_factor(region_idx, temperature, pressure)

    def saturated_density(self, region_idx: int, temperature, pressure):
        return self.density(region_idx, temperature, pressure)

    def saturation_pressure(self, region_idx: int, temperature, xog):
        raise ConfigurationError(f"{type(self).__name__} holds no dissolved gas, its saturation pressure is undefined")


class DeadOilPvt(_NoDissolvedGasOil):
    """ Oil phase PVT without dissolved gas (PVDO), formation volume factor and viscosity tabulated against pressure """

    def __init__(self, config: PvtConfig = None):
        super().__init__(config)
        self._inv_oil_b = []
        self._oil_mu = []
        self._inv_oil_b_mu = []

    def _resize(self, num_regions: int) -> None:
        self._inv_oil_b = [None] * num_regions
        self._oil_mu = [None] * num_regions
        self._inv_oil_b_mu = [None] * num_regions

    def set_oil_formation_volume_factor(self, region_idx: int, samples) -> None:
        """ samples: Container of (p, Bo) pairs """
        self._check_mutable(region_idx)
        p, bo = sampling_points(samples)
        self._inv_oil_b[region_idx] = Tabulated1DFunction(p, 1.0 / bo)

    def set_oil_viscosity(self, region_idx: int, samples) -> None:
        """ samples: Container of (p, mu_o) pairs, viscosity in Pa.s """
        self._check_mutable(region_idx)
        self._oil_mu[region_idx] = Tabulated1DFunction()
        self._oil_mu[region_idx].set_container_of_tuples(samples)

    def init_from_tables(self, pvdo: List[pd.DataFrame], density: pd.DataFrame = None) -> None:
        """ Fills all regions from PVDO tables
            pvdo: One DataFrame per region with columns P, BO, MUO
            density: Optional DataFrame with columns OIL, GAS, WATER and one row per region
        """
        self._check_mutable()
        self._prepare_regions(len(pvdo), 'PVDO')
        if density is not None:
            self.set_reference_data(density)
        for r, frame in enumerate(pvdo):
            self.set_oil_formation_volume_factor(r, frame[['P', 'BO']])
            self.set_oil_viscosity(r, frame[['P', 'MUO']])

    def init_end(self, gas_pvt=None) -> None:
        self._begin_init_end()
        self._require(self._inv_oil_b, 'oil formation volume factor')
        self._require(self._oil_mu, 'oil viscosity')
        for r in range(self._num_regions):
            inv_b, mu = self._inv_oil_b[r], self._oil_mu[r]
            p = inv_b.x_values()
            self._inv_oil_b_mu[r] = Tabulated1DFunction(p, inv_b.y_values() / mu.eval(p, extrapolate=True))
            for table in [inv_b, mu, self._inv_oil_b_mu[r]]:
                table.freeze()
        self._finish_init_end()

    def viscosity(self, region_idx: int, temperature, pressure, xog=0.0):
        self._check_ready(region_idx)
        inv_b = self._inv_oil_b[region_idx].eval(pressure, extrapolate=True)
        return inv_b / self._inv_oil_b_mu[region_idx].eval(pressure, extrapolate=True)

    def formation_volume_factor(self, region_idx: int, temperature, pressure, xog=0.0):
        self._check_ready(region_idx)
        return 1.0 / self._inv_oil_b[region_idx].eval(pressure, extrapolate=True)


class ConstantCompressibilityOilPvt(_NoDissolvedGasOil):
    """ Oil phase PVT without dissolved gas and with constant compressibility (PVCDO)

            Per region: reference pressure p_ref, formation volume factor at p_ref, compressibility c_o,
            viscosity at p_ref and viscosibility c_v.
                Bo = Bo_ref / (1 + X + X^2/2), X = c_o * (p - p_ref)
                Bo * mu_o = Bo_ref * mu_ref / (1 + Y + Y^2/2), Y = (c_o - c_v) * (p - p_ref)
    """

    def __init__(self, config: PvtConfig = None):
        super().__init__(config)
        self._params = []

    def _resize(self, num_regions: int) -> None:
        self._params = [None] * num_regions

    def set_oil_parameters(self, region_idx: int, p_ref: float, bo_ref: float, co: float, muo_ref: float, cv: float) -> None:
        """ p_ref: Reference pressure (Pa)
            bo_ref: Oil formation volume factor at p_ref (rm3/sm3)
            co: Oil compressibility (1/Pa)
            muo_ref: Oil viscosity at p_ref (Pa.s)
            cv: Oil viscosibility (1/Pa)
        """
        self._check_mutable(region_idx)
        self._params[region_idx] = (p_ref, bo_ref, co, muo_ref, cv)

    def init_from_tables(self, pvcdo: pd.DataFrame, density: pd.DataFrame = None) -> None:
        """ pvcdo: DataFrame with columns PREF, BO, CO, MUO, CV and one row per region """
        self._check_mutable()
        self._prepare_regions(len(pvcdo), 'PVCDO')
        if density is not None:
            self.set_reference_data(density)
        for r in range(self._num_regions):
            row = pvcdo.iloc[r]
            self.set_oil_parameters(r, row['PREF'], row['BO'], row['CO'], row['MUO'], row['CV'])

    def init_end(self, gas_pvt=None) -> None:
        self._begin_init_end()
        self._require(self._params, 'PVCDO parameters')
        self._finish_init_end()

    def formation_volume_factor(self, region_idx: int, temperature, pressure, xog=0.0):
        self._check_ready(region_idx)
        p_ref, bo_ref, co, _, _ = self._params[region_idx]
        return constant_compressibility_factor(bo_ref, co, pressure - p_ref)

    def viscosity(self, region_idx: int, temperature, pressure, xog=0.0):
        self._check_ready(region_idx)
        p_ref, bo_ref, co, muo_ref, cv = self._params[region_idx]
        bo_mu = constant_compressibility_factor(bo_ref * muo_ref, co - cv, pressure - p_ref)
        return bo_mu / constant_compressibility_factor(bo_ref, co, pressure - p_ref)
