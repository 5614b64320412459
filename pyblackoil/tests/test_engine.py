#!/usr/bin/env python3
"""
Validation tests for building a complete black-oil PVT model from tables.
Run with: python3 -m pytest pyblackoil/tests/ -v
"""

import sys
import os
import pandas as pd

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pyblackoil.engine import BlackOilPvt
from pyblackoil.config import PvtConfig
from pyblackoil.classes import oil_pvt_approach, gas_pvt_approach, water_pvt_approach, phase, component
from pyblackoil.constants import R, T_SURF, P_SURF
from pyblackoil.errors import ConfigurationError

T = 350.0

def live_tables():
    pvto = pd.DataFrame({'RS': [20.0, 60.0, 60.0, 100.0, 100.0], 'P': [2e6, 8e6, 2e7, 1.4e7, 3e7],
                         'BO': [1.1, 1.25, 1.23, 1.4, 1.37], 'MUO': [1.5e-3, 1.0e-3, 1.1e-3, 0.8e-3, 0.85e-3]})
    pvtg = pd.DataFrame({'PG': [1e5, 5e6, 5e6, 3e7, 3e7], 'RV': [1e-6, 2e-5, 0.0, 1.6e-4, 0.0],
                         'BG': [1.0, 0.02, 0.0205, 0.0045, 0.0047], 'MUG': [1.2e-5, 1.4e-5, 1.35e-5, 3.0e-5, 2.8e-5]})
    return {
        'DENSITY': pd.DataFrame({'OIL': [850.0], 'WATER': [1000.0], 'GAS': [0.85]}),
        'PVTO': [pvto],
        'PVTG': [pvtg],
        'PVTW': pd.DataFrame({'PREF': [1e7], 'BW': [1.02], 'CW': [4.5e-10], 'MUW': [5e-4], 'CV': [0.0]}),
    }

def dead_tables():
    pvdo = pd.DataFrame({'P': [1e6, 3e7], 'BO': [1.05, 1.01], 'MUO': [2e-3, 2.5e-3]})
    pvdg = pd.DataFrame({'P': [1e5, 3e7], 'BG': [1.0, 0.004], 'MUG': [1.1e-5, 2.5e-5]})
    return {
        'DENSITY': pd.DataFrame({'OIL': [850.0, 800.0], 'WATER': [1000.0, 1030.0], 'GAS': [0.85, 0.95]}),
        'PVDO': [pvdo, pvdo],
        'PVDG': [pvdg, pvdg],
        'PVTW': pd.DataFrame({'PREF': [1e7, 1e7], 'BW': [1.02, 1.02], 'CW': [4.5e-10, 4.5e-10],
                              'MUW': [5e-4, 5e-4], 'CV': [0.0, 0.0]}),
    }

def rel(a, b):
    return abs(a - b) / abs(b)

def test_live_model_approaches():
    """Approach selection for a live oil, wet gas and water model"""
    pvt = BlackOilPvt.from_tables(live_tables())
    assert pvt.num_regions == 1
    assert pvt.oil.approach == oil_pvt_approach.LIVE
    assert pvt.gas.approach == gas_pvt_approach.WET
    assert pvt.water.approach == water_pvt_approach.CONSTCOMP
    assert pvt.enable_dissolved_gas
    assert not pvt.enable_vaporized_oil
    assert BlackOilPvt.from_tables(live_tables(), PvtConfig(enable_vaporized_oil=True)).enable_vaporized_oil

def test_live_model_cross_phase_fugacities():
    """Cross-phase fugacity coefficients through the bound multiplexers"""
    pvt = BlackOilPvt.from_tables(live_tables())
    p = 1e7
    phi_oo = pvt.oil.fugacity_coefficient_oil(0, T, p)
    x_go = pvt.gas.saturated_gas_oil_mole_fraction(0, T, p)
    assert rel(pvt.gas.fugacity_coefficient_oil(0, T, p), phi_oo / x_go) < 1e-14
    x_og = pvt.oil.saturated_oil_gas_mole_fraction(0, T, p)
    assert rel(pvt.oil.fugacity_coefficient_gas(0, T, p), 1.0 / x_og) < 1e-14
    assert rel(pvt.water.fugacity_coefficient_water(0, T, p), 3e3 / p) < 1e-14

def test_live_model_properties():
    """Phase properties evaluated through the engine"""
    pvt = BlackOilPvt.from_tables(live_tables())
    assert rel(pvt.oil.saturated_formation_volume_factor(0, T, 8e6), 1.25) < 1e-9
    assert rel(pvt.gas.saturated_formation_volume_factor(0, T, 5e6), 0.02) < 1e-9
    assert pvt.water.formation_volume_factor(0, T, 1e7) == 1.02
    xog = pvt.oil.saturated_oil_gas_mass_fraction(0, T, 8e6)
    assert rel(pvt.oil.saturation_pressure(0, T, xog), 8e6) < 1e-10

def test_reference_data():
    """Reference densities and molar masses per region"""
    pvt = BlackOilPvt.from_tables(dead_tables())
    assert pvt.num_regions == 2
    assert pvt.reference_density('OIL', 1) == 800.0
    assert pvt.reference_density(phase.GAS, 0) == 0.85
    assert pvt.reference_density('water', 1) == 1030.0
    assert rel(pvt.molar_mass('GAS', 1), R * T_SURF * 0.95 / P_SURF) < 1e-14
    assert pvt.molar_mass(component.OIL, 0) == 0.175
    assert pvt.molar_mass(component.WATER, 0) == 0.018
    assert not pvt.enable_dissolved_gas
    # Region reference densities reach the phase implementations
    assert rel(pvt.oil.density(1, T, 1e6, 0.0), 800.0 / 1.05) < 1e-14
    assert rel(pvt.water.density(1, T, 1e7), 1030.0 / 1.02) < 1e-14

def test_summary():
    """Text summary of approaches and reference data"""
    pvt = BlackOilPvt.from_tables(live_tables())
    text = pvt.summary()
    assert 'Oil: LIVE' in text
    assert 'Gas: WET' in text
    assert 'Rho Oil' in text

def test_inactive_phase():
    """Phase without tables stays inactive"""
    tables = dead_tables()
    del tables['PVDG']
    pvt = BlackOilPvt.from_tables(tables)
    assert pvt.gas.approach == gas_pvt_approach.NONE
    assert pvt.oil.approach == oil_pvt_approach.DEAD
    try:
        pvt.gas.density(0, T, 1e7, 0.0)
        assert False, "Should have raised ConfigurationError"
    except ConfigurationError:
        pass

def test_table_precedence():
    """Keyword precedence when several tables are supplied"""
    tables = dead_tables()
    tables['PVCDO'] = pd.DataFrame({'PREF': [2e7, 2e7], 'BO': [1.2, 1.2], 'CO': [1e-9, 1e-9],
                                    'MUO': [1e-3, 1e-3], 'CV': [0.0, 0.0]})
    pvt = BlackOilPvt.from_tables(tables)
    assert pvt.oil.approach == oil_pvt_approach.CONSTCOMP
    assert pvt.oil.formation_volume_factor(1, T, 2e7, 0.0) == 1.2

def test_invalid_tables():
    """Missing or inconsistent tables are rejected"""
    tables = dead_tables()
    del tables['DENSITY']
    try:
        BlackOilPvt.from_tables(tables)
        assert False, "Missing DENSITY should raise"
    except ConfigurationError:
        pass
    tables = dead_tables()
    tables['PVDO'] = tables['PVDO'][:1]
    try:
        BlackOilPvt.from_tables(tables)
        assert False, "Region count mismatch should raise"
    except ConfigurationError:
        pass


if __name__ == '__main__':
    tests = [v for k, v in sorted(globals().items()) if k.startswith('test_') and callable(v)]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  PASS: {test.__name__}")
        except Exception as e:
            failed += 1
            print(f"  FAIL: {test.__name__}: {e}")
    sys.exit(1 if failed > 0 else 0)
