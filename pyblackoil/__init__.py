"""
pyblackoil
===================================

-----------------------------------------------------
A region based black-oil PVT property engine
-----------------------------------------------------

Computes the formation volume factor, viscosity, density, fugacity coefficients,
dissolution / vaporization factors and saturation pressure of oil, gas and water
for a black-oil reservoir simulation fluid model. Properties come from tabulated
data or closed form correlations, selected per phase from the tables supplied.

Each concern lives in its own module, requiring seperate imports;

- Tabulated 1D and ragged 2D functions
- Monotonic spline used to seed saturation pressure searches
- Wet and dry gas, live, dead and constant compressibility oil, constant compressibility water
- Phase multiplexers selecting among the above
- Extension of undersaturated table rows (gap-fill)
- Newton inversion of saturated compositions into saturation pressures
- Engine building all three phases from DENSITY, PVTO/PVDO/PVCDO, PVTG/PVDG and PVTW tables

"""

submodules = [
    'classes',
    'config',
    'constants',
    'engine',
    'errors',
    'gapfill',
    'gas',
    'inversion',
    'multiplexer',
    'oil',
    'region',
    'shared_fns',
    'spline',
    'tabulated',
    'validate',
    'water'
]

__all__ = submodules

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pyblackoil.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pyblackoil' has no attribute '{name}'"
            )
