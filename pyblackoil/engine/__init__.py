from .engine import BlackOilPvt
