from .constants import (P_SURF, T_SURF, R, MW_OIL, MW_WATER, NCOMP_SAMPLES, USAT_DEN_SLOPE,
                        PSAT_SPLINE_DENSITY, NEWTON_MAX_ITER, NEWTON_RTOL, NEWTON_EPS,
                        PVAP_OIL, PVAP_WATER, INSOLUBLE_SCALE, WATER_IN_HC_SCALE)
