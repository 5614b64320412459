from .shared_fns import value_of, check_region, sampling_points, constant_compressibility_factor
