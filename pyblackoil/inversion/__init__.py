from .inversion import saturation_pressure
