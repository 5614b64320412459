from .gas import WetGasPvt, DryGasPvt
