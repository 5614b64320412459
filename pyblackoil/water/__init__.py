from .water import ConstantCompressibilityWaterPvt
