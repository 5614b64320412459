from .oil import LiveOilPvt, DeadOilPvt, ConstantCompressibilityOilPvt
