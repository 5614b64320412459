from .region import RegionPvt
