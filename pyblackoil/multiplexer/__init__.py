from .multiplexer import PvtMultiplexer, OilPvtMultiplexer, GasPvtMultiplexer, WaterPvtMultiplexer, bind
