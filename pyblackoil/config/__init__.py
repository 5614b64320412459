from .config import PvtConfig, default_config
