from .errors import PVTError, ConfigurationError, TableConstructionError, TableRangeError, NumericalIssue
