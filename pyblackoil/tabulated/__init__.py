from .tabulated import Tabulated1DFunction, Tabulated2DFunction, split_long_table
