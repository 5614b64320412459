from .spline import MonotonicSpline
