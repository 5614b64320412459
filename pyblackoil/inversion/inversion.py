#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyBlackOil - Region based black-oil PVT property engine
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

import logging
from typing import Callable

from pyblackoil.constants import NEWTON_MAX_ITER, NEWTON_RTOL, NEWTON_EPS
from pyblackoil.errors import NumericalIssue
from pyblackoil.shared_fns import value_of

logger = logging.getLogger(__name__)


def saturation_pressure(
    forward: Callable,
    target,
    initial_guess,
    region_idx: int = None,
    max_iter: int = NEWTON_MAX_ITER,
    rtol: float = NEWTON_RTOL,
    eps_rel: float = NEWTON_EPS,
):
    """ Returns the pressure at which forward(p) equals target, via Newton iteration
        forward: Composition at saturation as a function of pressure, f(p)
        target: Composition of interest
        initial_guess: Starting pressure, typically from a saturation pressure spline
        region_idx: PVT region, only used for diagnostics
        max_iter: Maximum number of Newton iterations. Default 20
        rtol: Converged once the pressure update is smaller than rtol * |p|. Default 1e-10
        eps_rel: Forward finite difference step relative to the initial guess. Default 1e-11

        Raises NumericalIssue (carrying region_idx and target) if no converged pressure is found.
    """
    p_sat = initial_guess
    eps = p_sat * eps_rel
    if value_of(eps) == 0:
        raise NumericalIssue(f"Zero initial saturation pressure guess for composition {value_of(target)} "
                             f"in region {region_idx}", region_idx=region_idx, target=target)

    for i in range(max_iter):
        f = forward(p_sat) - target
        f_prime = ((forward(p_sat + eps) - target) - f) / eps
        if value_of(f_prime) == 0:
            raise NumericalIssue(f"Saturated composition does not vary with pressure near {value_of(p_sat)} Pa, "
                                 f"cannot invert composition {value_of(target)} in region {region_idx}",
                                 region_idx=region_idx, target=target)
        delta = f / f_prime
        p_sat = p_sat - delta
        if abs(value_of(delta)) < abs(value_of(p_sat)) * rtol:
            logger.debug(f"Saturation pressure {value_of(p_sat)} Pa found in {i + 1} iterations (region {region_idx})")
            return p_sat

    raise NumericalIssue(f"Could not find the saturation pressure for composition {value_of(target)} in region "
                         f"{region_idx} within {max_iter} iterations", region_idx=region_idx, target=target)
