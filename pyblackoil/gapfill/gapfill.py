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
from typing import List, Tuple

import numpy as np
import numpy.typing as npt

from pyblackoil.errors import TableConstructionError

logger = logging.getLogger(__name__)


def extend_undersaturated_rows(
    rows: List[npt.ArrayLike],
    synthetic: List[npt.ArrayLike] = None,
    label: str = 'table',
) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """ Makes sure every row of a saturated/undersaturated table holds at least two samples
        Returns (rows, synthetic), new arrays for each row plus boolean masks flagging the samples that were synthesized

        rows: List with one array per outer position (pressure for PVTG, Rs for PVTO), each of shape (n, 3) with columns
              [inner variable, formation volume factor, viscosity]. The first sample of each row is the saturated one.
        synthetic: Optional list of boolean masks flagging samples already known to be synthetic. Defaults to all False
        label: Name of the table used in messages

        A row with a single sample is extended using the first following row that holds two or more samples
        (the master row). Each additional master sample is turned into a ratio relative to the master's saturated
        sample, and that ratio is applied to all three columns of the deficient row's saturated sample.
        This assumes the undersaturated branches are self similar from row to row. The synthesized samples are
        an approximation, not measured data, and are flagged as such.

        A deficient row with a zero saturated inner variable scales to duplicates of its own saturated entry only.
        It keeps its single sample and a warning is logged.

        Raises TableConstructionError if a row has no sample at all, or if a deficient row has no master row after it.
    """
    src = []
    for r, row in enumerate(rows):
        arr = np.atleast_2d(np.array(row, dtype=float))
        if arr.size == 0:
            raise TableConstructionError(f"{label}: row {r} has no sample points")
        if arr.shape[1] != 3:
            raise TableConstructionError(f"{label}: row {r} must have 3 columns, got {arr.shape[1]}")
        src.append(arr)

    if synthetic is None:
        masks = [np.zeros(len(arr), dtype=bool) for arr in src]
    else:
        masks = [np.array(m, dtype=bool).copy() for m in synthetic]
        if len(masks) != len(src) or any(len(m) != len(a) for m, a in zip(masks, src)):
            raise TableConstructionError(f"{label}: provenance masks do not match the table rows")

    out_rows = [arr.copy() for arr in src]
    n_extended = 0
    for r, arr in enumerate(src):
        if len(arr) > 1:
            continue

        master_idx = r + 1
        while master_idx < len(src) and len(src[master_idx]) <= 1:
            master_idx += 1
        if master_idx >= len(src):
            raise TableConstructionError(f"{label} is invalid: The last row must exhibit at least one "
                                         f"undersaturated entry (row {r} has nothing to borrow from)")

        master = src[master_idx]
        sat = master[0]
        if np.any(sat == 0):
            raise TableConstructionError(f"{label}: master row {master_idx} has a zero entry in its saturated "
                                         f"sample, undersaturated ratios cannot be formed")

        new_samples = []
        for k in range(1, len(master)):
            alpha = master[k] / sat
            new = arr[0] * alpha
            existing = [s[0] for s in arr] + [s[0] for s in new_samples]
            if new[0] in existing:
                logger.debug(f"{label}: synthesized sample {new} for row {r} duplicates an existing entry, dropped")
                continue
            new_samples.append(new)

        if new_samples:
            out_rows[r] = np.vstack([arr] + new_samples)
            masks[r] = np.concatenate([masks[r], np.ones(len(new_samples), dtype=bool)])
            n_extended += 1
            logger.debug(f"{label}: row {r} extended with {len(new_samples)} samples scaled from master row {master_idx}")
        else:
            logger.warning(f"{label}: row {r} could not be extended from master row {master_idx}, every scaled "
                           f"sample duplicates its saturated entry. The row keeps a single sample")

    if n_extended > 0:
        logger.warning(f"{label}: {n_extended} rows had a single (saturated) sample and were extended by scaling "
                       f"undersaturated ratios from later rows. These points are an approximation, not measured data")
    return out_rows, masks
