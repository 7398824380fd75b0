# Copyright (c) 2025 GeoTrace developers
#
# This file is part of the GeoTrace project.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Evaluation of the 4-bit neighbor code of a 2x2 window of cells."""

from __future__ import annotations

import logging

from geotrace.grid import GridSampler, is_nodata
from geotrace.tracing.visited import VisitedTracker

# No boundary passes through the window
EMPTY_CODE = 0
# All four cells belong to the region, the window is interior
INTERIOR_CODE = 15

# Bit of each window cell, with (dx, dy) relative to the upper-left corner of the window
_CORNER_BITS = (
    (0, 0, 1),  # Upper-left
    (1, 0, 2),  # Upper-right
    (0, 1, 4),  # Lower-left
    (1, 1, 8),  # Lower-right
)


class NeighborCodeEvaluator:
    """
    Computes the neighbor code at a grid position, marking every valid cell it reads in a visited tracker.

    A cell is "set" when it is inside the grid, holds data and is exactly equal to the target value. The inside test
    excludes column 0 and row 0, and admits column ``width`` and row ``height``: this one-cell shift is part of the
    tracing convention and decides which edge cells can start or block a trace. Cells of column ``width`` or row
    ``height`` are past the last sample, so they are never set and never marked.
    """

    def __init__(self, grid: GridSampler, target_value: float, visited: VisitedTracker) -> None:
        self.grid = grid
        self.target_value = target_value
        self.visited = visited
        self.width = grid.width
        self.height = grid.height

    def is_outside(self, x: int, y: int) -> bool:
        """Whether a cell is outside the grid under the tracing convention."""
        return x <= 0 or x > self.width or y <= 0 or y > self.height

    def is_set(self, x: int, y: int) -> bool:
        """Whether cell (x, y) belongs to the region. Marks the cell as visited if it holds data."""

        if self.is_outside(x, y):
            return False
        # Last column and row of the convention lie past the sampler's domain
        if x == self.width or y == self.height:
            return False

        value = self.grid.sample(x, y)
        if is_nodata(value):
            return False

        self.visited.mark(x, y)
        return value == self.target_value

    def code(self, x: int, y: int) -> int:
        """Neighbor code in [0, 15] of the 2x2 window with upper-left cell (x, y)."""

        code = 0
        for dx, dy, bit in _CORNER_BITS:
            if self.is_set(x + dx, y + dy):
                code |= bit

        if code == EMPTY_CODE:
            logging.debug("No boundary at grid position (%d, %d).", x, y)

        return code
