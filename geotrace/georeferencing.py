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

"""
Functions for mapping grid positions to world coordinates.
"""

from __future__ import annotations

from typing import Callable, Literal

import affine

from geotrace._config import _pixel_anchors, config, validate_pixel_offset
from geotrace._dispatch import _check_resolution
from geotrace._typing import Coord

# Callable mapping a grid index (column, row) to world coordinates (x, y)
GridToWorld = Callable[[int, int], Coord]


def res_from_affine(transform: affine.Affine) -> tuple[float, float]:
    """Resolution (X, Y) of a grid from its affine transform."""

    return transform.a, abs(transform.e)


def grid_to_world_from_affine(
    transform: affine.Affine, pixel_offset: Literal["center", "ul", "ur", "ll", "lr"] | None = None
) -> GridToWorld:
    """
    Derive a grid-to-world function from an affine transform.

    :param transform: Affine transform of the grid, mapping (column, row) to (x, y).
    :param pixel_offset: Pixel anchor of the returned coordinates: "center" of pixel, or any corner (upper-left "ul",
        "ur", "ll", "lr"). Can be configured with the global setting geotrace.config["pixel_offset"].

    :returns: Function of (column, row) returning the (x, y) coordinates of the anchor.
    """

    # If undefined, default to the global system config
    if pixel_offset is None:
        pixel_offset = config["pixel_offset"]
    else:
        pixel_offset = validate_pixel_offset(pixel_offset)

    coff, roff = _pixel_anchors[pixel_offset]

    def _grid_to_world(gx: int, gy: int) -> Coord:
        x, y = transform * (gx + coff, gy + roff)
        return float(x), float(y)

    return _grid_to_world


class CoordinateMapper:
    """
    Maps grid positions of a trace to world coordinates.

    The start point of a ring is the world position of the start cell shifted by half a cell towards +X and -Y, which
    puts it on the corner shared by the four cells of the start window. Following points are accumulated move by move
    from the previous one, so that a ring is reproducible bit-for-bit given the same sequence of moves.
    """

    def __init__(self, grid_to_world: GridToWorld, xres: float, yres: float) -> None:
        self.grid_to_world = grid_to_world
        self.xres, self.yres = _check_resolution((xres, yres))

    def to_world(self, gx: int, gy: int) -> Coord:
        """World coordinates of grid index (gx, gy) through the supplied transform."""
        x, y = self.grid_to_world(gx, gy)
        return float(x), float(y)

    def start(self, gx: int, gy: int) -> Coord:
        """World coordinates of the first point of a ring starting at grid index (gx, gy)."""
        x, y = self.to_world(gx, gy)
        return x + self.xres / 2.0, y - self.yres / 2.0

    def step(self, current: Coord, dx: int, dy: int) -> Coord:
        """
        World coordinates after one grid move (dx, dy) from ``current``.

        Moving down the grid rows (dy=+1) goes down in world Y, moving right (dx=+1) goes up in world X.
        """
        x, y = current
        if dx > 0:
            x = x + self.xres
        elif dx < 0:
            x = x - self.xres
        if dy > 0:
            y = y - self.yres
        elif dy < 0:
            y = y + self.yres
        return x, y
