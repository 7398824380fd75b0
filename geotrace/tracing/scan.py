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

"""Scan of a grid for the rings bounding the regions of a target value."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

import numpy as np
from shapely.geometry import Polygon

from geotrace._config import config
from geotrace._typing import Number, RingCoords
from geotrace.georeferencing import CoordinateMapper, GridToWorld
from geotrace.grid import GridSampler, _check_sampler, is_nodata
from geotrace.tracing.codes import EMPTY_CODE, NeighborCodeEvaluator
from geotrace.tracing.tracer import BoundaryTracer
from geotrace.tracing.visited import VisitedTracker


class TracedRing(NamedTuple):
    """A ring found by the scan, with its sequential identifier."""

    id: int
    coords: RingCoords

    @property
    def polygon(self) -> Polygon:
        """Ring as a polygon without holes."""
        return Polygon(self.coords)


@dataclass
class PolygonSet:
    """Ordered collection of the rings found by one scan."""

    rings: list[TracedRing] = field(default_factory=list)

    def append(self, coords: RingCoords) -> TracedRing:
        """Add a ring, numbered after the ones already collected."""
        ring = TracedRing(len(self.rings), coords)
        self.rings.append(ring)
        return ring

    @property
    def ids(self) -> list[int]:
        return [r.id for r in self.rings]

    def geometries(self) -> list[Polygon]:
        """Rings as polygons, in order."""
        return [r.polygon for r in self.rings]

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self) -> Iterator[TracedRing]:
        return iter(self.rings)

    def __getitem__(self, index: int) -> TracedRing:
        return self.rings[index]


def extract_polygons(
    grid: GridSampler,
    xres: float,
    yres: float,
    target_value: Number,
    grid_to_world: GridToWorld,
    skip_invalid_starts: bool | None = None,
    retrace_interior_starts: bool | None = None,
    visited: VisitedTracker | None = None,
) -> PolygonSet:
    """
    Trace the rings bounding all regions of a grid equal to a target value.

    The grid is scanned column by column (outer loop on X, inner loop on Y). Every cell equal to the target value
    that was not visited yet starts a trace. As the tracer marks every cell it reads, the scan order decides which
    cells start a ring, and the output only depends on the inputs.

    :param grid: Grid sampler.
    :param xres: Size of a cell along X in world units.
    :param yres: Size of a cell along Y in world units.
    :param target_value: Value of the cells to outline.
    :param grid_to_world: Function mapping a grid index (column, row) to world coordinates (x, y).
    :param skip_invalid_starts: Whether to skip start cells with no boundary (code 0) instead of raising. Defaults to
        True. Can be configured with the global setting geotrace.config["skip_invalid_starts"].
    :param retrace_interior_starts: Whether to retrace from the window left of a start cell when the window of the
        start cell is interior (code 15). The start cell is the upper-right cell of that window, which is thus never
        empty (code 0). Defaults to True. Can be configured with the global setting
        geotrace.config["retrace_interior_starts"].
    :param visited: Visited tracker to fill, created empty if not provided.

    :raises InvalidStartError: If a start cell has no boundary and invalid starts are not skipped.

    :returns: Rings found, numbered from 0 in order of discovery.
    """

    # If undefined, default to the global system config
    if skip_invalid_starts is None:
        skip_invalid_starts = config["skip_invalid_starts"]
    if retrace_interior_starts is None:
        retrace_interior_starts = config["retrace_interior_starts"]

    width, height = _check_sampler(grid)
    if np.isnan(target_value):
        raise ValueError("Target value must be a number, got NaN.")

    if visited is None:
        visited = VisitedTracker(width, height)
    elif (visited.width, visited.height) != (width, height):
        raise ValueError(
            f"Visited tracker of size {visited.width}x{visited.height} does not match grid of size {width}x{height}."
        )

    evaluator = NeighborCodeEvaluator(grid, target_value=target_value, visited=visited)
    tracer = BoundaryTracer(evaluator, CoordinateMapper(grid_to_world, xres, yres))

    logging.debug("Scanning grid of size %dx%d for value %s.", width, height, target_value)

    polygons = PolygonSet()
    for x in range(width):
        for y in range(height):
            value = grid.sample(x, y)
            if is_nodata(value) or value != target_value or visited.is_visited(x, y):
                continue

            if skip_invalid_starts and evaluator.code(x, y) == EMPTY_CODE:
                logging.debug("Skipping start at grid position (%d, %d) with no boundary.", x, y)
                continue

            coords = tracer.trace(x, y)
            # Column 0 cells are never set, so an interior window always has a column on its left
            if coords is None and retrace_interior_starts and x > 0:
                logging.debug("Interior start at grid position (%d, %d), retracing from its left.", x, y)
                coords = tracer.trace(x - 1, y)
            if coords is None:
                logging.debug("Skipping interior start at grid position (%d, %d).", x, y)
                continue

            polygons.append(coords)

    logging.debug("Found %d ring(s) for value %s.", len(polygons), target_value)

    return polygons
