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
Boundary following on neighbor codes.

At each grid position, the neighbor code of the 2x2 window decides the next move. Twelve codes have a single possible
move. The two saddle codes (6 and 9, where only diagonal cells are set) are resolved with the previous move: code 6
goes east after a move north and west otherwise, code 9 goes north after a move east and south otherwise. Codes 0
and 15 never lie on a boundary.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from geotrace._dispatch import _check_grid_index
from geotrace._typing import RingCoords
from geotrace.exceptions import IllegalCodeError, InvalidStartError
from geotrace.georeferencing import CoordinateMapper
from geotrace.tracing.codes import EMPTY_CODE, INTERIOR_CODE, NeighborCodeEvaluator


class Direction(IntEnum):
    """Direction of a move on the grid."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def delta(self) -> tuple[int, int]:
        """Move (dx, dy) in grid indexes, rows increasing southwards."""
        return _DELTAS[self]


_DELTAS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}

# Codes with a single possible move
_MOVES = {
    1: Direction.NORTH,
    5: Direction.NORTH,
    13: Direction.NORTH,
    2: Direction.EAST,
    3: Direction.EAST,
    7: Direction.EAST,
    4: Direction.WEST,
    12: Direction.WEST,
    14: Direction.WEST,
    8: Direction.SOUTH,
    10: Direction.SOUTH,
    11: Direction.SOUTH,
}

# Saddle codes: upper-right and lower-left set (6), upper-left and lower-right set (9)
_SADDLE_UR_LL = 6
_SADDLE_UL_LR = 9


def select_direction(code: int, previous: Direction | None) -> Direction:
    """
    Select the move for a neighbor code.

    :param code: Neighbor code at the current position.
    :param previous: Previous move of the trace, None before the first move.

    :raises IllegalCodeError: If the code cannot lie on a boundary (0, 15, or outside [0, 15]).

    :returns: Direction of the next move.
    """

    if code == _SADDLE_UR_LL:
        return Direction.EAST if previous is Direction.NORTH else Direction.WEST
    if code == _SADDLE_UL_LR:
        return Direction.NORTH if previous is Direction.EAST else Direction.SOUTH

    try:
        return _MOVES[code]
    except KeyError:
        raise IllegalCodeError(f"Illegal neighbor code {code!r} met while following a boundary.") from None


class BoundaryTracer:
    """
    Follows the boundary passing through a start position until it closes back on it.

    All code evaluations go through the evaluator, so each trace marks the cells it reads in the evaluator's visited
    tracker.

    After each call to :meth:`trace`, the attribute ``last_path`` holds the grid positions walked by that trace, start
    included at both ends, for inspecting a ring in grid space. It is empty when the start window is interior.
    """

    def __init__(self, evaluator: NeighborCodeEvaluator, mapper: CoordinateMapper) -> None:
        self.evaluator = evaluator
        self.mapper = mapper
        self.last_path: list[tuple[int, int]] = []

    def trace(self, start_x: int, start_y: int) -> RingCoords | None:
        """
        Trace the ring starting at a grid position.

        :param start_x: Column of the start position.
        :param start_y: Row of the start position.

        :raises InvalidStartError: If the start is outside the grid, or if no boundary passes through it (code 0).
        :raises IllegalCodeError: If a code that cannot lie on a boundary is met along the way.

        :returns: World coordinates of the ring, first point repeated at the end, or None if the start window is
            interior (code 15).
        """

        _check_grid_index(start_x, start_y, self.evaluator.width, self.evaluator.height)

        code = self.evaluator.code(start_x, start_y)
        if code == EMPTY_CODE:
            raise InvalidStartError(f"Grid index ({start_x}, {start_y}) does not lie on a boundary.")
        if code == INTERIOR_CODE:
            self.last_path = []
            return None

        current = self.mapper.start(start_x, start_y)
        coords = [current]
        path = [(start_x, start_y)]

        x, y = start_x, start_y
        previous = None
        while True:
            direction = select_direction(code, previous)
            dx, dy = direction.delta
            current = self.mapper.step(current, dx, dy)
            coords.append(current)

            x, y = x + dx, y + dy
            previous = direction
            path.append((x, y))
            if x == start_x and y == start_y:
                break

            code = self.evaluator.code(x, y)

        self.last_path = path
        logging.debug("Traced ring of %d moves from grid position (%d, %d).", len(path) - 1, start_x, start_y)

        return coords
