"""Test module for the boundary tracer and its direction table."""

from __future__ import annotations

import numpy as np
import pytest
from shapely.geometry import Polygon

from geotrace.exceptions import IllegalCodeError, InvalidStartError
from geotrace.georeferencing import CoordinateMapper
from geotrace.grid import ArrayGrid
from geotrace.tracing import (
    BoundaryTracer,
    Direction,
    NeighborCodeEvaluator,
    VisitedTracker,
    select_direction,
)


def _identity(gx: int, gy: int) -> tuple[float, float]:
    return float(gx), float(gy)


def _tracer(data: np.ndarray, target_value: float = 1, res: float = 1.0) -> BoundaryTracer:
    grid = ArrayGrid(data)
    evaluator = NeighborCodeEvaluator(grid, target_value, VisitedTracker(grid.width, grid.height))
    return BoundaryTracer(evaluator, CoordinateMapper(_identity, res, res))


def _grid_with(width: int, height: int, cells: list[tuple[int, int]]) -> np.ndarray:
    data = np.full((height, width), np.nan)
    for x, y in cells:
        data[y, x] = 1
    return data


class TestSelectDirection:
    @pytest.mark.parametrize(
        "code, direction",
        [
            (1, Direction.NORTH),
            (5, Direction.NORTH),
            (13, Direction.NORTH),
            (2, Direction.EAST),
            (3, Direction.EAST),
            (7, Direction.EAST),
            (4, Direction.WEST),
            (12, Direction.WEST),
            (14, Direction.WEST),
            (8, Direction.SOUTH),
            (10, Direction.SOUTH),
            (11, Direction.SOUTH),
        ],
    )  # type: ignore
    def test_select_direction__unambiguous(self, code: int, direction: Direction) -> None:
        """Check codes with a single move ignore the previous move."""

        for previous in [None, *Direction]:
            assert select_direction(code, previous) is direction

    def test_select_direction__saddles(self) -> None:
        """Check the two saddle codes are resolved by the previous move."""

        assert select_direction(6, Direction.NORTH) is Direction.EAST
        for previous in [None, Direction.EAST, Direction.SOUTH, Direction.WEST]:
            assert select_direction(6, previous) is Direction.WEST

        assert select_direction(9, Direction.EAST) is Direction.NORTH
        for previous in [None, Direction.NORTH, Direction.SOUTH, Direction.WEST]:
            assert select_direction(9, previous) is Direction.SOUTH

    @pytest.mark.parametrize("code", [0, 15, 16, -1])  # type: ignore
    def test_select_direction__illegal(self, code: int) -> None:
        """Check codes that cannot lie on a boundary raise an error."""

        with pytest.raises(IllegalCodeError, match=f"Illegal neighbor code {code}"):
            select_direction(code, None)

    def test_direction_delta(self) -> None:
        """Check grid moves, rows increasing southwards."""

        assert Direction.NORTH.delta == (0, -1)
        assert Direction.EAST.delta == (1, 0)
        assert Direction.SOUTH.delta == (0, 1)
        assert Direction.WEST.delta == (-1, 0)


class TestBoundaryTracer:
    def test_trace__single_cell(self) -> None:
        """Check the ring of a single cell is a unit square closing on its start."""

        tracer = _tracer(_grid_with(3, 3, [(1, 1)]))
        coords = tracer.trace(1, 1)

        assert coords == [(1.5, 0.5), (1.5, 1.5), (0.5, 1.5), (0.5, 0.5), (1.5, 0.5)]
        assert tracer.last_path == [(1, 1), (1, 0), (0, 0), (0, 1), (1, 1)]

        polygon = Polygon(coords)
        assert polygon.is_valid
        assert polygon.area == 1.0
        assert polygon.centroid.coords[0] == pytest.approx((1.0, 1.0))

        # Only the cell with data was marked
        assert tracer.evaluator.visited.count() == 1

    def test_trace__resolution(self) -> None:
        """Check the ring scales with the resolution."""

        tracer = _tracer(_grid_with(3, 3, [(1, 1)]), res=2.0)
        coords = tracer.trace(1, 1)

        assert coords == [(2.0, 0.0), (2.0, 2.0), (0.0, 2.0), (0.0, 0.0), (2.0, 0.0)]

    def test_trace__interior(self) -> None:
        """Check an interior start returns no ring but still marks the cells read."""

        tracer = _tracer(_grid_with(4, 4, [(1, 1), (2, 1), (1, 2), (2, 2)]))

        assert tracer.trace(1, 1) is None
        assert tracer.last_path == []
        assert tracer.evaluator.visited.count() == 4

    def test_trace__last_path_reset(self) -> None:
        """Check the grid path of a trace is replaced by the next trace, and emptied by an interior start."""

        tracer = _tracer(_grid_with(7, 7, [(1, 1), (3, 3), (4, 3), (3, 4), (4, 4)]))

        assert tracer.last_path == []
        assert tracer.trace(1, 1) is not None
        assert tracer.last_path == [(1, 1), (1, 0), (0, 0), (0, 1), (1, 1)]

        assert tracer.trace(3, 3) is None
        assert tracer.last_path == []

    def test_trace__block_from_left(self) -> None:
        """Check the ring of a 2x2 block traced from the window left of its first cell."""

        tracer = _tracer(_grid_with(4, 4, [(1, 1), (2, 1), (1, 2), (2, 2)]))
        coords = tracer.trace(0, 1)

        assert coords == [
            (0.5, 0.5),
            (0.5, -0.5),
            (1.5, -0.5),
            (2.5, -0.5),
            (2.5, 0.5),
            (2.5, 1.5),
            (1.5, 1.5),
            (0.5, 1.5),
            (0.5, 0.5),
        ]
        assert Polygon(coords).area == 4.0

    def test_trace__saddle_upper_right_lower_left(self) -> None:
        """Check code 6 goes east after a move north and west after a move south."""

        tracer = _tracer(_grid_with(4, 4, [(2, 1), (1, 2)]))
        coords = tracer.trace(1, 2)

        # The saddle position (1, 1) is walked twice, once from each side
        assert tracer.last_path == [(1, 2), (1, 1), (2, 1), (2, 0), (1, 0), (1, 1), (0, 1), (0, 2), (1, 2)]
        assert coords == [
            (1.5, 1.5),
            (1.5, 2.5),
            (2.5, 2.5),
            (2.5, 3.5),
            (1.5, 3.5),
            (1.5, 2.5),
            (0.5, 2.5),
            (0.5, 1.5),
            (1.5, 1.5),
        ]

    def test_trace__saddle_upper_left_lower_right(self) -> None:
        """Check code 9 goes north after a move east and south otherwise."""

        # Arriving from the west: the ring goes north around the upper-left cell
        tracer = _tracer(_grid_with(4, 4, [(1, 1), (2, 2)]))
        coords = tracer.trace(0, 1)
        assert tracer.last_path == [(0, 1), (1, 1), (1, 0), (0, 0), (0, 1)]
        assert coords == [(0.5, 0.5), (1.5, 0.5), (1.5, 1.5), (0.5, 1.5), (0.5, 0.5)]

        # Starting on the saddle: no previous move, the ring goes south around the lower-right cell
        tracer = _tracer(_grid_with(4, 4, [(1, 1), (2, 2)]))
        coords = tracer.trace(1, 1)
        assert tracer.last_path == [(1, 1), (1, 2), (2, 2), (2, 1), (1, 1)]
        assert coords == [(1.5, 0.5), (1.5, -0.5), (2.5, -0.5), (2.5, 0.5), (1.5, 0.5)]

    def test_trace__no_boundary(self) -> None:
        """Check a start with code 0 raises an error."""

        tracer = _tracer(_grid_with(3, 3, []))

        with pytest.raises(InvalidStartError, match="does not lie on a boundary"):
            tracer.trace(1, 1)

    @pytest.mark.parametrize("start", [(-1, 0), (0, -1), (3, 1), (1, 3)])  # type: ignore
    def test_trace__outside(self, start: tuple[int, int]) -> None:
        """Check a start outside of the grid raises an error before any read."""

        tracer = _tracer(_grid_with(3, 3, [(1, 1)]))

        with pytest.raises(InvalidStartError, match="outside of the grid"):
            tracer.trace(*start)
        assert tracer.evaluator.visited.count() == 0

    def test_trace__illegal_code(self) -> None:
        """Check an illegal code met along the way propagates as an error."""

        class ForgetfulEvaluator(NeighborCodeEvaluator):
            """Evaluator losing track of the region after the first window."""

            calls = 0

            def code(self, x: int, y: int) -> int:
                self.calls += 1
                return super().code(x, y) if self.calls == 1 else 0

        grid = ArrayGrid(_grid_with(3, 3, [(1, 1)]))
        evaluator = ForgetfulEvaluator(grid, 1, VisitedTracker(3, 3))
        tracer = BoundaryTracer(evaluator, CoordinateMapper(_identity, 1.0, 1.0))

        with pytest.raises(IllegalCodeError, match="Illegal neighbor code 0"):
            tracer.trace(1, 1)

    def test_trace__closure(self) -> None:
        """Check every trace of a random grid closes on its start index and start point."""

        rng = np.random.default_rng(42)
        data = rng.integers(0, 3, size=(12, 15)).astype(float)
        data[rng.random((12, 15)) < 0.1] = np.nan
        tracer = _tracer(data)

        n_rings = 0
        for x in range(15):
            for y in range(12):
                if tracer.evaluator.code(x, y) in (0, 15):
                    continue
                coords = tracer.trace(x, y)
                assert tracer.last_path[0] == tracer.last_path[-1] == (x, y)
                assert coords[0] == coords[-1]
                assert len(coords) == len(tracer.last_path) >= 5
                n_rings += 1

        assert n_rings > 0

    def test_trace__closure_inexact_resolution(self) -> None:
        """Check rings with a resolution not representable in binary close up to rounding."""

        tracer = _tracer(_grid_with(5, 5, [(1, 1), (2, 1), (3, 1), (1, 2), (1, 3)]), res=0.1)
        coords = tracer.trace(0, 1)

        assert tracer.last_path[-1] == (0, 1)
        assert coords[-1] == pytest.approx(coords[0])
        assert Polygon(coords).area == pytest.approx(0.05)
