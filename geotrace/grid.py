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
Grid sampling capability consumed by the tracing core.

The core never reads arrays directly: it only calls ``sample(x, y)`` on an object exposing ``width``, ``height`` and
``sample``. :class:`ArrayGrid` adapts a NumPy array (or masked array) to that interface.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from geotrace._typing import MArrayNum, NDArrayNum, Number
from geotrace.exceptions import InvalidGridError

# Sentinel returned by a sampler for cells without data
NODATA = np.nan


def is_nodata(value: float) -> bool:
    """Whether a sampled value is the no data sentinel."""
    return bool(np.isnan(value))


@runtime_checkable
class GridSampler(Protocol):
    """Read-only access to a 2D grid of samples, indexed by column (x) and row (y)."""

    width: int
    height: int

    def sample(self, x: int, y: int) -> float:
        """Sample at column x, row y, or NODATA. Only defined for 0 <= x < width and 0 <= y < height."""
        ...


class ArrayGrid:
    """
    Grid sampler backed by a 2D array.

    Masked cells, non-finite values and cells equal to ``nodata`` are all converted to NODATA on construction.
    """

    def __init__(self, data: NDArrayNum | MArrayNum, nodata: Number | None = None) -> None:
        """
        :param data: 2D array of shape (height, width), or 3D array of shape (1, height, width).
        :param nodata: Optional value to interpret as no data, in addition to the array mask and NaNs.
        """

        if not isinstance(data, np.ndarray):
            raise InvalidGridError(f"Grid data must be a NumPy array, got object of type {type(data).__name__}.")

        arr = np.ma.asarray(data).squeeze()
        if arr.ndim != 2:
            raise InvalidGridError(f"Grid data must be a 2D array, got an array of shape {data.shape}.")
        if arr.size == 0:
            raise InvalidGridError(f"Grid data must have at least one cell, got an array of shape {data.shape}.")

        # Store as float64 so that integer rasters can hold the NaN sentinel
        values = np.array(arr.data, dtype=np.float64)
        invalid = np.ma.getmaskarray(arr) | ~np.isfinite(values)
        if nodata is not None:
            invalid |= values == nodata
        values[invalid] = NODATA

        self._data = values
        self.height, self.width = values.shape

    @property
    def shape(self) -> tuple[int, int]:
        """Shape (height, width) of the grid."""
        return self.height, self.width

    @property
    def data(self) -> NDArrayNum:
        """Grid values as a float array with NaN for no data."""
        return self._data

    def sample(self, x: int, y: int) -> float:
        return float(self._data[y, x])

    def __repr__(self) -> str:
        return f"ArrayGrid(width={self.width}, height={self.height})"


def _check_sampler(grid: object) -> tuple[int, int]:
    """Check an object implements the sampler interface and return its (width, height)."""

    if not isinstance(grid, GridSampler):
        raise InvalidGridError(
            f"Grid must implement 'width', 'height' and 'sample(x, y)', got object of type {type(grid).__name__}."
        )

    width, height = int(grid.width), int(grid.height)
    if width <= 0 or height <= 0:
        raise InvalidGridError(f"Grid dimensions must be strictly positive, got {width}x{height}.")

    return width, height
