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

"""Per-cell visitation flags shared by the code evaluator and the scan driver."""

from __future__ import annotations

import numpy as np

from geotrace._typing import NDArrayBool


class VisitedTracker:
    """
    One flag per grid cell, stored flat and indexed by ``y * width + x``.

    Flags are only ever set, never cleared. A cell is marked as soon as its sample is read during a neighbor code
    evaluation, whether or not it belongs to the traced region.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._flags = np.zeros(width * height, dtype=bool)

    def _index(self, x: int, y: int) -> int:
        return y * self.width + x

    def mark(self, x: int, y: int) -> None:
        """Mark cell (x, y) as visited."""
        self._flags[self._index(x, y)] = True

    def is_visited(self, x: int, y: int) -> bool:
        """Whether cell (x, y) has been visited."""
        return bool(self._flags[self._index(x, y)])

    def count(self) -> int:
        """Number of visited cells."""
        return int(np.count_nonzero(self._flags))

    def to_array(self) -> NDArrayBool:
        """Copy of the flags as a 2D array of shape (height, width)."""
        return self._flags.reshape(self.height, self.width).copy()

    def __len__(self) -> int:
        return self._flags.size
