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

"""Typing aliases for internal use."""

from __future__ import annotations

from typing import Any, List, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Mypy has issues with the builtin Number type (https://github.com/python/mypy/issues/3186)
Number = Union[int, float, np.integer[Any], np.floating[Any]]

# Use NDArray wrapper to easily define numerical (float or int) N-D array types, and boolean N-D array types
NDArrayNum = NDArray[Union[np.floating[Any], np.integer[Any]]]
NDArrayBool = NDArray[np.bool_]
# Define numerical (float or int) masked N-D array type
MArrayNum = np.ma.masked_array[Any, np.dtype[Union[np.floating[Any], np.integer[Any]]]]

# World coordinate (x, y) and closed sequence of those
Coord = Tuple[float, float]
RingCoords = List[Coord]
