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

"""Functions for consistent input checks."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import affine
import numpy as np
import pyproj

from geotrace._typing import Number
from geotrace.exceptions import (
    InvalidCRSError,
    InvalidResolutionError,
    InvalidStartError,
    InvalidTransformError,
)


def _check_crs(crs: Any) -> pyproj.CRS:
    """Function for checking input CRS consistently."""

    # Let Pyproj do the job with from user input
    try:
        crs = pyproj.CRS.from_user_input(crs)
    except pyproj.exceptions.CRSError as e:
        raise InvalidCRSError("Projection not recognized by Pyproj.") from e

    return crs


def _check_resolution(res: Number | tuple[Number, Number]) -> tuple[float, float]:
    """Helper function on checking resolution input."""

    # Case 1: Single scalar resolution
    if isinstance(res, (float, int, np.floating, np.integer)):
        # Should be finite value
        if not np.isfinite(res):
            raise InvalidResolutionError(f"Resolution must be a finite number, got {res!r}.")
        # Should be strictly positive
        if res <= 0:
            raise InvalidResolutionError(f"Resolution must be strictly positive, got {res!r}.")
        return float(res), float(res)

    # Case 2: Sequence of two numbers for X and Y (xres, yres)
    if isinstance(res, Sequence) and not isinstance(res, (str, bytes)):
        # Should be a sequence of two
        if len(res) != 2:
            raise InvalidResolutionError(
                f"Resolution must be a number or a sequence of two numbers, got a sequence of length {len(res)}."
            )

        # Should be numeric values
        try:
            xres, yres = (float(r) for r in res)
        except (TypeError, ValueError) as e:
            raise InvalidResolutionError("Resolution values must be numeric.") from e

        # Should be finite values
        if not np.isfinite(xres) or not np.isfinite(yres):
            raise InvalidResolutionError("Resolution values must be finite numbers.")

        # Should be strictly positive
        if xres <= 0 or yres <= 0:
            raise InvalidResolutionError(
                f"Resolution values must be strictly positive, got (xres={xres}, yres={yres})."
            )

        return xres, yres

    # If none of the above
    raise InvalidResolutionError(
        f"Resolution must be a number or a sequence of two numbers, got object of type {type(res).__name__}"
    )


def _check_transform(transform: Any) -> affine.Affine:
    """Helper function on checking grid transform input, which must be north-up and without rotation."""

    if not isinstance(transform, affine.Affine):
        raise InvalidTransformError(
            f"Transform must be an affine.Affine, got object of type {type(transform).__name__}."
        )

    # Rotation or shear terms
    if transform.b != 0 or transform.d != 0:
        raise InvalidTransformError(
            f"Transform must not be rotated or sheared, got b={transform.b} and d={transform.d}."
        )

    # Columns go towards +X and rows towards -Y
    if transform.a <= 0 or transform.e >= 0:
        raise InvalidTransformError(
            f"Transform must be north-up with a positive X and a negative Y pixel size, got a={transform.a} and "
            f"e={transform.e}."
        )

    return transform


def _check_grid_index(x: int, y: int, width: int, height: int) -> None:
    """Helper function checking a grid index (column, row) lies in [0, width) x [0, height)."""

    if x < 0 or x > width - 1 or y < 0 or y > height - 1:
        raise InvalidStartError(f"Grid index ({x}, {y}) is outside of the grid of size {width}x{height}.")
