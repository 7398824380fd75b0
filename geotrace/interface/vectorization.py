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

"""Functionalities for vectorizing rasters into polygon features (raster to vector)."""

from __future__ import annotations

import logging
from typing import Any, Literal

import affine
import geopandas as gpd
import numpy as np
import rasterio as rio

from geotrace._dispatch import _check_crs, _check_transform
from geotrace._typing import MArrayNum, NDArrayNum, Number
from geotrace.georeferencing import grid_to_world_from_affine, res_from_affine
from geotrace.grid import ArrayGrid
from geotrace.tracing.scan import PolygonSet, extract_polygons

# Name of the attribute column holding the ring identifiers
CAT_COLUMN = "cat"


def polygon_set_to_geodataframe(polygons: PolygonSet, crs: Any = None) -> gpd.GeoDataFrame:
    """
    Convert traced rings into polygon features.

    :param polygons: Rings found by a scan.
    :param crs: Coordinate reference system of the world coordinates, any input understood by pyproj.

    :returns: GeoDataFrame with one polygon per ring and its identifier in column "cat".
    """

    if crs is not None:
        crs = _check_crs(crs)

    gdf = gpd.GeoDataFrame(
        {CAT_COLUMN: np.array(polygons.ids, dtype=np.int64)},
        geometry=gpd.GeoSeries(polygons.geometries(), crs=crs),
        crs=crs,
    )

    return gdf


def polygonize_array(
    data: NDArrayNum | MArrayNum,
    transform: affine.Affine,
    target_value: Number,
    nodata: Number | None = None,
    crs: Any = None,
    pixel_offset: Literal["center", "ul", "ur", "ll", "lr"] | None = None,
    skip_invalid_starts: bool | None = None,
    retrace_interior_starts: bool | None = None,
) -> gpd.GeoDataFrame:
    """
    Polygonize the regions of an array equal to a target value.

    :param data: 2D array (or masked array) of the raster values.
    :param transform: Affine transform of the raster, north-up and without rotation.
    :param target_value: Value of the cells to outline.
    :param nodata: Value of the raster interpreted as no data, in addition to masked and non-finite values.
    :param crs: Coordinate reference system of the raster.
    :param pixel_offset: Pixel anchor of the grid-to-world mapping. Defaults to geotrace.config["pixel_offset"].
    :param skip_invalid_starts: Whether to skip start cells without boundary. Defaults to
        geotrace.config["skip_invalid_starts"].
    :param retrace_interior_starts: Whether to retrace from the left of start cells with an interior window. Defaults
        to geotrace.config["retrace_interior_starts"].

    :returns: GeoDataFrame with one polygon per ring and its identifier in column "cat".
    """

    transform = _check_transform(transform)
    grid = ArrayGrid(data, nodata=nodata)

    if not np.any(grid.data == target_value):
        logging.warning("No cell with value %s in the raster, returning no polygon.", target_value)

    xres, yres = res_from_affine(transform)
    polygons = extract_polygons(
        grid,
        xres=xres,
        yres=yres,
        target_value=target_value,
        grid_to_world=grid_to_world_from_affine(transform, pixel_offset=pixel_offset),
        skip_invalid_starts=skip_invalid_starts,
        retrace_interior_starts=retrace_interior_starts,
    )

    return polygon_set_to_geodataframe(polygons, crs=crs)


def polygonize_file(
    filename: str,
    target_value: Number,
    band: int = 1,
    pixel_offset: Literal["center", "ul", "ur", "ll", "lr"] | None = None,
    skip_invalid_starts: bool | None = None,
    retrace_interior_starts: bool | None = None,
) -> gpd.GeoDataFrame:
    """
    Polygonize the regions of a raster file band equal to a target value.

    The band is read with its nodata mask, and the transform and CRS of the file are used for the polygons.

    :param filename: Path to a raster file readable by rasterio.
    :param target_value: Value of the cells to outline.
    :param band: Band number to read, starting at 1.
    :param pixel_offset: Pixel anchor of the grid-to-world mapping. Defaults to geotrace.config["pixel_offset"].
    :param skip_invalid_starts: Whether to skip start cells without boundary. Defaults to
        geotrace.config["skip_invalid_starts"].
    :param retrace_interior_starts: Whether to retrace from the left of start cells with an interior window. Defaults
        to geotrace.config["retrace_interior_starts"].

    :returns: GeoDataFrame with one polygon per ring and its identifier in column "cat".
    """

    with rio.open(filename) as ds:
        data = ds.read(band, masked=True)
        transform = ds.transform
        crs = ds.crs

    return polygonize_array(
        data,
        transform=transform,
        target_value=target_value,
        crs=crs,
        pixel_offset=pixel_offset,
        skip_invalid_starts=skip_invalid_starts,
        retrace_interior_starts=retrace_interior_starts,
    )
