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
GeoTrace is a Python package for tracing the boundaries of raster regions into polygons.
"""

from geotrace._config import config  # noqa

from geotrace.grid import NODATA, ArrayGrid, GridSampler  # noqa isort:skip
from geotrace.georeferencing import CoordinateMapper, grid_to_world_from_affine  # noqa isort:skip
from geotrace.tracing import PolygonSet, extract_polygons  # noqa isort:skip
from geotrace.interface import polygonize_array, polygonize_file  # noqa isort:skip

try:
    from geotrace.version import version as __version__  # noqa
except ImportError:  # pragma: no cover
    raise ImportError(
        "geotrace is not properly installed. If you are "
        "running from the source directory, please instead "
        "create a new virtual environment (using conda or "
        "virtualenv) and then install it in-place by running: "
        "pip install -e ."
    )
