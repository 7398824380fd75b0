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

"""Exceptions raised by GeoTrace on invalid input or internal failures."""

from __future__ import annotations


class InvalidStartError(ValueError):
    """Raised when tracing is requested outside the grid or where no boundary passes."""


class IllegalCodeError(RuntimeError):
    """Raised when a neighbor code that cannot lie on a boundary is met during tracing."""


class InvalidGridError(ValueError):
    """Raised when grid-type input is not recognized."""


class InvalidResolutionError(ValueError):
    """Raised when resolution-type input is not recognized."""


class InvalidTransformError(ValueError):
    """Raised when transform-type input is not recognized or not supported."""


class InvalidCRSError(ValueError):
    """Raised when CRS-type input is not recognized."""
