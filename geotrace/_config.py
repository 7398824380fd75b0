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

"""Setup of runtime configuration of GeoTrace."""

from __future__ import annotations

import configparser
import os
from typing import Any

# The setup is inspired by that of Matplotlib and Geowombat
# https://github.com/matplotlib/matplotlib/blob/main/lib/matplotlib/rcsetup.py
# https://github.com/jgrss/geowombat/blob/main/src/geowombat/config.py

_config_ini_file = os.path.abspath(os.path.join(os.path.dirname(__file__), "config.ini"))

# Validators: to check the format of user inputs


def validate_bool(b: bool | str | int) -> bool:
    """Convert b to ``bool`` or raise."""
    if isinstance(b, str):
        b = b.lower()
    if b in ("t", "y", "yes", "on", "true", "1", 1, True):
        return True
    elif b in ("f", "n", "no", "off", "false", "0", 0, False):
        return False
    else:
        raise ValueError(f"Cannot convert {b!r} to bool")


# Fraction of a pixel added to the column and row index for each pixel anchor
_pixel_anchors = {
    "center": (0.5, 0.5),
    "ul": (0.0, 0.0),
    "ur": (1.0, 0.0),
    "ll": (0.0, 1.0),
    "lr": (1.0, 1.0),
}


def validate_pixel_offset(s: str) -> str:
    """Check s is a pixel anchor understood by rasterio, or raise."""
    if not isinstance(s, str) or s.lower() not in _pixel_anchors:
        raise ValueError(f"Pixel offset must be one of {', '.join(_pixel_anchors)}, got {s!r}")
    return s.lower()


# Map the parameter names with a validating function to check user input
_validators = {
    "skip_invalid_starts": validate_bool,
    "retrace_interior_starts": validate_bool,
    "pixel_offset": validate_pixel_offset,
}


class GeoTraceConfigDict(dict):  # type: ignore
    """Class for a GeoTrace config dictionary"""

    def __setitem__(self, k: str, v: Any) -> None:
        """We override setitem to check user input."""

        validate_func = _validators[k]
        new_value = validate_func(v)
        super().__setitem__(k, new_value)

    def _set_defaults(self, path_init_file: str) -> None:
        """Read the default values of all parameters from an INI file."""

        config_parser = configparser.ConfigParser()
        config_parser.read(path_init_file)

        for section in config_parser.sections():
            for k, v in config_parser[section].items():
                # Select validator function and update dictionary
                validate_func = _validators[k]
                self.__setitem__(k, validate_func(v))


# Generate default config dictionary
config = GeoTraceConfigDict()
config._set_defaults(path_init_file=_config_ini_file)
