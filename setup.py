from os import path
from typing import Optional

from setuptools import setup

FULLVERSION = "0.1.0"
VERSION = FULLVERSION

write_version = True


def write_version_py(filename: Optional[str] = None) -> None:
    cnt = """\
version = '%s'
short_version = '%s'
"""
    if filename is None:
        filename = path.join(path.dirname(__file__), "geotrace", "version.py")

    a = open(filename, "w")
    try:
        a.write(cnt % (FULLVERSION, VERSION))
    finally:
        a.close()


if write_version:
    write_version_py()


with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="geotrace",
    version=FULLVERSION,
    description="Boundary tracing of raster regions into polygons",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="The GeoTrace Team",
    license="Apache-2.0",
    packages=["geotrace", "geotrace.tracing", "geotrace.interface"],
    package_data={"geotrace": ["config.ini"]},
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "affine < 3",
        "rasterio",
        "geopandas >= 0.10.0",
        "shapely >= 2.0",
        "pyproj",
    ],
    extras_require={"test": ["pytest"]},
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: Apache Software License",
    ],
)
