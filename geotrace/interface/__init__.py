from geotrace.interface.vectorization import (  # noqa
    polygon_set_to_geodataframe,
    polygonize_array,
    polygonize_file,
)

__all__ = ["polygon_set_to_geodataframe", "polygonize_array", "polygonize_file"]
