from geotrace.tracing.codes import NeighborCodeEvaluator  # noqa
from geotrace.tracing.scan import PolygonSet, TracedRing, extract_polygons  # noqa
from geotrace.tracing.tracer import BoundaryTracer, Direction, select_direction  # noqa
from geotrace.tracing.visited import VisitedTracker  # noqa

__all__ = [
    "BoundaryTracer",
    "Direction",
    "NeighborCodeEvaluator",
    "PolygonSet",
    "TracedRing",
    "VisitedTracker",
    "extract_polygons",
    "select_direction",
]
