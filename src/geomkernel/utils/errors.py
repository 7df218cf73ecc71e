"""Error classes of GeomKernel."""


class DegenerateGeometryError(ValueError):
    """Custom exception class raised when a geometry is constructed from a degenerate
    or contradictory configuration.

    Such configurations include for example:

    - normalizing a vector of (nearly) zero length,
    - a line or segment defined by two coincident points,
    - a triangle with collinear or coincident vertices,
    - a polygon or polyline with too few vertices once collinear points are removed,
    - a 3d polygon whose vertices are not coplanar,
    - a plane defined by collinear points or by two lines that do not intersect.

    The error is raised at construction time, so no partially valid object is ever
    returned. Query-time absence of a relation (e.g. two parallel lines) is not an
    error, see :class:`~geomkernel.geometry.results.IntersectionResult`.

    """
