"""
This package contains the geometric primitives and the relations between them.

All geometries are immutable values. Invalid configurations (coincident endpoints,
collinear triangle vertices, non-coplanar polygon vertices) are rejected at
construction with a :class:`~geomkernel.DegenerateGeometryError`, while queries that
find no relation return the ``none`` variant of a result instead of raising.

Note:
    Most functions and methods take a parameter ``decimal_precision``, the number of
    decimal digits kept before a difference is compared to zero, see
    :mod:`~geomkernel.utils.tolerance`. The default of three decimals is used for
    positions and containment, while nine decimals are used internally for unit length
    and direction checks. A coarser precision makes the decisions more forgiving; the
    general recommendation is to use the same precision throughout a chain of
    operations.

The content of this package is organized as follows:

    :mod:`~geomkernel.geometry.vector`, :mod:`~geomkernel.geometry.point` and
    :mod:`~geomkernel.geometry.angle` contain the primitive values, with named
    arithmetic instead of operators.

    :mod:`~geomkernel.geometry.classifiers` contains the ``Location`` and
    ``Orientation`` enumerations used by all side-of-line decisions.

    :mod:`~geomkernel.geometry.linear`, :mod:`~geomkernel.geometry.lines_2d` and
    :mod:`~geomkernel.geometry.lines_3d` contain lines, rays and segments.

    :mod:`~geomkernel.geometry.plane` contains the plane and the projection between 3d
    and the 2d basis of a plane, on which all planar 3d computations rely.

    :mod:`~geomkernel.geometry.shapes_2d` and :mod:`~geomkernel.geometry.shapes_3d`
    contain triangles, polygons and polylines.

    :mod:`~geomkernel.geometry.point_lists` and :mod:`~geomkernel.geometry.hulls`
    contain algorithms on point lists: duplicate and collinear point removal, angular
    sorting, convex and concave hulls and best-fit planes.

    :mod:`~geomkernel.geometry.collections` contains sets of points and segments, the
    results of relations with several disjoint pieces.

    :mod:`~geomkernel.geometry.relations` dispatches the pairwise relations to the
    implementations in :mod:`~geomkernel.geometry.relations_2d` and
    :mod:`~geomkernel.geometry.relations_3d`.

    :mod:`~geomkernel.geometry.projections` projects 3d geometries onto the coordinate
    planes.

"""
