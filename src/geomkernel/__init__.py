"""   GeomKernel.

Root directory for the GeomKernel package. Contains the following sub-packages:

geometry: Immutable 2d and 3d primitives (points, vectors, lines, rays, segments,
    planes, triangles, polygons, polylines), the pairwise relation dispatcher and the
    hull and sorting algorithms built on top.

utils: Tolerance kernel, constants, type aliases, timing logger and error classes.


isort:skip_file

"""

import os
from pathlib import Path
import configparser


__version__ = "0.3.0"

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("geomkernel.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = {name: dict(section) for name, section in cfg.items()}
except (OSError, configparser.Error):
    # the assumption is that no configurations are given
    config = {}

# ------------------------------------
# Simplified namespaces. The rule of thumb is that classes and modules that a
# user can be exposed to should have a shortcut here.

from geomkernel.utils.common_constants import *
from geomkernel.utils.geomkernel_types import *
from geomkernel.utils.errors import DegenerateGeometryError
from geomkernel.utils.logging import time_logger
from geomkernel.utils import tolerance, wkt

# Primitive values
from geomkernel.geometry.classifiers import Location, Orientation
from geomkernel.geometry.angle import Angle
from geomkernel.geometry.results import ResultKind, IntersectionResult, ProjectionResult
from geomkernel.geometry.vector import Vector2D, UnitVector2D, Vector3D, UnitVector3D
from geomkernel.geometry.point import Point2D, Point3D
from geomkernel.geometry.base import Geometry2D, Geometry3D
from geomkernel.geometry import linear

# Linear and planar primitives
from geomkernel.geometry.lines_2d import Line2D, Ray2D, LineSegment2D
from geomkernel.geometry.lines_3d import Line3D, Ray3D, LineSegment3D
from geomkernel.geometry.plane import Plane

# Collections and point list algorithms
from geomkernel.geometry import point_lists
from geomkernel.geometry.collections import (
    PointSet2D,
    PointSet3D,
    LineSegmentSet2D,
    LineSegmentSet3D,
    MultiPolygon2D,
)

# Area primitives and hulls
from geomkernel.geometry.shapes_2d import Triangle2D, Polygon2D, Polyline2D
from geomkernel.geometry.shapes_3d import Triangle3D, Polygon3D, Polyline3D
from geomkernel.geometry import hulls

# Pairwise relations. The implementation modules register themselves on import.
from geomkernel.geometry import relations
from geomkernel.geometry import relations_2d, relations_3d
from geomkernel.geometry import projections
