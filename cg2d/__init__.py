"""
cg2d: мінімальна бібліотека для 2D комп'ютерної геометрії.
Зараз: інкрементальна Делоне (Bowyer–Watson) з адаптивною вставкою точок.
"""

__version__ = "0.1.0"

from cg2d.geom import Pt, EPS, Bbox, Circle, centroid, circumcircle, unique_points
from cg2d.predicates import (
    orient2d, incircle, Side, Predicates, FloatPredicates, ExactPredicates,
)
from cg2d.errors import (
    DelaunayError, DegenerateInputError, DuplicateVertexError, DegenerateTriangleError,
    ConfigurationError, OutOfDomainError, MeshFinalizedError,
)
from cg2d.hull import ConvexHull2D
from cg2d.mesh import Delaunay2D, DuplicatePolicy, TriMesh, Triangulation
from cg2d.pipeline import MeshView, refine, triangulate

__all__ = [
    "Pt", "EPS", "Bbox", "Circle", "centroid", "circumcircle", "unique_points",
    "orient2d", "incircle", "Side", "Predicates", "FloatPredicates", "ExactPredicates",
    "DelaunayError", "DegenerateInputError", "DuplicateVertexError", "DegenerateTriangleError",
    "ConfigurationError", "OutOfDomainError", "MeshFinalizedError",
    "ConvexHull2D", "Delaunay2D", "DuplicatePolicy", "TriMesh", "Triangulation",
    "MeshView", "refine", "triangulate", "__version__",
]
