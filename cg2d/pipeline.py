from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .errors import DegenerateInputError
from .geom import Bbox, Circle, Pt, unique_points
from .mesh import Delaunay2D, Edge, EdgeKey, Triangulation
from .predicates import orient2d

logger = logging.getLogger(__name__)


def triangulate(
    points: Iterable[Tuple[float, float]],
    backend: str = "internal",
    **kwargs,
) -> Triangulation:
    """
    Повний пайплайн:
      - прибирає дублікати точок;
      - будує 2D Делоне: нашим Delaunay2D ("internal") або SciPy/Qhull ("scipy");
      - повертає Triangulation (points, triangles, hull).

    kwargs передаються у Delaunay2D (predicates, scale, duplicates).
    """
    pts: List[Pt] = unique_points(points)

    if backend.lower() == "internal":
        return Delaunay2D.from_points(pts, **kwargs).finalize()

    if backend.lower() == "scipy":
        try:
            import numpy as np
            from scipy.spatial import Delaunay, QhullError
        except ImportError as e:
            raise RuntimeError(
                "backend='scipy', але SciPy не встановлено. "
                "Встанови scipy або використай backend='internal'."
            ) from e

        arr = np.array([(p.x, p.y) for p in pts], dtype=float).reshape(-1, 2)
        try:
            dela = Delaunay(arr)
        except (QhullError, ValueError) as e:
            raise DegenerateInputError(f"Qhull cannot triangulate {len(pts)} point(s)") from e

        tris: List[Tuple[int, int, int]] = []
        hull: List[Edge] = []
        for simplex, nbr in zip(dela.simplices, dela.neighbors):
            a, b, c = (int(i) for i in simplex)
            na, nb, nc = (int(i) for i in nbr)
            # Qhull не гарантує орієнтацію: приводимо до CCW
            if orient2d(pts[a], pts[b], pts[c]) < 0:
                b, c = c, b
                nb, nc = nc, nb
            tris.append((a, b, c))
            # сусід i протилежний вершині i; -1: ребро оболонки
            for (u, v), n in (((b, c), na), ((c, a), nb), ((a, b), nc)):
                if n == -1:
                    hull.append((u, v))
        return Triangulation(points=tuple(pts), triangles=tuple(tris), hull=tuple(hull))

    raise ValueError(f"Невідомий backend: {backend}")


class MeshView:
    """
    Read-only доступ до поточної сітки для адаптивного драйвера.
    Вставляти точки через view неможливо: лише повернути наступну точку з драйвера.
    """
    __slots__ = ("_d",)

    def __init__(self, d: Delaunay2D):
        self._d = d

    @property
    def vertex_count(self) -> int:
        return self._d.vertex_count

    @property
    def points(self) -> List[Pt]:
        return self._d.points

    @property
    def bbox(self) -> Bbox:
        return self._d.bbox

    def point(self, i: int) -> Pt:
        return self._d.point(i)

    def triangle_ids(self) -> List[int]:
        return self._d.triangle_ids()

    def triangle(self, tid: int) -> Tuple[int, int, int]:
        return self._d.triangle(tid)

    def triangles(self) -> List[Tuple[int, int, int]]:
        return self._d.triangles()

    def triangle_points(self) -> List[Tuple[Pt, Pt, Pt]]:
        return self._d.triangle_points()

    def circumcircle(self, tid: int) -> Circle:
        return self._d.circumcircle(tid)

    def neighbors(self, tid: int) -> List[Optional[int]]:
        return self._d.neighbors(tid)

    def edges(self) -> List[EdgeKey]:
        return self._d.edges()

    def edge_length(self, u: int, v: int) -> float:
        return self._d.edge_length(u, v)

    def hull_edges(self) -> List[Edge]:
        return self._d.hull_edges()

    def locate(self, point) -> Optional[int]:
        return self._d.locate(point)

    def interpolate(self, point, values: Sequence[float]) -> float:
        return self._d.interpolate(point, values)

    def area(self) -> float:
        return self._d.area()


Driver = Callable[[MeshView], Optional[Tuple[float, float]]]


def refine(d: Delaunay2D, driver: Driver, max_steps: Optional[int] = None) -> List[int]:
    """
    Адаптивна вставка: driver(view) повертає наступну точку або None (стоп).
    Між кроками view бачить лише повністю узгоджену сітку.
    Повертає індекси вершин, отримані від insert (дублікати: індекс наявної вершини).
    """
    if max_steps is not None and max_steps < 0:
        raise ValueError("max_steps must be non-negative")
    view = MeshView(d)
    inserted: List[int] = []
    while max_steps is None or len(inserted) < max_steps:
        p = driver(view)
        if p is None:
            break
        inserted.append(d.insert(p))
    logger.debug("refine: %d step(s), %d vertices, %d triangles",
                 len(inserted), d.vertex_count, len(d.triangle_ids()))
    return inserted
