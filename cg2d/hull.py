from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .geom import Pt, polygon_area
from .predicates import Predicates, default_predicates

Edge = Tuple[int, int]          # орієнтоване ребро (u, v)


class ConvexHull2D:
    """
    Опукла оболонка на площині (монотонний ланцюг Ендрю).

    Вхід: список Pt (мінімум 3, не всі колінеарні).
    Вихід: vertices(): індекси вершин оболонки проти годинникової стрілки,
    точки всередині ребер оболонки відкидаються.
    """

    def __init__(self, points: Sequence[Pt], predicates: Optional[Predicates] = None):
        self.P: List[Pt] = list(points)
        self.pred = predicates or default_predicates()
        if len(self.P) < 3:
            raise ValueError("Need at least 3 points")
        self._verts = self._build()
        if len(self._verts) < 3:
            raise ValueError("All points collinear: 2D hull is impossible")

    # ---------------- Публічний API ----------------
    def vertices(self) -> List[int]:
        return self._verts[:]

    def edges(self) -> List[Edge]:
        vs = self._verts
        return [(vs[i], vs[(i + 1) % len(vs)]) for i in range(len(vs))]

    def area(self) -> float:
        return polygon_area([self.P[i] for i in self._verts])

    def contains(self, p: Pt) -> bool:
        """p всередині або на межі оболонки."""
        return all(self.pred.orientation(self.P[u], self.P[v], p) >= 0 for u, v in self.edges())

    # ---------------- Внутрішні методи ----------------
    def _build(self) -> List[int]:
        order = sorted(range(len(self.P)), key=lambda i: (self.P[i].x, self.P[i].y))
        # дублікати координат дають ту саму вершину: лишаємо першу
        uniq: List[int] = []
        for i in order:
            if not uniq or self.P[uniq[-1]] != self.P[i]:
                uniq.append(i)
        if len(uniq) < 3:
            return uniq

        def chain(idx: List[int]) -> List[int]:
            out: List[int] = []
            for i in idx:
                while len(out) >= 2 and self.pred.orientation(self.P[out[-2]], self.P[out[-1]], self.P[i]) <= 0:
                    out.pop()
                out.append(i)
            return out

        lower = chain(uniq)
        upper = chain(list(reversed(uniq)))
        return lower[:-1] + upper[:-1]
