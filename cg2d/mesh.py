# cg2d/mesh.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from math import cos, hypot, isfinite, pi, sin
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from .bvh import Bvh
from .errors import (
    ConfigurationError,
    DegenerateInputError,
    DegenerateTriangleError,
    DuplicateVertexError,
    MeshFinalizedError,
    OutOfDomainError,
)
from .geom import Bbox, Circle, Pt, as_pt, barycentric, circumcircle, dist, is_finite, sub, triangle_area
from .hull import ConvexHull2D
from .predicates import Predicates, Side, default_predicates

logger = logging.getLogger(__name__)

SUPER_SCALE = 1000.0  # радіус області вставки у півдіагоналях bbox
SUPER_TILT = 0.3      # поворот напрямків супер-вершин від осей, рад

EdgeKey = Tuple[int, int]  # відсортована пара вершин ребра
Edge = Tuple[int, int]     # орієнтоване ребро (u, v)


def ekey(u: int, v: int) -> EdgeKey:
    return (u, v) if u < v else (v, u)


def is_super(v: int) -> bool:
    """Супер-вершини мають від'ємні індекси -1, -2, -3."""
    return v < 0


def _super_turn(s: int, t: int) -> int:
    """Знак (d_s x d_t): напрямки -1, -2, -3 ідуть проти годинникової стрілки."""
    return 1 if ((-t - 1) - (-s - 1)) % 3 == 1 else -1


@dataclass(frozen=True)
class Tri:
    """
    Трикутник сітки: v: індекси вершин проти годинникової стрілки.
    Ребро i протилежне вершині v[i]: 0:(b,c), 1:(c,a), 2:(a,b).
    """
    v: Tuple[int, int, int]

    def edge(self, i: int) -> Edge:
        a, b, c = self.v
        if i == 0: return (b, c)
        if i == 1: return (c, a)
        return (a, b)

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (self.edge(0), self.edge(1), self.edge(2))

    def touches_super(self) -> bool:
        return any(is_super(v) for v in self.v)


class TriMesh:
    """
    Мінімальна структура трикутної сітки:
      - points: реальні вершини (індекси 0..n-1), super_points: синтетичні (-1..-3)
      - tris: арена слотів (None: вільний слот), free: стек вільних слотів
      - edgemap: sorted(edge) -> [tri_id, ...]

    Супер-вершина -k лежить у нескінченності: origin + R * super_dirs[k-1], R -> inf.
    Предикати для трикутників із нею беруться як границя при R -> inf,
    тож жоден реальний трикутник не губиться, хоч би яким пласким він був.
    super_points: скінченні представники (межа області вставки, малювання).
    """
    def __init__(self, predicates: Optional[Predicates] = None):
        self.pred = predicates or default_predicates()
        self.points: List[Pt] = []
        self.super_points: List[Pt] = []
        self.super_dirs: List[Pt] = []
        self.origin = Pt(0.0, 0.0)
        self.tris: List[Optional[Tri]] = []
        self.free: List[int] = []
        self.edgemap: Dict[EdgeKey, List[int]] = {}

    # ---------- вершини ----------
    def point(self, i: int) -> Pt:
        return self.points[i] if i >= 0 else self.super_points[-i - 1]

    def add_point(self, p: Pt) -> int:
        self.points.append(p)
        return len(self.points) - 1

    def add_super_point(self, p: Pt, direction: Pt) -> int:
        self.super_points.append(p)
        self.super_dirs.append(direction)
        return -len(self.super_points)

    def tri_points(self, tid: int) -> Tuple[Pt, Pt, Pt]:
        a, b, c = self.tris[tid].v
        return (self.point(a), self.point(b), self.point(c))

    # ---------- символьні предикати ----------
    def _ref(self, v: Union[int, Pt]) -> Union[int, Pt]:
        if isinstance(v, Pt):
            return v
        return self.points[v] if v >= 0 else v

    def orient(self, u: Union[int, Pt], v: Union[int, Pt], w: Union[int, Pt]) -> int:
        """
        Орієнтація трійки, де кожен елемент: індекс вершини або реальна Pt.
        +1: CCW, -1: CW, 0: вироджена.
        """
        r = [self._ref(x) for x in (u, v, w)]
        sup = [isinstance(x, int) for x in r]
        n = sum(sup)
        if n == 0:
            return self.pred.orientation(*r)
        if n == 1:
            # циклічний зсув не змінює орієнтацію: супер-вершину ставимо останньою
            while not sup[2]:
                r, sup = r[1:] + r[:1], sup[1:] + sup[:1]
            a, b, s = r
            o = self.pred.orientation_dir(a, b, self.super_dirs[-s - 1])
            if o != 0:
                return o
            # ab паралельне напрямку: вирішує наступний член розкладу за R
            return self.pred.orientation(a, b, self.origin)
        while not sup[1] or not sup[2]:
            r, sup = r[1:] + r[:1], sup[1:] + sup[:1]
        return _super_turn(r[1], r[2])

    def in_circle(self, tid: int, p: Pt) -> Side:
        """Положення реальної p відносно описаного кола трикутника tid."""
        vs = list(self.tris[tid].v)
        n = sum(1 for v in vs if is_super(v))
        if n == 0:
            return self.pred.in_circumcircle(self.tri_points(tid), p)
        if n == 3:
            return Side.INSIDE
        if n == 1:
            # коло вироджується у півплощину зліва від ab
            while not is_super(vs[2]):
                vs = vs[1:] + vs[:1]
            a, b = self.points[vs[0]], self.points[vs[1]]
            o = self.pred.orientation(a, b, p)
            if o != 0:
                return Side(o)
            # на прямій ab всередині лише відкритий відрізок (хорда)
            if self.pred.dot_dir(a, p, sub(b, a)) > 0 and self.pred.dot_dir(b, p, sub(a, b)) > 0:
                return Side.INSIDE
            return Side.OUTSIDE
        # дві супер-вершини: півплощина від a проти напрямку третьої супер-вершини
        while is_super(vs[0]):
            vs = vs[1:] + vs[:1]
        k = ({-1, -2, -3} - set(vs[1:])).pop()
        return Side(-self.pred.dot_dir(self.points[vs[0]], p, self.super_dirs[-k - 1]))

    # ---------- трикутники ----------
    def add_tri(self, v0: int, v1: int, v2: int) -> int:
        # зорієнтуємо трикутник проти годинникової стрілки; вироджений не пускаємо в сітку
        ori = self.orient(v0, v1, v2)
        if ori == 0:
            raise DegenerateTriangleError(f"zero-area triangle ({v0}, {v1}, {v2})")
        t = Tri((v0, v1, v2)) if ori > 0 else Tri((v0, v2, v1))
        if self.free:
            tid = self.free.pop()
            self.tris[tid] = t
        else:
            tid = len(self.tris)
            self.tris.append(t)
        for u, v in t.edges():
            self.edgemap.setdefault(ekey(u, v), []).append(tid)
        return tid

    def remove_tri(self, tid: int) -> None:
        """Звільнити слот і прибрати ребра трикутника з edgemap."""
        t = self.tris[tid] if 0 <= tid < len(self.tris) else None
        if t is None:
            return
        for u, v in t.edges():
            key = ekey(u, v)
            lst = [tt for tt in self.edgemap.get(key, []) if tt != tid]
            if lst:
                self.edgemap[key] = lst
            else:
                self.edgemap.pop(key, None)
        self.tris[tid] = None
        self.free.append(tid)

    def alive(self, tid: int) -> bool:
        return 0 <= tid < len(self.tris) and self.tris[tid] is not None

    def tri_ids(self) -> List[int]:
        return [i for i, t in enumerate(self.tris) if t is not None]

    def __len__(self) -> int:
        return len(self.tris) - len(self.free)

    # ---------- корисні операції ----------
    def neighbor(self, tid: int, i: int) -> Optional[int]:
        """Сусід через ребро i (або None на межі)."""
        u, v = self.tris[tid].edge(i)
        for tt in self.edgemap.get(ekey(u, v), []):
            if tt != tid:
                return tt
        return None

    def neighbors(self, tid: int) -> List[Optional[int]]:
        return [self.neighbor(tid, i) for i in range(3)]

    def remove_tris_touching_super(self) -> List[int]:
        """Прибрати всі трикутники, що мають супер-вершину. Повертає їхні id."""
        gone = [tid for tid in self.tri_ids() if self.tris[tid].touches_super()]
        for tid in gone:
            self.remove_tri(tid)
        return gone

    # ---------- валідація сітки ----------
    def validate(self, delaunay: bool = True) -> dict:
        """
        Перевірка коректності сітки:
          - кожен живий трикутник строго CCW (ненульова площа);
          - кожне ребро має 1 або 2 інцидентні трикутники;
          - (опційно) жодна вершина не лежить строго всередині чужого описаного кола.
        Повертає словник з діагностикою (порожні списки = все ок).
        """
        alive = self.tri_ids()

        bad_orientation = [tid for tid in alive if self.orient(*self.tris[tid].v) <= 0]

        bad_edge_multiplicity: List[Tuple[EdgeKey, int]] = []
        for key, lst in self.edgemap.items():
            k = len([tt for tt in lst if self.alive(tt)])
            if k not in (1, 2):
                bad_edge_multiplicity.append((key, k))

        bad_delaunay: List[Tuple[int, int]] = []
        if delaunay:
            # супер-вершини в нескінченності не потрапляють у скінченні кола
            for tid in alive:
                t = self.tris[tid]
                for v, p in enumerate(self.points):
                    if v in t.v:
                        continue
                    if self.in_circle(tid, p) is Side.INSIDE:
                        bad_delaunay.append((tid, v))

        return {
            "triangles": len(alive),
            "bad_orientation": bad_orientation,               # id трикутників з неправильною орієнтацією
            "bad_edge_multiplicity": bad_edge_multiplicity,   # [(edge_key, count), ...]
            "bad_delaunay": bad_delaunay,                     # [(tri_id, vertex), ...]
        }


class DuplicatePolicy(Enum):
    """Що робити з точкою, яка точно збігається з наявною вершиною."""
    IGNORE = "ignore"   # тихий no-op, повертаємо індекс наявної вершини
    RAISE = "raise"     # DuplicateVertexError


@dataclass(frozen=True)
class Triangulation:
    """
    Результат finalize():
      points   : реальні вершини у порядку вставки;
      triangles: трійки індексів у points (CCW);
      hull     : орієнтовані (CCW) ребра межі.
    """
    points: Tuple[Pt, ...]
    triangles: Tuple[Tuple[int, int, int], ...]
    hull: Tuple[Edge, ...]

    def edges(self) -> List[EdgeKey]:
        return sorted({ekey(u, v) for t in self.triangles for u, v in Tri(t).edges()})

    def area(self) -> float:
        return sum(triangle_area(*(self.points[i] for i in t)) for t in self.triangles)

    def to_arrays(self):
        """(points[n, 2], triangles[m, 3]) як numpy-масиви."""
        import numpy as np
        pts = np.array([(p.x, p.y) for p in self.points], dtype=float).reshape(-1, 2)
        tris = np.array(self.triangles, dtype=np.int64).reshape(-1, 3)
        return pts, tris


BboxLike = Union[Bbox, Sequence[float]]


class Delaunay2D:
    """
    Інкрементальна 2D Делоне (Bowyer–Watson) з супер-трикутником.
    Точки можна додавати по одній: між двома вставками сітка завжди коректна,
    тож наступну точку можна обирати за поточною тріангуляцією.
    """
    def __init__(
        self,
        bbox: BboxLike,
        predicates: Optional[Predicates] = None,
        scale: float = SUPER_SCALE,
        duplicates: DuplicatePolicy = DuplicatePolicy.IGNORE,
    ):
        self.pred = predicates or default_predicates()
        self.duplicates = DuplicatePolicy(duplicates)
        self.mesh = TriMesh(self.pred)
        self.bbox = _as_bbox(bbox)
        self.super_verts: Tuple[int, int, int] = self._build_super_triangle(self.bbox, scale)
        self.finalized = False
        self._result: Optional[Triangulation] = None
        self._coords: Dict[Tuple[float, float], int] = {}
        self._circles: Dict[int, Tuple[Optional[Circle], Bbox]] = {}
        self._index = Bvh(self._domain)
        for tid in self.mesh.tri_ids():
            self._index_tri(tid)

    @classmethod
    def from_points(cls, points: Iterable, **kwargs) -> "Delaunay2D":
        """Супер-трикутник за bbox точок, далі вставка всіх точок у заданому порядку."""
        pts = [as_pt(p) for p in points]
        if not pts:
            raise ConfigurationError("cannot bootstrap from an empty point set")
        if not all(is_finite(p) for p in pts):
            raise ValueError("non-finite point coordinates")
        d = cls(Bbox.of(pts), **kwargs)
        d.insert_many(pts)
        return d

    # ---- супер-трикутник ----
    def _build_super_triangle(self, bbox: Bbox, scale: float) -> Tuple[int, int, int]:
        if not bbox.is_finite():
            raise ConfigurationError(f"non-finite bounds: {bbox}")
        if bbox.min_x > bbox.max_x or bbox.min_y > bbox.max_y:
            raise ConfigurationError(f"inverted bounds: {bbox}")
        if not (isfinite(scale) and scale > 2.0):
            # вписане коло рівностороннього трикутника = R/2, має покривати область
            raise ConfigurationError(f"scale must be a finite number > 2, got {scale!r}")

        c = bbox.center
        half = 0.5 * hypot(bbox.width, bbox.height) or 1.0
        R = scale * half

        # 3 вершини рівностороннього трикутника навколо області (CCW): скінченні
        # представники супер-вершин і межа області вставки
        dirs = []
        verts = []
        for k in range(3):
            ang = pi / 2 + SUPER_TILT + k * 2 * pi / 3
            d = Pt(cos(ang), sin(ang))
            p = Pt(c.x + R * d.x, c.y + R * d.y)
            if not is_finite(p):
                raise ConfigurationError(f"super-triangle overflows for bounds {bbox}")
            dirs.append(d)
            verts.append(p)
        if self.pred.orientation(*verts) <= 0:
            raise ConfigurationError(f"cannot build a super-triangle for bounds {bbox}")

        self.mesh.origin = c
        ia = self.mesh.add_super_point(verts[0], dirs[0])
        ib = self.mesh.add_super_point(verts[1], dirs[1])
        ic = self.mesh.add_super_point(verts[2], dirs[2])
        self.mesh.add_tri(ia, ib, ic)
        self._domain = Bbox.of(verts)
        return (ia, ib, ic)

    # ---- індекс описаних кіл ----
    def _index_tri(self, tid: int) -> None:
        # коло трикутника із супер-вершиною нескінченне: перевіряємо його завжди
        t = self.mesh.tris[tid]
        circle = None if t.touches_super() else circumcircle(*self.mesh.tri_points(tid))
        if circle is None or not (is_finite(circle.center) and isfinite(circle.radius)):
            circle, box = None, self._domain
        else:
            box = circle.bbox().enlarge(circle.radius * 1e-9 + 1e-12)
        self._circles[tid] = (circle, box)
        self._index.insert(tid, box)

    def _unindex_tri(self, tid: int) -> None:
        _, box = self._circles.pop(tid)
        self._index.remove(tid, box)

    # ---- вставка однієї точки ----
    def insert(self, point) -> int:
        """
        Один крок Bowyer–Watson. Повертає індекс вершини.
        Якщо крок неможливий, кидає виняток ще до будь-якої зміни сітки.
        """
        if self.finalized:
            raise MeshFinalizedError("cannot insert into a finalized triangulation")
        p = as_pt(point)
        if not is_finite(p):
            raise ValueError(f"non-finite point {tuple(p)}")

        existing = self._coords.get((p.x, p.y))
        if existing is not None:
            if self.duplicates is DuplicatePolicy.RAISE:
                raise DuplicateVertexError(p, existing)
            logger.debug("duplicate point %s ignored (vertex %d)", tuple(p), existing)
            return existing

        # 1-3) план: порожнина і її межа, поки без змін у сітці
        cavity, boundary = self._plan(p)

        # 4) застосувати: нова вершина, видалити порожнину, пришити віяло до p
        p_idx = self.mesh.add_point(p)
        self._coords[(p.x, p.y)] = p_idx
        for tid in cavity:
            self._unindex_tri(tid)
            self.mesh.remove_tri(tid)
        for u, v in boundary:
            self._index_tri(self.mesh.add_tri(u, v, p_idx))

        logger.debug("inserted vertex %d at %s: cavity %d, boundary %d",
                     p_idx, tuple(p), len(cavity), len(boundary))
        return p_idx

    def insert_many(self, points: Iterable) -> List[int]:
        return [self.insert(p) for p in points]

    def _containing(self, p: Pt, candidates: Iterable[int]) -> List[int]:
        out = []
        for tid in candidates:
            a, b, c = self.mesh.tris[tid].v
            if (self.mesh.orient(a, b, p) >= 0
                    and self.mesh.orient(b, c, p) >= 0
                    and self.mesh.orient(c, a, p) >= 0):
                out.append(tid)
        return out

    def _in_domain(self, p: Pt) -> bool:
        """p строго всередині області вставки (скінченного трикутника-представника)."""
        a, b, c = (self.mesh.point(v) for v in self.super_verts)
        return (self.pred.orientation(a, b, p) > 0
                and self.pred.orientation(b, c, p) > 0
                and self.pred.orientation(c, a, p) > 0)

    def _plan(self, p: Pt) -> Tuple[Set[int], List[Edge]]:
        if not self._in_domain(p):
            raise OutOfDomainError(f"point {tuple(p)} lies outside the super-triangle; "
                                   f"enlarge the bounds or the scale")
        candidates = list(self._index.enclosing(p))

        # трикутник(и), що містять p (на ребрі обидва сусіди) погані завжди
        seeds = self._containing(p, candidates)
        if not seeds:
            seeds = self._containing(p, self.mesh.tri_ids())
        if not seeds:
            raise DegenerateTriangleError(f"no triangle contains {tuple(p)}")

        bad = set(seeds)
        for tid in candidates:
            if tid not in bad and self.mesh.in_circle(tid, p) is Side.INSIDE:
                bad.add(tid)

        # порожнина: зв'язна компонента поганих трикутників навколо p
        cavity: Set[int] = set()
        stack = list(seeds)
        while stack:
            cur = stack.pop()
            if cur in cavity:
                continue
            cavity.add(cur)
            for nb in self.mesh.neighbors(cur):
                if nb is not None and nb in bad and nb not in cavity:
                    stack.append(nb)
        if len(cavity) != len(bad):
            logger.debug("dropped %d disconnected bad triangles at %s", len(bad) - len(cavity), tuple(p))

        # межа порожнини: ребра, з іншого боку яких трикутник не з порожнини
        boundary: List[Edge] = []
        for tid in cavity:
            for i in range(3):
                nb = self.mesh.neighbor(tid, i)
                if nb is None or nb not in cavity:
                    boundary.append(self.mesh.tris[tid].edge(i))

        # кожен новий трикутник (u, v, p) має бути строго CCW
        on_boundary = {v for e in boundary for v in e}
        for u, v in boundary:
            if self.mesh.orient(u, v, p) <= 0:
                if self.pred.collinear(self.mesh.points + [p]):
                    raise DegenerateInputError(f"all points are collinear with {tuple(p)}")
                raise DegenerateTriangleError(
                    f"inserting {tuple(p)} would create a degenerate triangle on edge ({u}, {v})")
        for tid in cavity:
            for v in self.mesh.tris[tid].v:
                if v not in on_boundary:
                    raise DegenerateTriangleError(
                        f"point {tuple(p)} is numerically coincident with vertex {v}")
        return cavity, boundary

    # ---- фіналізація ----
    def finalize(self) -> Triangulation:
        """Прибрати трикутники із супер-вершинами. Повторний виклик повертає той самий результат."""
        if self._result is not None:
            return self._result
        if not self.triangle_ids():
            raise DegenerateInputError(
                f"no triangle over {self.vertex_count} point(s): need 3 non-collinear points")

        for tid in self.mesh.remove_tris_touching_super():
            self._unindex_tri(tid)
        self.finalized = True

        result = Triangulation(
            points=tuple(self.mesh.points),
            triangles=tuple(self.triangles()),
            hull=tuple(self.hull_edges()),
        )
        hull_area = ConvexHull2D(self.mesh.points, self.pred).area()
        if abs(result.area() - hull_area) > 1e-9 * max(hull_area, 1.0):
            logger.warning("triangulation covers %.12g of convex hull area %.12g",
                           result.area(), hull_area)
        logger.info("finalized: %d vertices, %d triangles, %d hull edges",
                    len(result.points), len(result.triangles), len(result.hull))
        self._result = result
        return result

    # ---- запити (між вставками і після finalize) ----
    @property
    def vertex_count(self) -> int:
        return len(self.mesh.points)

    @property
    def points(self) -> List[Pt]:
        return self.mesh.points[:]

    def point(self, i: int) -> Pt:
        return self.mesh.point(i)

    def triangle_ids(self, include_super: bool = False) -> List[int]:
        ids = self.mesh.tri_ids()
        if include_super:
            return ids
        return [tid for tid in ids if not self.mesh.tris[tid].touches_super()]

    def triangle(self, tid: int) -> Tuple[int, int, int]:
        if not self.mesh.alive(tid):
            raise KeyError(tid)
        return self.mesh.tris[tid].v

    def triangles(self, include_super: bool = False) -> List[Tuple[int, int, int]]:
        return [self.mesh.tris[tid].v for tid in self.triangle_ids(include_super)]

    def triangle_points(self, include_super: bool = False) -> List[Tuple[Pt, Pt, Pt]]:
        return [self.mesh.tri_points(tid) for tid in self.triangle_ids(include_super)]

    def circumcircle(self, tid: int) -> Circle:
        """Центр і радіус описаного кола трикутника tid."""
        self.triangle(tid)
        circle = self._circles[tid][0]
        if circle is None:
            raise DegenerateTriangleError(f"triangle {tid} has no finite circumcircle")
        return circle

    def neighbors(self, tid: int) -> List[Optional[int]]:
        """Сусіди через ребра 0, 1, 2 (None на межі сітки)."""
        self.triangle(tid)
        return self.mesh.neighbors(tid)

    def edges(self, include_super: bool = False) -> List[EdgeKey]:
        out: Set[EdgeKey] = set()
        for tid in self.triangle_ids(include_super):
            for u, v in self.mesh.tris[tid].edges():
                out.add(ekey(u, v))
        return sorted(out)

    def edge_length(self, u: int, v: int) -> float:
        return dist(self.mesh.point(u), self.mesh.point(v))

    def hull_edges(self) -> List[Edge]:
        """Орієнтовані (CCW) ребра межі реальної частини сітки."""
        out: List[Edge] = []
        for tid in self.triangle_ids():
            for i in range(3):
                nb = self.mesh.neighbor(tid, i)
                if nb is None or self.mesh.tris[nb].touches_super():
                    out.append(self.mesh.tris[tid].edge(i))
        return out

    def locate(self, point) -> Optional[int]:
        """Реальний трикутник, що містить точку (включно з межею), або None."""
        p = as_pt(point)
        for tid in self._containing(p, self._index.enclosing(p)):
            if not self.mesh.tris[tid].touches_super():
                return tid
        return None

    def interpolate(self, point, values: Sequence[float]) -> float:
        """Барицентрична інтерполяція значень values[i] вершин i у точці."""
        p = as_pt(point)
        tid = self.locate(p)
        if tid is None:
            raise ValueError(f"point {tuple(p)} is outside the triangulation")
        a, b, c = self.mesh.tris[tid].v
        w = barycentric(self.mesh.point(a), self.mesh.point(b), self.mesh.point(c), p)
        if w is None:
            raise DegenerateTriangleError(f"triangle {tid} is degenerate")
        return w[0] * values[a] + w[1] * values[b] + w[2] * values[c]

    def area(self) -> float:
        return sum(triangle_area(*pts) for pts in self.triangle_points())

    def validate(self, delaunay: bool = True) -> dict:
        return self.mesh.validate(delaunay=delaunay)


# ---------- утиліти ----------
def _as_bbox(bbox: BboxLike) -> Bbox:
    if isinstance(bbox, Bbox):
        return bbox
    try:
        min_x, min_y, max_x, max_y = (float(v) for v in bbox)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"bounds must be (min_x, min_y, max_x, max_y), got {bbox!r}") from e
    return Bbox(min_x, min_y, max_x, max_y)
