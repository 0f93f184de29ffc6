from __future__ import annotations
from dataclasses import dataclass
from math import isfinite, sqrt
from typing import Iterable, Optional, Sequence, Tuple

EPS = 1e-12  # відносний епс для предикатів

@dataclass(frozen=True)
class Pt:
    x: float
    y: float
    def __iter__(self):
        yield self.x; yield self.y

def as_pt(p) -> Pt:
    """Pt або будь-яка пара (x, y) -> Pt."""
    if isinstance(p, Pt):
        return p
    x, y = p
    return Pt(float(x), float(y))

def sub(a: Pt, b: Pt) -> Pt:
    return Pt(a.x - b.x, a.y - b.y)

def dot(a: Pt, b: Pt) -> float:
    return a.x*b.x + a.y*b.y

def cross(a: Pt, b: Pt) -> float:
    return a.x*b.y - a.y*b.x

def norm(a: Pt) -> float:
    return sqrt(dot(a, a))

def dist(a: Pt, b: Pt) -> float:
    return norm(sub(a, b))

def is_finite(p: Pt) -> bool:
    return isfinite(p.x) and isfinite(p.y)

def centroid(points: Iterable[Pt]) -> Pt:
    xs = ys = 0.0
    n = 0
    for p in points:
        xs += p.x; ys += p.y; n += 1
    if n == 0:
        raise ValueError("empty set")
    inv = 1.0 / n
    return Pt(xs*inv, ys*inv)

def triangle_area(a: Pt, b: Pt, c: Pt) -> float:
    """Знакова площа (додатна для CCW)."""
    return 0.5 * cross(sub(b, a), sub(c, a))

def polygon_area(poly: Sequence[Pt]) -> float:
    """Знакова площа багатокутника (формула шнурка)."""
    s = 0.0
    n = len(poly)
    for i in range(n):
        p, q = poly[i], poly[(i + 1) % n]
        s += p.x*q.y - q.x*p.y
    return 0.5 * s

def unique_points(points: Iterable[Tuple[float, float]], scale: float = 1e9) -> list[Pt]:
    """
    Груба дедуплікація з квантуванням (стабільніше для float).
    `scale=1e9` ≈ 1e-9 на координату.
    """
    seen: dict[Tuple[int, int], Pt] = {}
    for x, y in points:
        key = (int(round(x*scale)), int(round(y*scale)))
        if key not in seen:
            seen[key] = Pt(x, y)
    return list(seen.values())


@dataclass(frozen=True)
class Bbox:
    """Осьовий прямокутник [min_x, max_x] x [min_y, max_y]."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def of(cls, points: Iterable[Pt]) -> "Bbox":
        pts = [as_pt(p) for p in points]
        if not pts:
            raise ValueError("empty set")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def center(self) -> Pt:
        return Pt((self.min_x + self.max_x) * 0.5, (self.min_y + self.max_y) * 0.5)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def area(self) -> float:
        return self.width * self.height

    def is_finite(self) -> bool:
        return all(isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y))

    def contains(self, p: Pt) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def expand(self, p: Pt) -> "Bbox":
        return Bbox(min(self.min_x, p.x), min(self.min_y, p.y),
                    max(self.max_x, p.x), max(self.max_y, p.y))

    def enlarge(self, amount: float) -> "Bbox":
        return Bbox(self.min_x - amount, self.min_y - amount,
                    self.max_x + amount, self.max_y + amount)

    def intersects(self, other: "Bbox") -> bool:
        return (max(self.min_x, other.min_x) <= min(self.max_x, other.max_x)
                and max(self.min_y, other.min_y) <= min(self.max_y, other.max_y))

    def covers(self, other: "Bbox") -> bool:
        """other повністю всередині self."""
        return (self.min_x <= other.min_x and self.min_y <= other.min_y
                and self.max_x >= other.max_x and self.max_y >= other.max_y)

    def split(self, pivot: Pt) -> Tuple["Bbox", "Bbox", "Bbox", "Bbox"]:
        """Чотири квадранти відносно pivot (pivot має лежати всередині)."""
        return (
            Bbox(self.min_x, self.min_y, pivot.x, pivot.y),
            Bbox(pivot.x, self.min_y, self.max_x, pivot.y),
            Bbox(self.min_x, pivot.y, pivot.x, self.max_y),
            Bbox(pivot.x, pivot.y, self.max_x, self.max_y),
        )


@dataclass(frozen=True)
class Circle:
    center: Pt
    radius: float

    def bbox(self) -> Bbox:
        c, r = self.center, self.radius
        return Bbox(c.x - r, c.y - r, c.x + r, c.y + r)


def circumcircle(a: Pt, b: Pt, c: Pt) -> Optional[Circle]:
    """
    Описане коло трикутника (декартові координати відносно a).
    Для колінеарних точок повертає None.
    """
    bx, by = b.x - a.x, b.y - a.y
    cx, cy = c.x - a.x, c.y - a.y
    d = 2.0 * (bx*cy - by*cx)
    if d == 0.0:
        return None
    b2 = bx*bx + by*by
    c2 = cx*cx + cy*cy
    ux = (cy*b2 - by*c2) / d
    uy = (bx*c2 - cx*b2) / d
    return Circle(Pt(a.x + ux, a.y + uy), sqrt(ux*ux + uy*uy))


def barycentric(a: Pt, b: Pt, c: Pt, p: Pt) -> Optional[Tuple[float, float, float]]:
    """
    Барицентричні координати p відносно (a, b, c).
    None, якщо трикутник вироджений.
    """
    d = (b.y - c.y)*(a.x - c.x) + (c.x - b.x)*(a.y - c.y)
    if d == 0.0:
        return None
    w0 = ((b.y - c.y)*(p.x - c.x) + (c.x - b.x)*(p.y - c.y)) / d
    w1 = ((c.y - a.y)*(p.x - c.x) + (a.x - c.x)*(p.y - c.y)) / d
    return (w0, w1, 1.0 - w0 - w1)
