# cg2d/predicates.py
from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from fractions import Fraction
from typing import Iterable, List, Sequence, Tuple

from .geom import Pt, EPS


def orient2d(a: Pt, b: Pt, c: Pt) -> float:
    """Подвоєна знакова площа (a, b, c): >0: CCW, <0: CW, 0: колінеарні."""
    return (b.x - a.x)*(c.y - a.y) - (b.y - a.y)*(c.x - a.x)

def incircle(a: Pt, b: Pt, c: Pt, d: Pt) -> float:
    """
    Знак тесту «чи лежить d всередині кола через a, b, c?».
    Повертає:
      >0  якщо d всередині circumcircle(a,b,c),
      <0  якщо зовні,
       0  якщо на колі.
    Знак множимо на sign(orient2d(a,b,c)), тож порядок обходу не важливий.
    """
    val = _incircle_raw(a, b, c, d)
    ori = orient2d(a, b, c)
    if ori > 0:
        return val
    elif ori < 0:
        return -val
    return 0.0

def _incircle_raw(a: Pt, b: Pt, c: Pt, d: Pt) -> float:
    adx, ady = a.x - d.x, a.y - d.y
    bdx, bdy = b.x - d.x, b.y - d.y
    cdx, cdy = c.x - d.x, c.y - d.y
    alift = adx*adx + ady*ady
    blift = bdx*bdx + bdy*bdy
    clift = cdx*cdx + cdy*cdy
    return (alift*(bdx*cdy - cdx*bdy)
            + blift*(cdx*ady - adx*cdy)
            + clift*(adx*bdy - bdx*ady))

def _incircle_permanent(a: Pt, b: Pt, c: Pt, d: Pt) -> float:
    adx, ady = a.x - d.x, a.y - d.y
    bdx, bdy = b.x - d.x, b.y - d.y
    cdx, cdy = c.x - d.x, c.y - d.y
    return ((adx*adx + ady*ady)*(abs(bdx*cdy) + abs(cdx*bdy))
            + (bdx*bdx + bdy*bdy)*(abs(cdx*ady) + abs(adx*cdy))
            + (cdx*cdx + cdy*cdy)*(abs(adx*bdy) + abs(bdx*ady)))

# ---------- інструмент для детермінанта ----------
def _det(m: List[list]) -> Fraction:
    """Детермінант через Гауса з вибором опорного елемента (точний для Fraction)."""
    n = len(m)
    a = [row[:] for row in m]
    det = Fraction(1)
    for i in range(n):
        # півод
        piv = i
        maxv = abs(a[i][i])
        for r in range(i+1, n):
            v = abs(a[r][i])
            if v > maxv:
                maxv = v; piv = r
        if maxv == 0:
            return Fraction(0)
        if piv != i:
            a[i], a[piv] = a[piv], a[i]
            det = -det
        det *= a[i][i]
        inv = 1 / a[i][i]
        # елімінація
        for r in range(i+1, n):
            factor = a[r][i] * inv
            if factor != 0:
                for c in range(i, n):
                    a[r][c] -= factor * a[i][c]
    return det

def _sign(v) -> int:
    return (v > 0) - (v < 0)


class Side(Enum):
    """Положення точки відносно описаного кола."""
    INSIDE = 1
    ON_BOUNDARY = 0
    OUTSIDE = -1


class Predicates(ABC):
    """
    Стратегія геометричних предикатів. Сітка та вставка працюють лише через неї,
    тож float-реалізацію можна підмінити точною.
    """

    @abstractmethod
    def orientation(self, a: Pt, b: Pt, c: Pt) -> int:
        """+1: CCW, -1: CW, 0: колінеарні."""

    @abstractmethod
    def in_circumcircle(self, tri: Sequence[Pt], p: Pt) -> Side:
        """Положення p відносно описаного кола трикутника tri=(a, b, c)."""

    @abstractmethod
    def orientation_dir(self, a: Pt, b: Pt, d: Pt) -> int:
        """Орієнтація (a, b, нескінченно віддалена точка в напрямку d): sign((b - a) x d)."""

    @abstractmethod
    def dot_dir(self, a: Pt, p: Pt, d: Pt) -> int:
        """sign((p - a) . d)."""

    def collinear(self, points: Iterable[Pt]) -> bool:
        """Чи лежать усі точки на одній прямій (0, 1, 2 точки: так)."""
        pts = list(points)
        base = None
        for i in range(1, len(pts)):
            if pts[i] != pts[0]:
                base = (pts[0], pts[i])
                break
        if base is None:
            return True
        return all(self.orientation(base[0], base[1], q) == 0 for q in pts)


class FloatPredicates(Predicates):
    """
    Float-предикати з відносним допуском: якщо |det| <= eps * permanent,
    результат вважаємо нулем (колінеарні / на колі).
    """

    def __init__(self, eps: float = EPS):
        if not eps >= 0.0:
            raise ValueError("eps must be non-negative")
        self.eps = eps

    def orientation(self, a: Pt, b: Pt, c: Pt) -> int:
        l = (b.x - a.x)*(c.y - a.y)
        r = (b.y - a.y)*(c.x - a.x)
        det = l - r
        if abs(det) <= self.eps * (abs(l) + abs(r)):
            return 0
        return _sign(det)

    def in_circumcircle(self, tri: Sequence[Pt], p: Pt) -> Side:
        a, b, c = tri
        ori = self.orientation(a, b, c)
        if ori == 0:
            return Side.ON_BOUNDARY
        det = _incircle_raw(a, b, c, p)
        if abs(det) <= self.eps * _incircle_permanent(a, b, c, p):
            return Side.ON_BOUNDARY
        return Side(_sign(det) * ori)

    def orientation_dir(self, a: Pt, b: Pt, d: Pt) -> int:
        l = (b.x - a.x)*d.y
        r = (b.y - a.y)*d.x
        det = l - r
        if abs(det) <= self.eps * (abs(l) + abs(r)):
            return 0
        return _sign(det)

    def dot_dir(self, a: Pt, p: Pt, d: Pt) -> int:
        l = (p.x - a.x)*d.x
        r = (p.y - a.y)*d.y
        s = l + r
        if abs(s) <= self.eps * (abs(l) + abs(r)):
            return 0
        return _sign(s)

    def __repr__(self) -> str:
        return f"FloatPredicates(eps={self.eps!r})"


class ExactPredicates(Predicates):
    """
    Точні предикати: float-координати переводимо у Fraction без втрат
    і рахуємо знак детермінанта раціонально.
    """

    @staticmethod
    def _row(p: Pt, lifted: bool) -> list:
        x, y = Fraction(p.x), Fraction(p.y)
        if lifted:
            return [x, y, x*x + y*y, Fraction(1)]
        return [x, y, Fraction(1)]

    def orientation(self, a: Pt, b: Pt, c: Pt) -> int:
        return _sign(_det([self._row(q, False) for q in (a, b, c)]))

    def in_circumcircle(self, tri: Sequence[Pt], p: Pt) -> Side:
        a, b, c = tri
        ori = self.orientation(a, b, c)
        if ori == 0:
            return Side.ON_BOUNDARY
        s = _sign(_det([self._row(q, True) for q in (a, b, c, p)]))
        return Side(s * ori)

    def orientation_dir(self, a: Pt, b: Pt, d: Pt) -> int:
        ax, ay, bx, by = Fraction(a.x), Fraction(a.y), Fraction(b.x), Fraction(b.y)
        return _sign((bx - ax)*Fraction(d.y) - (by - ay)*Fraction(d.x))

    def dot_dir(self, a: Pt, p: Pt, d: Pt) -> int:
        ax, ay, px, py = Fraction(a.x), Fraction(a.y), Fraction(p.x), Fraction(p.y)
        return _sign((px - ax)*Fraction(d.x) + (py - ay)*Fraction(d.y))

    def __repr__(self) -> str:
        return "ExactPredicates()"


def default_predicates() -> Predicates:
    return FloatPredicates()
