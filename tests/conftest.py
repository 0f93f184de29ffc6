import random
from collections import Counter

import pytest

from cg2d.mesh import ekey
from cg2d.predicates import incircle


def random_points(seed: int, n: int = 60, size: float = 10.0):
    rng = random.Random(seed)
    return [(rng.uniform(0.0, size), rng.uniform(0.0, size)) for _ in range(n)]


def edge_counts(triangles):
    cnt = Counter()
    for a, b, c in triangles:
        for u, v in ((a, b), (b, c), (c, a)):
            cnt[ekey(u, v)] += 1
    return cnt


def delaunay_violations(points, triangles, tol=1e-9):
    """(tri, vertex) пари, де вершина строго всередині описаного кола."""
    out = []
    for t in triangles:
        a, b, c = (points[i] for i in t)
        for vi, v in enumerate(points):
            if vi in t:
                continue
            if incircle(a, b, c, v) > tol:
                out.append((t, vi))
    return out


def tri_set(triangles):
    return {frozenset(t) for t in triangles}


@pytest.fixture(params=[1, 7, 42])
def cloud(request):
    return random_points(request.param)


@pytest.fixture
def square():
    return [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
