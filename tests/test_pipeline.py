import random

import pytest

from cg2d.errors import DegenerateInputError, OutOfDomainError
from cg2d.geom import Pt, dist, triangle_area
from cg2d.mesh import Delaunay2D
from cg2d.pipeline import MeshView, refine, triangulate

from conftest import delaunay_violations, random_points, tri_set


def assert_delaunay(d: Delaunay2D) -> None:
    report = d.validate()
    assert report["bad_orientation"] == []
    assert report["bad_edge_multiplicity"] == []
    assert report["bad_delaunay"] == []


# ---------- eager pipeline ----------

def test_internal_matches_scipy(cloud):
    ours = triangulate(cloud)
    ref = triangulate(cloud, backend="scipy")
    assert ours.points == ref.points
    assert tri_set(ours.triangles) == tri_set(ref.triangles)
    assert set(ours.hull) == set(ref.hull)


def test_scipy_backend_orients_triangles(cloud):
    ref = triangulate(cloud, backend="SciPy")
    for t in ref.triangles:
        assert triangle_area(*(ref.points[i] for i in t)) > 0
    assert delaunay_violations(ref.points, ref.triangles) == []


def test_triangulate_drops_duplicates(square):
    res = triangulate(square + [(0.0, 0.0), (1.0, 1.0)])
    assert len(res.points) == 4
    assert len(res.triangles) == 2


@pytest.mark.parametrize("backend", ["internal", "scipy"])
def test_collinear_input(backend):
    with pytest.raises(DegenerateInputError):
        triangulate([(0, 0), (1, 0), (2, 0)], backend=backend)


def test_unknown_backend(square):
    with pytest.raises(ValueError):
        triangulate(square, backend="qhull3d")


# ---------- адаптивна вставка ----------

def circumcenter_driver(d: Delaunay2D, queue: list, min_gap: float = 1e-6):
    """Драйвер: бере точки з черги, пропускаючи ті, що надто близько до вершин."""
    def driver(view: MeshView):
        # між кроками сітка повністю узгоджена
        assert_delaunay(d)
        while queue:
            p = queue.pop(0)
            if not view.bbox.contains(p):
                continue
            if min(dist(p, q) for q in view.points) < min_gap:
                continue
            return (p.x, p.y)
        return None
    return driver


def test_circumcenter_refinement():
    d = Delaunay2D((-5.0, -5.0, 10.0, 10.0))
    d.insert_many([(0.0, 0.0), (4.0, 0.3), (1.2, 3.1)])
    start = len(d.triangles())
    assert start == 1

    for _ in range(3):
        view = MeshView(d)
        queue = [view.circumcircle(tid).center for tid in view.triangle_ids()]
        refine(d, circumcenter_driver(d, queue))
        assert_delaunay(d)

    assert len(d.triangles()) > start
    res = d.finalize()
    assert delaunay_violations(res.points, res.triangles) == []


def test_recursive_centroid_refinement():
    """Вставка центроїда найбільшого трикутника, як у рекурсивній тріангуляції."""
    corners = [(0.0, 0.0), (8.0, 0.0), (8.0, 6.0), (0.0, 6.0)]
    d = Delaunay2D.from_points(corners)

    def largest_centroid(view: MeshView):
        a, b, c = max(view.triangle_points(), key=lambda t: triangle_area(*t))
        return ((a.x + b.x + c.x) / 3.0, (a.y + b.y + c.y) / 3.0)

    inserted = refine(d, largest_centroid, max_steps=40)
    assert len(inserted) == 40
    assert d.vertex_count == 44
    assert d.area() == pytest.approx(48.0)
    assert_delaunay(d)
    # трикутники дрібнішають
    assert max(triangle_area(*t) for t in d.triangle_points()) < 48.0 / 4


def test_refine_stops_when_driver_returns_none(square):
    d = Delaunay2D.from_points(square)
    before = d.triangles(include_super=True)
    assert refine(d, lambda view: None) == []
    assert d.triangles(include_super=True) == before


def test_refine_max_steps():
    rng = random.Random(5)
    d = Delaunay2D((0.0, 0.0, 1.0, 1.0))
    calls = []

    def driver(view):
        calls.append(view.vertex_count)
        return (rng.random(), rng.random())

    assert len(refine(d, driver, max_steps=5)) == 5
    assert calls == [0, 1, 2, 3, 4]
    assert d.vertex_count == 5
    assert refine(d, driver, max_steps=0) == []
    with pytest.raises(ValueError):
        refine(d, driver, max_steps=-1)


def test_refine_propagates_insertion_errors():
    d = Delaunay2D((0.0, 0.0, 1.0, 1.0))
    points = [(0.1, 0.1), (0.9, 0.2), (1e9, 1e9), (0.5, 0.5)]

    with pytest.raises(OutOfDomainError):
        refine(d, lambda view: points[view.vertex_count])
    # дві вставки пройшли, третя відхилена без змін
    assert d.vertex_count == 2
    assert_delaunay(d)


def test_mesh_view_is_read_only(square):
    d = Delaunay2D.from_points(square)
    view = MeshView(d)
    assert not hasattr(view, "insert")
    assert not hasattr(view, "finalize")
    with pytest.raises(AttributeError):
        view.mesh = None

    assert view.vertex_count == 4
    assert view.point(0) == Pt(0.0, 0.0)
    assert len(view.triangles()) == 2
    assert len(view.hull_edges()) == 4
    assert len(view.edges()) == 5
    assert view.area() == pytest.approx(1.0)
    tid = view.locate((0.25, 0.25))
    assert tid in view.triangle_ids()
    assert len(view.neighbors(tid)) == 3
    assert view.triangle(tid) == d.triangle(tid)
    assert view.edge_length(0, 1) == pytest.approx(1.0)
    assert view.interpolate((0.5, 0.5), [1.0, 1.0, 1.0, 1.0]) == pytest.approx(1.0)


def test_points_fed_in_batches_match_eager():
    pts = random_points(9, n=30)
    eager = triangulate(pts)
    d = Delaunay2D((0.0, 0.0, 10.0, 10.0))
    d.insert_many(pts[:10])
    d.insert_many(pts[10:])
    assert tri_set(d.finalize().triangles) == tri_set(eager.triangles)
