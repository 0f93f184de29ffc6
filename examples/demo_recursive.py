# examples/demo_recursive.py
# Рекурсивна тріангуляція: наступна точка: центроїд найбільшого трикутника.
import logging
import random

from cg2d.geom import Bbox, Pt
from cg2d.mesh import Delaunay2D
from cg2d.pipeline import MeshView, refine

from export import dump_svg


def largest_triangle_centroid(view: MeshView):
    tris = view.triangle_points()
    if not tris:
        return None

    def bbox_area(t):
        return round(Bbox.of(t).area())

    a, b, c = max(tris, key=bbox_area)
    return ((a.x + b.x + c.x) / 3.0, (a.y + b.y + c.y) / 3.0)


if __name__ == "__main__":
    logging.basicConfig(format="%(asctime)s %(levelname)s: %(message)s", datefmt="%H:%M:%S", level=logging.INFO)
    rng = random.Random()

    bbox = Bbox(0.0, 0.0, 1920.0, 1080.0)
    d = Delaunay2D(bbox)

    for _ in range(rng.randint(2, 6)):
        for _ in range(4):
            d.insert((float(rng.randint(0, 1919)), float(rng.randint(0, 1079))))
        refine(d, largest_triangle_centroid, max_steps=rng.randint(10, 999))

    print("vertices:", d.vertex_count)
    print("triangles:", len(d.triangles()))
    dump_svg("recursive-triangulation.svg", d.triangle_points(), bbox)
    print("Wrote recursive-triangulation.svg")
