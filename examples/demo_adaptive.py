# examples/demo_adaptive.py
# Адаптивне згущення: вставляємо центр найбільшого описаного кола, доки радіус > порогу.
import logging

import matplotlib.pyplot as plt

from cg2d.mesh import Delaunay2D
from cg2d.pipeline import MeshView, refine

MAX_RADIUS = 0.6


def circumcenter_of_largest(view: MeshView):
    best = None
    for tid in view.triangle_ids():
        c = view.circumcircle(tid)
        if view.bbox.contains(c.center) and (best is None or c.radius > best.radius):
            best = c
    if best is None or best.radius <= MAX_RADIUS:
        return None
    return (best.center.x, best.center.y)


if __name__ == "__main__":
    logging.basicConfig(format="%(asctime)s %(levelname)s: %(message)s", datefmt="%H:%M:%S", level=logging.INFO)

    d = Delaunay2D((0.0, 0.0, 6.0, 4.0))
    d.insert_many([(0, 0), (6, 0), (6, 4), (0, 4), (2.5, 1.7)])

    steps = refine(d, circumcenter_of_largest, max_steps=500)
    res = d.finalize()
    print("inserted:", len(steps), "triangles:", len(res.triangles))
    print("VALIDATION:", d.validate())

    pts, tris = res.to_arrays()
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.triplot(pts[:, 0], pts[:, 1], tris, linewidth=0.5)
    ax.plot(pts[:, 0], pts[:, 1], ".", markersize=2)
    ax.set_aspect("equal")
    ax.set_title("Adaptive circumcenter refinement")
    plt.show()
