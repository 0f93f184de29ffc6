# examples/main.py
from __future__ import annotations

import logging

from cg2d.pipeline import triangulate
from cg2d.hull import ConvexHull2D
from cg2d.mesh import Delaunay2D

from export import dump_svg


def main():
    logging.basicConfig(format="%(asctime)s %(levelname)s: %(message)s", datefmt="%H:%M:%S", level=logging.INFO)

    # --- 1) Вхідні дані ---
    # Можеш змінити на читання з файлу / рандом
    points = [
        (0, 0),
        (4, 0),
        (4, 3),
        (0, 3),
        (2, 1.5),
        (0.7, 2.2),
        (3.1, 0.4),
        (1.3, 0.6),
        (3.4, 2.5),
    ]

    # --- 2) Пайплайн: наш Bowyer–Watson і SciPy для звірки ---
    ours = triangulate(points)
    ref = triangulate(points, backend="scipy")

    print(f"Вершини:          {len(ours.points)}")
    print(f"Ребер оболонки:   {len(ours.hull)}")
    print(f"Трикутників:      {len(ours.triangles)} (SciPy: {len(ref.triangles)})")

    same = {frozenset(t) for t in ours.triangles} == {frozenset(t) for t in ref.triangles}
    print("Збіг із SciPy:", same)

    # --- 3) Площа = площа опуклої оболонки ---
    hull = ConvexHull2D(ours.points)
    print(f"Площа: {ours.area():.6f} (оболонка {hull.area():.6f})")

    # --- 4) Валідація сітки ---
    d = Delaunay2D.from_points(points)
    d.finalize()
    report = d.validate()
    print("VALIDATION:", report)

    # --- 5) triangulation.svg ---
    dump_svg("triangulation.svg", d.triangle_points(), d.bbox.enlarge(0.2))
    print("triangulation.svg записано.")


if __name__ == "__main__":
    main()
