# examples/gui.py
# Вікно для інкрементальної Делоне: випадкові точки, потім згущення по кроку.
from __future__ import annotations

import random
import tkinter as tk
from tkinter import ttk, messagebox

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from cg2d.errors import DelaunayError
from cg2d.mesh import Delaunay2D
from cg2d.pipeline import MeshView, refine


def largest_triangle_centroid(view: MeshView):
    tris = view.triangle_points()
    if not tris:
        return None
    a, b, c = max(tris, key=lambda t: abs((t[1].x - t[0].x) * (t[2].y - t[0].y)
                                          - (t[1].y - t[0].y) * (t[2].x - t[0].x)))
    return ((a.x + b.x + c.x) / 3.0, (a.y + b.y + c.y) / 3.0)


class DelaunayApp(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("Incremental Delaunay")
        self.d: Delaunay2D | None = None

        bar = ttk.Frame(self, padding=5)
        bar.pack(fill="x")
        ttk.Label(bar, text="Точок:").pack(side="left")
        self.n_var = tk.IntVar(value=20)
        ttk.Spinbox(bar, from_=3, to=2000, textvariable=self.n_var, width=6).pack(side="left", padx=4)
        ttk.Button(bar, text="Тріангулювати", command=self.on_build).pack(side="left", padx=4)
        ttk.Label(bar, text="Кроків:").pack(side="left")
        self.steps_var = tk.IntVar(value=10)
        ttk.Spinbox(bar, from_=1, to=1000, textvariable=self.steps_var, width=6).pack(side="left", padx=4)
        ttk.Button(bar, text="Згустити", command=self.on_refine).pack(side="left", padx=4)

        self.status = tk.StringVar(value="Немає сітки")
        ttk.Label(self, textvariable=self.status, padding=5).pack(fill="x")

        self.fig = Figure(figsize=(6, 5))
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, master=self)
        self.canvas.get_tk_widget().pack(fill="both", expand=True)

    def on_build(self):
        # кути квадрата + випадкові точки всередині
        pts = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
        pts += [(random.random(), random.random()) for _ in range(self.n_var.get())]
        try:
            self.d = Delaunay2D.from_points(pts)
        except DelaunayError as e:
            messagebox.showerror("Помилка", str(e))
            return
        self.redraw()

    def on_refine(self):
        if self.d is None:
            messagebox.showerror("Помилка", "Спершу побудуйте тріангуляцію.")
            return
        try:
            refine(self.d, largest_triangle_centroid, max_steps=self.steps_var.get())
        except DelaunayError as e:
            messagebox.showerror("Помилка", str(e))
        self.redraw()

    def redraw(self):
        d = self.d
        tris = d.triangles()
        report = d.validate()
        ok = not (report["bad_orientation"] or report["bad_edge_multiplicity"] or report["bad_delaunay"])
        self.status.set(f"Вершин: {d.vertex_count}, трикутників: {len(tris)}, "
                        f"валідація: {'OK' if ok else 'є проблеми'}")
        self.ax.clear()
        xs = [p.x for p in d.points]
        ys = [p.y for p in d.points]
        if tris:
            self.ax.triplot(xs, ys, tris, linewidth=0.5, color="black")
        self.ax.plot(xs, ys, ".", markersize=3)
        self.ax.set_aspect("equal")
        self.canvas.draw()


if __name__ == "__main__":
    DelaunayApp().mainloop()
