from __future__ import annotations

from typing import List, Tuple

import matplotlib.pyplot as plt

from geometry.PointFloat import PointFloat
from transform.Matrix import Matrix

Box = Tuple[float, float, float, float]


class TransformPreview:
    """Before/after plot of a box mapped through a matrix."""

    @staticmethod
    def outline(m: Matrix, box: Box) -> List[PointFloat]:
        """Closed polygon of the box corners mapped through m."""
        x, y, w, h = box
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h), (x, y)]
        return [m.apply(c) for c in corners]

    @staticmethod
    def show(m: Matrix, box: Box) -> None:
        fig, ax = plt.subplots(figsize=(7, 7))
        before = TransformPreview.outline(Matrix(), box)
        after = TransformPreview.outline(m, box)
        ax.plot([p.x for p in before], [p.y for p in before], linewidth=1.0, label="original")
        ax.plot([p.x for p in after], [p.y for p in after], linewidth=1.5, label=m.to_svg())
        # mark the first corner to show orientation
        ax.plot([after[0].x], [after[0].y], "o")
        ax.set_xlabel("X (SVG units)")
        ax.set_ylabel("Y (SVG units)")
        ax.set_aspect("equal", adjustable="datalim")
        ax.invert_yaxis()
        grid = {"on": True}
        ax.grid(grid["on"])
        ax.legend()

        def on_key(event):
            if event.key == 'g':
                grid["on"] = not grid["on"]
                ax.grid(grid["on"])
                fig.canvas.draw_idle()

        fig.canvas.mpl_connect('key_press_event', on_key)
        plt.tight_layout()
        plt.show()
