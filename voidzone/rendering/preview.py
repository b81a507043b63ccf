"""
Void Preview Module
===================

Diagnostic image of one void query: occupancy, flood-filled region,
traced contour and seed, drawn at raster resolution (upscaled).

Design:
- Stateless rendering, no detection logic
- Configurable styles
- Uses supervision drawing utilities

Dependencies:
- supervision (draw utilities, Color, Rect)
- numpy (arrays)
"""

import numpy as np
import supervision as sv

from voidzone.detector import VoidAnalysis


class VoidPreview:
    """
    Stateless renderer for VoidAnalysis results.

    Usage:
        preview = VoidPreview(cell_size=3)
        image = preview.render(detector.analyze(zones, click))
        cv2.imwrite("void.png", image)
    """

    def __init__(
        self,
        cell_size: int = 3,
        background_color: sv.Color = sv.Color(r=24, g=24, b=24),
        occupied_color: sv.Color = sv.Color(r=110, g=110, b=110),
        region_color: sv.Color = sv.Color(r=40, g=90, b=200),
        contour_color: sv.Color = sv.Color(r=255, g=160, b=0),
        seed_color: sv.Color = sv.Color(r=255, g=40, b=40),
        thickness: int = 2,
        opacity: float = 0.35,
    ):
        """
        Initialize preview with style configuration.

        Args:
            cell_size: Output pixels per raster cell
            background_color: Free cells
            occupied_color: Cells covered by zones
            region_color: Cells of the flood-filled void
            contour_color: Traced polygon outline and fill
            seed_color: Seed cell marker
            thickness: Contour line thickness
            opacity: Contour fill opacity (0-1)
        """
        if cell_size < 1:
            raise ValueError(f"cell_size must be >= 1, got {cell_size}")
        self.cell_size = cell_size
        self.background_color = background_color
        self.occupied_color = occupied_color
        self.region_color = region_color
        self.contour_color = contour_color
        self.seed_color = seed_color
        self.thickness = thickness
        self.opacity = opacity

    def _upscale(self, mask: np.ndarray) -> np.ndarray:
        return np.repeat(np.repeat(mask, self.cell_size, axis=0), self.cell_size, axis=1)

    def render(self, analysis: VoidAnalysis) -> np.ndarray:
        """
        Draw one query.

        Args:
            analysis: Result of VoidDetector.analyze()

        Returns:
            BGR uint8 image of shape (rows * cell_size, cols * cell_size, 3)
        """
        grid = analysis.grid
        s = self.cell_size
        scene = np.zeros((grid.height * s, grid.width * s, 3), dtype=np.uint8)
        scene[:, :] = self.background_color.as_bgr()

        if analysis.surface is not None:
            scene[self._upscale(analysis.surface.occupied)] = self.occupied_color.as_bgr()

        if analysis.region is not None:
            scene[self._upscale(analysis.region.visited)] = self.region_color.as_bgr()

        if analysis.polyline is not None:
            polygon = np.round(analysis.polyline.points * s).astype(np.int32)
            scene = sv.draw_filled_polygon(
                scene=scene,
                polygon=polygon,
                color=self.contour_color,
                opacity=self.opacity,
            )
            scene = sv.draw_polygon(
                scene=scene,
                polygon=polygon,
                color=self.contour_color,
                thickness=self.thickness,
            )

        seed_x = analysis.view_point[0] * grid.scale_x
        seed_y = analysis.view_point[1] * grid.scale_y
        if 0 <= seed_x < grid.width and 0 <= seed_y < grid.height:
            scene = sv.draw_filled_rectangle(
                scene=scene,
                rect=sv.Rect(x=int(seed_x) * s, y=int(seed_y) * s, width=s, height=s),
                color=self.seed_color,
            )

        return scene
